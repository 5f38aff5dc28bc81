import json
import os
import tempfile
import unittest

from packages.ias_qbank import (
    FallbackQuestionBank,
    InMemoryFallbackRepository,
    JsonFileFallbackRepository,
    QuestionStatus,
    SourceType,
)
from packages.ias_session.lifecycle import SessionLifecycle
from packages.ias_session.state import QuestionSource


class TestFallbackLookup(unittest.TestCase):
    def setUp(self):
        self.repo = InMemoryFallbackRepository()
        self.bank = FallbackQuestionBank(self.repo)

    def test_lookup_tags_code(self):
        q = self.bank.lookup("Software Engineer", "technical", "easy")
        self.assertIsNotNone(q)
        self.assertEqual(q.question_code, "FB_FALLBACK_1")
        self.assertEqual(q.source, QuestionSource.FALLBACK)
        self.assertEqual(q.time_limit, 180)
        self.assertEqual(q.max_score, 10)
        self.assertIn("hoisting", q.expected_keywords)

    def test_each_delivery_gets_its_own_id(self):
        a = self.bank.lookup("Software Engineer", "technical", "easy")
        b = self.bank.lookup("Software Engineer", "technical", "easy")
        self.assertEqual(a.question_code, b.question_code)
        self.assertNotEqual(a.id, b.id)

    def test_prefers_unused_questions(self):
        first = self.bank.lookup("Software Engineer", "technical", "easy")
        second = self.bank.lookup("Software Engineer", "technical", "easy", used_texts=[first.text])
        self.assertEqual(second.question_code, "FB_FALLBACK_2")

    def test_cycles_when_all_used(self):
        texts = [q.text for q in self.bank.get_candidates("Software Engineer", "technical", "easy")]
        self.assertEqual(len(texts), 2)
        again = self.bank.lookup("Software Engineer", "technical", "easy", used_texts=texts)
        self.assertEqual(again.question_code, "FB_FALLBACK_1")

    def test_missing_key_returns_none(self):
        self.assertIsNone(self.bank.lookup("Chef", "technical", "easy"))
        self.assertIsNone(self.bank.lookup("Data Scientist", "technical", "hard"))
        self.assertIsNone(self.bank.lookup("Software Engineer", "problem-solving", "easy"))

    def test_soft_deleted_entries_are_skipped(self):
        self.assertTrue(self.repo.delete("fallback_3"))
        self.assertIsNone(self.bank.lookup("Software Engineer", "technical", "medium"))
        self.assertEqual(self.repo.find_by_id("fallback_3").status, QuestionStatus.DELETED)
        self.assertFalse(self.repo.delete("missing"))


class TestScriptedQuestions(unittest.TestCase):
    def setUp(self):
        self.bank = FallbackQuestionBank(InMemoryFallbackRepository())
        self.session = SessionLifecycle().create({
            "type": "mixed",
            "industry": "Financial Services",
            "position": "Data Scientist",
            "difficulty": "medium",
            "total_questions": 5,
            "candidate_name": "Sam",
        })

    def test_intro_question(self):
        q = self.bank.intro_question(self.session)
        self.assertEqual(q.question_code, "PERS_DATA-SCIENTIST_FINANCIAL-SERVICES")
        self.assertEqual(q.category, "personalized")
        self.assertEqual(q.source, QuestionSource.SCRIPTED)
        self.assertTrue(q.text.startswith("Hi Sam,"))

    def test_intro_without_name(self):
        self.session.candidate_name = None
        self.assertTrue(self.bank.intro_question(self.session).text.startswith("Hi candidate,"))

    def test_salary_question(self):
        q = self.bank.salary_question(self.session)
        self.assertEqual(q.question_code, "SALARY_DATA-SCIENTIST_FINANCIAL-SERVICES")
        self.assertEqual(q.category, "salary")
        self.assertIn("Data Scientist", q.text)


class TestCompetencyProfiles(unittest.TestCase):
    def setUp(self):
        self.bank = FallbackQuestionBank(InMemoryFallbackRepository())

    def test_known_role(self):
        senior = self.bank.competencies_for("Data Scientist", "senior")
        self.assertIn("MLOps and model lifecycle", senior)

    def test_level_defaults_to_mid(self):
        self.assertEqual(
            self.bank.competencies_for("UX Designer", None),
            self.bank.competencies_for("UX Designer", "mid")
        )

    def test_unknown_role(self):
        self.assertIsNone(self.bank.competencies_for("Astronaut", "entry"))


class TestJsonFileRepository(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "bank", "fallback.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_creates_empty_file(self):
        repo = JsonFileFallbackRepository(self.path)
        self.assertTrue(os.path.exists(self.path))
        self.assertEqual(repo.find_all_active(), [])

    def test_loads_entries_and_skips_malformed(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([
                {
                    "id": "chef_1",
                    "position": "Chef",
                    "category": "technical",
                    "difficulty": "easy",
                    "text": "How do you keep a kitchen station organised?",
                    "expected_keywords": ["mise en place"],
                    "time_limit": 120,
                    "max_score": 5,
                },
                {"id": "broken"},
            ], f)

        repo = JsonFileFallbackRepository(self.path)
        active = repo.find_all_active()
        self.assertEqual(len(active), 1)
        self.assertEqual(active[0].source_type, SourceType.FILE)

        bank = FallbackQuestionBank(repo)
        q = bank.lookup("Chef", "technical", "easy")
        self.assertEqual(q.question_code, "FB_CHEF_1")
        self.assertEqual(q.max_score, 5)

    def test_soft_delete_persists(self):
        repo = JsonFileFallbackRepository(self.path)
        memory = InMemoryFallbackRepository()
        repo.save(memory.find_by_id("fallback_1"))
        self.assertTrue(repo.delete("fallback_1"))

        reloaded = JsonFileFallbackRepository(self.path)
        self.assertEqual(reloaded.find_all_active(), [])
        self.assertEqual(reloaded.find_by_id("fallback_1").status, QuestionStatus.DELETED)


if __name__ == "__main__":
    unittest.main()
