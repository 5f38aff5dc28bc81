import unittest

from packages.ias_core.errors import ResultsNotReadyError
from packages.ias_report.engine import ResultsComposer, mean_of_present, percentage_of, round_half_up
from packages.ias_report.mapping import GradeMapper
from packages.ias_session.dto import Answer, Evaluation, Question
from packages.ias_session.lifecycle import SessionLifecycle


def build_session(rows, session_type="mixed", **config):
    """rows: (category, topic, score, max_score, extra evaluation fields)"""
    lifecycle = SessionLifecycle()
    data = {
        "type": session_type,
        "industry": "Technology",
        "position": "Software Engineer",
        "difficulty": "medium",
        "total_questions": len(rows),
    }
    data.update(config)
    session = lifecycle.create(data)

    for i, (category, topic, score, max_score, extra) in enumerate(rows):
        q = Question(
            question_code=f"GEN_{i}",
            category=category,
            difficulty="medium",
            text=f"Question {i}",
            time_limit=60,
            max_score=max_score,
            topic=topic,
        )
        session.questions.append(q)
        session.current_question_index += 1
        session.answers.append(Answer(question_id=q.id, question_code=q.question_code, text="a", time_spent=5))
        session.evaluations.append(Evaluation(score=score, max_score=max_score, **extra))
        session.max_possible_score += max_score
        session.total_score += score

    lifecycle.complete(session)
    return session


class TestGrades(unittest.TestCase):
    def test_boundaries(self):
        self.assertEqual(GradeMapper.get_grade(100), "A+")
        self.assertEqual(GradeMapper.get_grade(90), "A+")
        self.assertEqual(GradeMapper.get_grade(89), "A")
        self.assertEqual(GradeMapper.get_grade(50), "C-")
        self.assertEqual(GradeMapper.get_grade(49), "F")
        self.assertEqual(GradeMapper.get_grade(0), "F")

    def test_ladder_is_contiguous(self):
        expected = ["A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-"]
        for step, grade in enumerate(expected):
            upper = 90 - step * 5
            self.assertEqual(GradeMapper.get_grade(upper), grade)
            self.assertEqual(GradeMapper.get_grade(upper + 4), "A+" if step == 0 else expected[step])

    def test_performance_labels(self):
        self.assertEqual(GradeMapper.get_performance_label(80), "Excellent")
        self.assertEqual(GradeMapper.get_performance_label(65), "Good")
        self.assertEqual(GradeMapper.get_performance_label(50), "Fair")
        self.assertEqual(GradeMapper.get_performance_label(49), "Needs Improvement")

    def test_job_fit_analysis(self):
        self.assertIsNone(GradeMapper.get_job_fit_analysis(None))
        self.assertEqual(GradeMapper.get_job_fit_analysis(7.25), "Job Fit Score: 7.2/10 - Excellent match")
        self.assertTrue(GradeMapper.get_job_fit_analysis(4).endswith("Needs alignment"))


class TestRounding(unittest.TestCase):
    def test_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(66.4), 66)

    def test_percentage(self):
        self.assertEqual(percentage_of(2, 3), 67)
        self.assertEqual(percentage_of(1, 8), 13)
        self.assertEqual(percentage_of(5, 0), 0)

    def test_mean_of_present(self):
        self.assertIsNone(mean_of_present([None, None]))
        self.assertEqual(mean_of_present([6, None, 8]), 7)


class TestResultsComposer(unittest.TestCase):
    def test_not_ready_until_completed(self):
        session = SessionLifecycle().create({
            "type": "technical",
            "industry": "Technology",
            "position": "Software Engineer",
            "difficulty": "easy",
            "total_questions": 3,
        })
        with self.assertRaises(ResultsNotReadyError):
            ResultsComposer.compose(session)

    def test_perfect_session(self):
        session = build_session([("technical", "algorithms", 10, 10, {})] * 3, session_type="technical")
        bundle = ResultsComposer.compose(session)
        self.assertEqual(bundle.percentage, 100)
        self.assertEqual(bundle.grade, "A+")
        self.assertEqual(bundle.questions_answered, 3)
        self.assertTrue(bundle.summary.startswith("Excellent performance!"))
        self.assertIsNone(bundle.job_fit_score)

    def test_category_breakdown(self):
        session = build_session([
            ("technical", "algorithms", 8, 10, {}),
            ("behavioral", "teamwork", 4, 10, {}),
            ("technical", "databases", 6, 10, {}),
        ])
        bundle = ResultsComposer.compose(session)

        technical = bundle.category_breakdown["technical"]
        self.assertEqual(technical.questions, 2)
        self.assertEqual(technical.total_score, 14)
        self.assertEqual(technical.average_score, 7)
        self.assertEqual(technical.percentage, 70)
        self.assertEqual(technical.performance, "Good")
        self.assertEqual(bundle.category_breakdown["behavioral"].performance, "Needs Improvement")
        self.assertEqual(bundle.category_scores, {"technical": 7, "behavioral": 4})
        self.assertEqual(set(bundle.topic_breakdown), {"algorithms", "teamwork", "databases"})
        self.assertEqual(bundle.percentage, 60)
        self.assertEqual(bundle.grade, "C+")

    def test_topic_defaults_to_general(self):
        bundle = ResultsComposer.compose(build_session([("technical", None, 5, 10, {})]))
        self.assertEqual(list(bundle.topic_breakdown), ["general"])

    def test_secondary_scores_average_present_values(self):
        session = build_session([
            ("technical", "a", 7, 10, {"job_fit_score": 6}),
            ("technical", "b", 7, 10, {"job_fit_score": 9}),
            ("behavioral", "c", 7, 10, {}),
        ], session_type="job-specific")
        bundle = ResultsComposer.compose(session)
        self.assertEqual(bundle.job_fit_score, 7.5)
        self.assertIsNone(bundle.role_competency_score)
        self.assertEqual(bundle.job_fit_analysis, "Job Fit Score: 7.5/10 - Excellent match")

    def test_feedback_is_ranked_and_capped(self):
        rows = []
        for i in range(4):
            strengths = ["Clear"] + [f"Strength {i}-{j}" for j in range(3)]
            rows.append(("technical", "a", 5, 10, {"strengths": strengths, "weaknesses": ["Vague"]}))
        bundle = ResultsComposer.compose(build_session(rows))
        self.assertEqual(len(bundle.strengths), 5)
        self.assertEqual(bundle.strengths[0], "Clear")
        self.assertEqual(bundle.areas_for_improvement, ["Vague"])

    def test_degraded_evaluations_are_counted(self):
        session = build_session([
            ("technical", "a", 5, 10, {"degraded": True}),
            ("technical", "b", 9, 10, {}),
        ])
        self.assertEqual(ResultsComposer.compose(session).degraded_evaluations, 1)

    def test_certificate(self):
        session = build_session([("technical", "a", 9, 10, {})], candidate_name="Ada")
        bundle = ResultsComposer.compose(session)
        cert = ResultsComposer.to_certificate(bundle)
        self.assertEqual(cert.candidate_name, "Ada")
        self.assertEqual(cert.grade, "A+")
        self.assertEqual(cert.date, session.end_time)


if __name__ == "__main__":
    unittest.main()
