import unittest

from packages.ias_core.errors import (
    FinalizedSessionError,
    SessionNotActiveError,
    ValidationError,
)
from packages.ias_session.dto import SessionConfig
from packages.ias_session.lifecycle import SessionLifecycle
from packages.ias_session.state import SessionStatus, SessionType, Difficulty


def valid_config(**overrides):
    data = {
        "type": "technical",
        "industry": "Technology",
        "position": "Software Engineer",
        "difficulty": "easy",
        "total_questions": 3,
    }
    data.update(overrides)
    return data


class TestSessionCreation(unittest.TestCase):
    def setUp(self):
        self.lifecycle = SessionLifecycle()

    def test_create_from_dict(self):
        session = self.lifecycle.create(valid_config())
        self.assertEqual(session.status, SessionStatus.ACTIVE)
        self.assertEqual(session.type, SessionType.TECHNICAL)
        self.assertEqual(session.difficulty, Difficulty.EASY)
        self.assertEqual(session.current_question_index, 0)
        self.assertEqual(session.questions, [])
        self.assertEqual(session.answers, [])
        self.assertEqual(session.total_score, 0)
        self.assertEqual(session.max_possible_score, 0)
        self.assertIsNone(session.end_time)
        self.assertTrue(session.id.startswith("session_"))

    def test_create_from_config_object(self):
        config = SessionConfig(**valid_config(type="job-specific", job_requirements=["Python"]))
        session = self.lifecycle.create(config)
        self.assertEqual(session.type, SessionType.JOB_SPECIFIC)
        self.assertEqual(session.job_requirements, ["Python"])

    def test_every_violated_field_is_listed(self):
        bad = {
            "type": "trivia",
            "industry": "",
            "position": "   ",
            "difficulty": "extreme",
            "total_questions": 0,
        }
        with self.assertRaises(ValidationError) as ctx:
            self.lifecycle.create(bad)

        errors = ctx.exception.errors
        self.assertEqual(ctx.exception.details["errors"], errors)
        for field in ("type", "industry", "position", "difficulty", "total_questions"):
            self.assertTrue(
                any(e.startswith(f"{field}:") for e in errors),
                f"{field} missing from {errors}"
            )

    def test_total_questions_upper_bound(self):
        with self.assertRaises(ValidationError):
            self.lifecycle.create(valid_config(total_questions=21))
        session = self.lifecycle.create(valid_config(total_questions=20))
        self.assertEqual(session.total_questions, 20)

    def test_missing_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            self.lifecycle.create({"type": "technical"})
        fields = {e.split(":")[0] for e in ctx.exception.errors}
        self.assertEqual(fields, {"industry", "position", "difficulty"})


class TestSessionTransitions(unittest.TestCase):
    def setUp(self):
        self.lifecycle = SessionLifecycle()
        self.session = self.lifecycle.create(valid_config())

    def test_pause_and_resume(self):
        self.assertTrue(self.lifecycle.pause(self.session))
        self.assertEqual(self.session.status, SessionStatus.PAUSED)
        self.assertFalse(self.lifecycle.pause(self.session))

        self.assertTrue(self.lifecycle.resume(self.session))
        self.assertEqual(self.session.status, SessionStatus.ACTIVE)
        self.assertFalse(self.lifecycle.resume(self.session))

    def test_pause_does_not_touch_questions_or_answers(self):
        before = self.session.model_dump_json(include={"questions", "answers", "current_question_index"})
        self.lifecycle.pause(self.session)
        self.lifecycle.resume(self.session)
        after = self.session.model_dump_json(include={"questions", "answers", "current_question_index"})
        self.assertEqual(before, after)

    def test_ensure_mutable(self):
        self.lifecycle.ensure_mutable(self.session)

        self.lifecycle.pause(self.session)
        with self.assertRaises(SessionNotActiveError):
            self.lifecycle.ensure_mutable(self.session)

        self.lifecycle.resume(self.session)
        self.lifecycle.complete(self.session)
        with self.assertRaises(FinalizedSessionError):
            self.lifecycle.ensure_mutable(self.session)

    def test_completed_is_terminal(self):
        self.lifecycle.complete(self.session)
        end_time = self.session.end_time
        self.assertIsNotNone(end_time)

        self.assertFalse(self.lifecycle.pause(self.session))
        self.assertFalse(self.lifecycle.resume(self.session))
        self.lifecycle.complete(self.session)
        self.assertEqual(self.session.status, SessionStatus.COMPLETED)
        self.assertEqual(self.session.end_time, end_time)


if __name__ == "__main__":
    unittest.main()
