import time
import threading
from typing import Iterable, Optional

from .evaluation import AnswerEvaluator, EvaluationOutcome, EvaluationRequest


class MockAnswerEvaluator(AnswerEvaluator):
    """
    Keyword-matching evaluator for development and tests.
    fixed_score forces the score; fail_on_calls holds 1-based call numbers
    that should fail.
    """
    def __init__(
        self,
        should_fail: bool = False,
        latency: float = 0.0,
        fail_on_calls: Optional[Iterable[int]] = None,
        fixed_score: Optional[float] = None,
        job_fit_score: Optional[float] = None,
        role_competency_score: Optional[float] = None
    ):
        self.should_fail = should_fail
        self.latency = latency
        self.fail_on_calls = set(fail_on_calls or [])
        self.fixed_score = fixed_score
        self.job_fit_score = job_fit_score
        self.role_competency_score = role_competency_score
        self.calls = 0
        self._lock = threading.Lock()

    def evaluate_answer(self, request: EvaluationRequest) -> EvaluationOutcome:
        with self._lock:
            self.calls += 1
            call_no = self.calls

        if self.latency > 0:
            time.sleep(self.latency)

        if self.should_fail or call_no in self.fail_on_calls:
            return EvaluationOutcome({}, False, "Mock Failure: Intentional Error")

        question = request.question
        answer = request.answer.lower()
        keywords = question.expected_keywords
        matched = [k for k in keywords if k.lower() in answer]

        if self.fixed_score is not None:
            score = self.fixed_score
        elif keywords:
            score = round(question.max_score * (0.4 + 0.6 * len(matched) / len(keywords)))
        else:
            score = round(question.max_score * 0.5)

        sub_score = round(score / question.max_score * 10, 1)
        payload = {
            "score": score,
            "feedback": f"Matched {len(matched)} of {len(keywords)} expected keywords.",
            "strengths": [f"Mentioned {k}" for k in matched],
            "weaknesses": [f"Did not cover {k}" for k in keywords if k not in matched],
            "suggestions": ["Support claims with a concrete example"],
            "analysis": {
                "technical_accuracy": sub_score,
                "communication_skills": sub_score,
                "problem_solving": sub_score,
                "confidence": sub_score,
                "relevance": sub_score,
            },
        }
        if self.job_fit_score is not None:
            payload["job_fit_score"] = self.job_fit_score
        if self.role_competency_score is not None:
            payload["role_competency_score"] = self.role_competency_score
        return EvaluationOutcome(payload=payload, success=True)
