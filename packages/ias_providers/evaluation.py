from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List

from packages.ias_core.dto import BaseDTO
from packages.ias_session.dto import Question


class EvaluationRequest(BaseDTO):
    """
    Input handed to the answer evaluation collaborator.
    """
    session_type: str
    position: str
    question: Question
    answer: str
    time_spent: float
    job_requirements: Optional[List[str]] = None
    role_competencies: Optional[List[str]] = None


class EvaluationOutcome:
    """
    payload: raw evaluation fields as produced by the evaluator (score, feedback,
    strengths, weaknesses, suggestions, analysis, job_fit_score, ...).
    The engine normalizes and clamps it; nothing here is trusted.
    """
    def __init__(self, payload: Dict[str, Any], success: bool, error: Optional[str] = None):
        self.payload = payload
        self.success = success
        self.error = error


class AnswerEvaluator(ABC):
    @abstractmethod
    def evaluate_answer(self, request: EvaluationRequest) -> EvaluationOutcome:
        """
        Evaluate one answer.
        Must return success=False on failure, never raise exception.
        """
        pass
