from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List
from pydantic import Field

from packages.ias_core.dto import BaseDTO


class QuestionRequest(BaseDTO):
    """
    Input handed to the question generation collaborator.
    """
    session_type: str
    category: str
    industry: str
    position: str
    difficulty: str
    previous_question_codes: List[str] = Field(default_factory=list, description="Last 3 delivered codes")
    job_requirements: Optional[List[str]] = None
    role_competencies: Optional[List[str]] = None
    topic: Optional[str] = None
    depth: Optional[str] = None
    experience_level: Optional[str] = None


class QuestionGenerationResult:
    """
    payload: raw question fields (text, category, difficulty, expected_keywords,
    time_limit, max_score, topic, depth, context, question_code).
    """
    def __init__(self, payload: Dict[str, Any], metadata: Dict[str, Any], success: bool, error: Optional[str] = None):
        self.payload = payload
        self.metadata = metadata
        self.success = success
        self.error = error


class QuestionGenerator(ABC):
    @abstractmethod
    def generate_question(self, request: QuestionRequest) -> QuestionGenerationResult:
        """
        Generate a question based on the request.
        Must return success=False on failure, never raise exception.
        """
        pass
