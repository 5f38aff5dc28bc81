from abc import ABC, abstractmethod
from typing import List, Optional
from .domain import FallbackQuestion


class FallbackQuestionRepository(ABC):
    """
    Abstract Interface for the Fallback Question Bank storage.
    """

    @abstractmethod
    def save(self, question: FallbackQuestion) -> None:
        """Save a question (create or update)."""
        pass

    @abstractmethod
    def find_by_id(self, question_id: str) -> Optional[FallbackQuestion]:
        """Find a question by ID, regardless of status."""
        pass

    @abstractmethod
    def find_all_active(self) -> List[FallbackQuestion]:
        """Find all ACTIVE questions in bank order."""
        pass

    @abstractmethod
    def delete(self, question_id: str) -> bool:
        """Soft delete a question by ID."""
        pass
