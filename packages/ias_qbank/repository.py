import json
import os
from typing import Dict, List, Optional
from packages.ias_core.logging import get_logger
from .data import FALLBACK_QUESTIONS
from .domain import FallbackQuestion, SourceType
from .repository_interface import FallbackQuestionRepository

logger = get_logger("ias_qbank.repository")


class InMemoryFallbackRepository(FallbackQuestionRepository):
    """
    Dict-backed bank, seeded with the built-in fallback table by default.
    Insertion order is bank order.
    """

    def __init__(self, seed: Optional[List[dict]] = None):
        self._questions: Dict[str, FallbackQuestion] = {}
        for item in (FALLBACK_QUESTIONS if seed is None else seed):
            q = FallbackQuestion.from_dict(item)
            self._questions[q.id] = q

    def save(self, question: FallbackQuestion) -> None:
        self._questions[question.id] = question

    def find_by_id(self, question_id: str) -> Optional[FallbackQuestion]:
        return self._questions.get(question_id)

    def find_all_active(self) -> List[FallbackQuestion]:
        return [q for q in self._questions.values() if q.is_active()]

    def delete(self, question_id: str) -> bool:
        q = self._questions.get(question_id)
        if q is None:
            logger.warning(f"Attempted to delete non-existent question {question_id}.")
            return False
        q.mark_deleted()  # Soft Delete
        return True


class JsonFileFallbackRepository(FallbackQuestionRepository):
    """
    File-based bank using a single JSON list, for operators who replace the
    built-in table. Entries use the same fields as the built-in data.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._ensure_file_exists()

    def _ensure_file_exists(self):
        if not os.path.exists(self.file_path):
            directory = os.path.dirname(self.file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump([], f)

    def _load_all(self) -> List[FallbackQuestion]:
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load fallback questions from {self.file_path}: {e}")
            return []

        questions = []
        for item in data:
            try:
                questions.append(FallbackQuestion.from_dict(item, source_type=SourceType.FILE))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed fallback entry in {self.file_path}: {e}")
        return questions

    def _save_all(self, questions: List[FallbackQuestion]):
        data = [q.to_dict() for q in questions]
        try:
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save fallback questions to {self.file_path}: {e}")
            raise

    def save(self, question: FallbackQuestion) -> None:
        questions = self._load_all()
        for i, q in enumerate(questions):
            if q.id == question.id:
                questions[i] = question
                self._save_all(questions)
                logger.info(f"Updated fallback question {question.id}.")
                return

        questions.append(question)
        self._save_all(questions)
        logger.info(f"Saved new fallback question {question.id}.")

    def find_by_id(self, question_id: str) -> Optional[FallbackQuestion]:
        for q in self._load_all():
            if q.id == question_id:
                return q
        return None

    def find_all_active(self) -> List[FallbackQuestion]:
        return [q for q in self._load_all() if q.is_active()]

    def delete(self, question_id: str) -> bool:
        questions = self._load_all()
        for q in questions:
            if q.id == question_id:
                q.mark_deleted()  # Soft Delete
                self._save_all(questions)
                logger.info(f"Soft deleted fallback question {question_id}.")
                return True
        logger.warning(f"Attempted to delete non-existent question {question_id}.")
        return False
