from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any


class SourceType(str, Enum):
    """
    Source of a bank entry.
    """
    BUILT_IN = "BUILT_IN"
    FILE = "FILE"


class QuestionStatus(str, Enum):
    """
    Status of the question in the bank.
    """
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"  # Soft Deleted


@dataclass
class FallbackQuestion:
    """
    Stand-in question served when generation fails.
    Keyed by (position, category, difficulty).
    """
    id: str
    position: str
    category: str
    difficulty: str  # easy, medium, hard
    text: str
    expected_keywords: List[str] = field(default_factory=list)
    sample_answers: List[str] = field(default_factory=list)
    time_limit: int = 240
    max_score: float = 10

    source_type: SourceType = SourceType.BUILT_IN
    status: QuestionStatus = QuestionStatus.ACTIVE
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def code(self) -> str:
        """Stable code; the FB_ prefix tags fallback deliveries."""
        return f"FB_{self.id.upper()}"

    def matches(self, position: str, category: str, difficulty: str) -> bool:
        return (
            self.position == position
            and self.category == category
            and self.difficulty == difficulty
        )

    def mark_deleted(self):
        """Soft delete the question."""
        self.status = QuestionStatus.DELETED
        self.updated_at = datetime.now()

    def is_active(self) -> bool:
        return self.status == QuestionStatus.ACTIVE

    @classmethod
    def from_dict(cls, item: Dict[str, Any], source_type: SourceType = SourceType.BUILT_IN) -> "FallbackQuestion":
        return cls(
            id=item["id"],
            position=item["position"],
            category=item["category"],
            difficulty=item["difficulty"],
            text=item["text"],
            expected_keywords=list(item.get("expected_keywords", [])),
            sample_answers=list(item.get("sample_answers", [])),
            time_limit=int(item.get("time_limit", 240)),
            max_score=float(item.get("max_score", 10)),
            source_type=source_type,
            status=QuestionStatus(item.get("status", QuestionStatus.ACTIVE.value)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "position": self.position,
            "category": self.category,
            "difficulty": self.difficulty,
            "text": self.text,
            "expected_keywords": self.expected_keywords,
            "sample_answers": self.sample_answers,
            "time_limit": self.time_limit,
            "max_score": self.max_score,
            "status": self.status.value,
            "updated_at": self.updated_at.isoformat(),
        }
