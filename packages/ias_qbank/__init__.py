from .domain import FallbackQuestion, QuestionStatus, SourceType
from .repository import InMemoryFallbackRepository, JsonFileFallbackRepository
from .service import FallbackQuestionBank

__all__ = [
    "FallbackQuestion",
    "QuestionStatus",
    "SourceType",
    "InMemoryFallbackRepository",
    "JsonFileFallbackRepository",
    "FallbackQuestionBank",
]
