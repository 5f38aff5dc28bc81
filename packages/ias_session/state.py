from enum import Enum


class SessionStatus(str, Enum):
    """
    Interview session status.
    ACTIVE <-> PAUSED until COMPLETED, which is terminal.
    """
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class SessionType(str, Enum):
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    MIXED = "mixed"
    ROLE_BASED = "role-based"
    JOB_SPECIFIC = "job-specific"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"


class QuestionSource(str, Enum):
    """
    Where a delivered question came from.
    """
    GENERATED = "generated"
    FALLBACK = "fallback"
    SCRIPTED = "scripted"


class SessionEvent(str, Enum):
    """
    Events emitted by the session engine (logged).
    """
    SESSION_STARTED = "SESSION_STARTED"
    QUESTION_DELIVERED = "QUESTION_DELIVERED"
    QUESTION_FALLBACK = "QUESTION_FALLBACK"
    ANSWER_SUBMITTED = "ANSWER_SUBMITTED"
    ANSWER_AUTO_SUBMITTED = "ANSWER_AUTO_SUBMITTED"
    EVALUATION_DEGRADED = "EVALUATION_DEGRADED"
    SESSION_PAUSED = "SESSION_PAUSED"
    SESSION_RESUMED = "SESSION_RESUMED"
    SESSION_COMPLETED = "SESSION_COMPLETED"
    SESSION_EVICTED = "SESSION_EVICTED"


# Bounds for SessionConfig.total_questions
MIN_TOTAL_QUESTIONS = 1
MAX_TOTAL_QUESTIONS = 20
