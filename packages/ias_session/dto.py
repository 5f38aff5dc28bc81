import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from packages.ias_core.dto import BaseDTO
from .state import (
    SessionStatus,
    SessionType,
    Difficulty,
    ExperienceLevel,
    QuestionSource,
    MIN_TOTAL_QUESTIONS,
    MAX_TOTAL_QUESTIONS,
)


class SessionConfig(BaseDTO):
    """
    Setup input for a new interview session.
    """
    type: SessionType = Field(..., description="Interview type")
    industry: str = Field(..., min_length=1, description="Target industry")
    position: str = Field(..., min_length=1, description="Target position")
    difficulty: Difficulty = Field(..., description="easy | medium | hard")
    total_questions: int = Field(
        default=10,
        ge=MIN_TOTAL_QUESTIONS,
        le=MAX_TOTAL_QUESTIONS,
        description="Number of questions in the session"
    )
    experience_level: Optional[ExperienceLevel] = None
    job_requirements: Optional[List[str]] = Field(None, description="Sequencing hints for job-specific sessions")
    role_competencies: Optional[List[str]] = Field(None, description="Sequencing hints for role-based sessions")
    candidate_name: Optional[str] = None
    bookend_questions: bool = Field(
        default=False,
        description="Open with a scripted introduction and close with a salary question"
    )


class Question(BaseDTO):
    id: str = Field(default_factory=lambda: f"q_{uuid.uuid4().hex[:12]}")
    question_code: str = Field(..., description="Stable code for dedup and fallback tagging")
    category: str
    difficulty: Difficulty
    text: str = Field(..., min_length=1)
    expected_keywords: List[str] = Field(default_factory=list)
    sample_answers: List[str] = Field(default_factory=list)
    time_limit: int = Field(..., gt=0, description="Seconds")
    max_score: float = Field(..., gt=0)
    topic: Optional[str] = None
    depth: Optional[str] = None
    context: Optional[str] = None
    source: QuestionSource = QuestionSource.GENERATED


class Answer(BaseDTO):
    question_id: str
    question_code: str
    text: str
    time_spent: float = Field(..., ge=0, description="Seconds, never above the question's time limit")
    timestamp: datetime = Field(default_factory=datetime.now)
    auto_submitted: bool = False


class AnalysisScores(BaseDTO):
    """Multi-dimensional sub-scores, each 0..10."""
    technical_accuracy: float = 0.0
    communication_skills: float = 0.0
    problem_solving: float = 0.0
    confidence: float = 0.0
    relevance: float = 0.0


class Evaluation(BaseDTO):
    score: float = Field(..., ge=0)
    max_score: float = Field(..., gt=0)
    feedback: str = ""
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    analysis: AnalysisScores = Field(default_factory=AnalysisScores)
    job_fit_score: Optional[float] = None
    role_competency_score: Optional[float] = None
    topic_analysis: Optional[str] = None
    improvement_suggestions: List[str] = Field(default_factory=list)
    next_steps: Optional[str] = None

    # EvaluationFailure record
    degraded: bool = False
    failure_reason: Optional[str] = None


class InterviewSession(BaseDTO):
    """
    One interview attempt with its own question/answer history and totals.
    current_question_index counts delivered questions, so it always equals
    len(questions). Between questions len(answers) == current_question_index;
    while a question is pending len(answers) == current_question_index - 1.
    """
    id: str = Field(default_factory=lambda: f"session_{uuid.uuid4().hex[:16]}")
    type: SessionType
    industry: str
    position: str
    difficulty: Difficulty
    total_questions: int = Field(..., ge=MIN_TOTAL_QUESTIONS, le=MAX_TOTAL_QUESTIONS)
    experience_level: Optional[ExperienceLevel] = None
    job_requirements: Optional[List[str]] = None
    role_competencies: Optional[List[str]] = None
    candidate_name: Optional[str] = None
    bookend_questions: bool = False

    current_question_index: int = 0
    questions: List[Question] = Field(default_factory=list)
    answers: List[Answer] = Field(default_factory=list)
    evaluations: List[Evaluation] = Field(default_factory=list)

    start_time: datetime = Field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    status: SessionStatus = SessionStatus.ACTIVE

    total_score: float = 0.0
    max_possible_score: float = 0.0

    @property
    def pending_question(self) -> Optional[Question]:
        """The delivered question still waiting for its answer, if any."""
        if len(self.questions) > len(self.answers):
            return self.questions[len(self.answers)]
        return None

    @property
    def is_complete(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    @property
    def questions_remaining(self) -> int:
        return self.total_questions - self.current_question_index

    def snapshot(self) -> "InterviewSession":
        """Deep copy for callers outside the session lock."""
        return self.model_copy(deep=True)
