from datetime import datetime
from typing import Optional, List, Any
from pydantic import BaseModel, Field

# --- Request Schemas ---
# Kept loose on purpose: the engine validates and reports every bad field.

class SessionCreateRequest(BaseModel):
    type: Any = None
    industry: Any = None
    position: Any = None
    difficulty: Any = None
    total_questions: Any = 10
    experience_level: Optional[str] = None
    job_requirements: Optional[List[str]] = None
    role_competencies: Optional[List[str]] = None
    candidate_name: Optional[str] = None
    bookend_questions: bool = False

class AnswerSubmitRequest(BaseModel):
    answer: str = ""
    time_spent: float = 0.0
    question_id: Optional[str] = Field(None, description="Id or code of the question being answered")

class DraftRequest(BaseModel):
    text: str = ""
    question_id: Optional[str] = None

# --- Response Schemas ---

class QuestionSchema(BaseModel):
    id: str
    question_code: str
    category: str
    difficulty: str
    text: str
    time_limit: int
    max_score: float
    topic: Optional[str] = None
    source: str

class SessionResponse(BaseModel):
    session_id: str
    type: str
    status: str
    industry: str
    position: str
    difficulty: str
    current_question_index: int
    total_questions: int
    questions_answered: int
    total_score: float
    max_possible_score: float
    current_question: Optional[QuestionSchema] = None
    time_remaining: Optional[float] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

class StartSessionResponse(BaseModel):
    session: SessionResponse
    first_question: Optional[QuestionSchema] = None

class NextQuestionResponse(BaseModel):
    question: Optional[QuestionSchema] = None
    no_more_questions: bool = False

class EvaluationSchema(BaseModel):
    score: float
    max_score: float
    feedback: str
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    job_fit_score: Optional[float] = None
    role_competency_score: Optional[float] = None
    degraded: bool = False

class SubmitAnswerResponse(BaseModel):
    evaluation: EvaluationSchema
    session: SessionResponse
    is_complete: bool

class StatusChangeResponse(BaseModel):
    session_id: str
    status: str
    changed: bool

class SessionStatsResponse(BaseModel):
    total: int
    active: int
    paused: int
    completed: int
