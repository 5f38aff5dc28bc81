from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class CategoryAggregate(BaseModel):
    """
    Per-category (or per-topic) slice of the results.
    """
    questions: int = Field(..., description="Answered questions in this group")
    total_score: float
    max_score: float
    average_score: float = Field(..., description="Mean evaluation score")
    percentage: int = Field(..., description="total_score / max_score as a rounded percentage")
    performance: str = Field(..., description="Excellent | Good | Fair | Needs Improvement")


class ResultsBundle(BaseModel):
    """
    Read-only summary of a completed session.
    Handed to the certificate/report renderer as-is.
    """
    session_id: str
    candidate_name: Optional[str] = None
    position: str
    industry: str
    session_type: str
    difficulty: str

    total_score: float
    max_possible_score: float
    percentage: int = Field(..., description="0-100, rounded half up")
    grade: str = Field(..., description="A+ .. F")

    category_scores: Dict[str, float] = Field(default_factory=dict, description="Average score per question category")
    category_breakdown: Dict[str, CategoryAggregate] = Field(default_factory=dict)
    topic_breakdown: Dict[str, CategoryAggregate] = Field(default_factory=dict)

    # Mean over the evaluations that report them; None if none did
    job_fit_score: Optional[float] = None
    role_competency_score: Optional[float] = None
    job_fit_analysis: Optional[str] = None

    strengths: List[str] = Field(default_factory=list, description="Most frequent strengths")
    areas_for_improvement: List[str] = Field(default_factory=list, description="Most frequent weaknesses")
    summary: str = ""

    questions_answered: int = 0
    degraded_evaluations: int = Field(0, description="Answers scored by the neutral fallback")
    started_at: datetime
    completed_at: Optional[datetime] = None

    model_config = {"frozen": True}


class CertificateData(BaseModel):
    """
    Fields the external certificate renderer consumes.
    """
    session_id: str
    candidate_name: str
    position: str
    total_score: float
    max_possible_score: float
    percentage: int
    grade: str
    date: datetime
