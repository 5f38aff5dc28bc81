from typing import Optional

from IAS.api.schemas import (
    EvaluationSchema,
    QuestionSchema,
    SessionResponse,
    SubmitAnswerResponse,
)
from packages.ias_eval.aggregator import SubmissionResult
from packages.ias_session.dto import Evaluation, InterviewSession, Question


class SessionMapper:
    """
    Explicit Mapper to convert domain entities (Session, Question, Evaluation) to API schemas.
    Expected keywords and sample answers never leave the engine.
    """

    @staticmethod
    def question(q: Optional[Question]) -> Optional[QuestionSchema]:
        if q is None:
            return None
        return QuestionSchema(
            id=q.id,
            question_code=q.question_code,
            category=q.category,
            difficulty=q.difficulty.value,
            text=q.text,
            time_limit=q.time_limit,
            max_score=q.max_score,
            topic=q.topic,
            source=q.source.value,
        )

    @staticmethod
    def session(s: InterviewSession, time_remaining: Optional[float] = None) -> SessionResponse:
        return SessionResponse(
            session_id=s.id,
            type=s.type.value,
            status=s.status.value,
            industry=s.industry,
            position=s.position,
            difficulty=s.difficulty.value,
            current_question_index=s.current_question_index,
            total_questions=s.total_questions,
            questions_answered=len(s.answers),
            total_score=s.total_score,
            max_possible_score=s.max_possible_score,
            current_question=SessionMapper.question(s.pending_question),
            time_remaining=time_remaining,
            created_at=s.start_time,
            completed_at=s.end_time,
        )

    @staticmethod
    def evaluation(e: Evaluation) -> EvaluationSchema:
        return EvaluationSchema(
            score=e.score,
            max_score=e.max_score,
            feedback=e.feedback,
            strengths=e.strengths,
            weaknesses=e.weaknesses,
            suggestions=e.suggestions,
            job_fit_score=e.job_fit_score,
            role_competency_score=e.role_competency_score,
            degraded=e.degraded,
        )

    @staticmethod
    def submission(result: SubmissionResult) -> SubmitAnswerResponse:
        return SubmitAnswerResponse(
            evaluation=SessionMapper.evaluation(result.evaluation),
            session=SessionMapper.session(result.session),
            is_complete=result.is_complete,
        )
