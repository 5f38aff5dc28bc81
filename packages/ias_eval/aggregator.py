import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from packages.ias_core.dto import BaseDTO
from packages.ias_core.errors import (
    EvaluationFailure,
    StaleSubmissionError,
    ValidationError,
)
from packages.ias_providers.evaluation import AnswerEvaluator, EvaluationRequest
from packages.ias_session.dto import AnalysisScores, Answer, Evaluation, InterviewSession, Question
from packages.ias_session.lifecycle import SessionLifecycle
from packages.ias_session.policy import get_policy
from packages.ias_session.state import SessionEvent
from .defaults import neutral_evaluation
from .rules import (
    as_text_list,
    clamp_score,
    clamp_sub_score,
    clamp_time_spent,
    optional_sub_score,
    to_number,
)

logger = logging.getLogger("ias.eval")


class SubmissionResult(BaseDTO):
    evaluation: Evaluation
    session: InterviewSession
    is_complete: bool


@dataclass
class SubmissionPlan:
    """Validated submission waiting for its evaluation."""
    session_id: str
    question: Question
    answer_text: str
    time_spent: float
    auto_submitted: bool
    request: EvaluationRequest
    reports_job_fit: bool
    reports_role_competency: bool


class EvaluationAggregator:
    """
    Records one answer per delivered question and keeps the totals.
    Split like the sequencer so the evaluator runs outside the lock:
      prepare (locked) -> evaluate (unlocked) -> commit (locked)
    Evaluator failures never block the session: a neutral evaluation
    flagged as degraded takes their place.
    """

    def __init__(
        self,
        evaluator: AnswerEvaluator,
        lifecycle: Optional[SessionLifecycle] = None,
        fallback_score: float = 5
    ):
        self.evaluator = evaluator
        self.lifecycle = lifecycle or SessionLifecycle()
        self.fallback_score = fallback_score

    def submit(
        self,
        session: InterviewSession,
        answer_text: str,
        time_spent: float,
        question_id: Optional[str] = None,
        auto_submitted: bool = False
    ) -> SubmissionResult:
        plan = self.prepare(session, answer_text, time_spent, question_id, auto_submitted)
        return self.commit(session, plan, self.evaluate(plan))

    def prepare(
        self,
        session: InterviewSession,
        answer_text: str,
        time_spent: float,
        question_id: Optional[str] = None,
        auto_submitted: bool = False
    ) -> SubmissionPlan:
        self.lifecycle.ensure_mutable(session)

        question = session.pending_question
        if question is None:
            raise StaleSubmissionError(session.id, "no question is waiting for an answer")
        if question_id is not None and question_id not in (question.id, question.question_code):
            raise StaleSubmissionError(
                session.id, f"answer is for {question_id}, current question is {question.id}"
            )

        errors = []
        if not isinstance(answer_text, str) or not answer_text.strip():
            errors.append("answer: must not be empty")
        try:
            spent = to_number(time_spent)
            if spent < 0:
                errors.append("time_spent: must not be negative")
        except (TypeError, ValueError):
            errors.append("time_spent: must be a number")
            spent = 0.0
        if errors:
            raise ValidationError(errors, details={"session_id": session.id})

        spent = clamp_time_spent(spent, question.time_limit)
        policy = get_policy(session.type)
        request = EvaluationRequest(
            session_type=session.type.value,
            position=session.position,
            question=question,
            answer=answer_text.strip(),
            time_spent=spent,
            job_requirements=session.job_requirements,
            role_competencies=session.role_competencies,
        )
        return SubmissionPlan(
            session_id=session.id,
            question=question,
            answer_text=answer_text.strip(),
            time_spent=spent,
            auto_submitted=auto_submitted,
            request=request,
            reports_job_fit=policy.reports_job_fit(),
            reports_role_competency=policy.reports_role_competency(),
        )

    def evaluate(self, plan: SubmissionPlan) -> Evaluation:
        """Evaluator call. Never raises; touches no session state."""
        try:
            outcome = self.evaluator.evaluate_answer(plan.request)
            if outcome.success:
                return self._normalize(outcome.payload, plan)
            failure = EvaluationFailure(outcome.error or "evaluator reported failure")
        except (ValueError, TypeError) as e:
            failure = EvaluationFailure(f"malformed evaluation: {e}")
        except Exception as e:
            failure = EvaluationFailure(f"evaluator raised {type(e).__name__}: {e}")

        logger.warning(
            f"Event: {SessionEvent.EVALUATION_DEGRADED.value} for {plan.session_id} "
            f"question {plan.question.question_code}: {failure.message}"
        )
        return neutral_evaluation(plan.question.max_score, failure.message, self.fallback_score)

    def commit(self, session: InterviewSession, plan: SubmissionPlan, evaluation: Evaluation) -> SubmissionResult:
        self.lifecycle.ensure_mutable(session)
        pending = session.pending_question
        if pending is None or pending.id != plan.question.id:
            raise StaleSubmissionError(session.id, f"question {plan.question.id} was already answered")

        session.answers.append(Answer(
            question_id=pending.id,
            question_code=pending.question_code,
            text=plan.answer_text,
            time_spent=plan.time_spent,
            auto_submitted=plan.auto_submitted,
        ))
        session.evaluations.append(evaluation)
        # max first so total_score <= max_possible_score holds at every point
        session.max_possible_score += evaluation.max_score
        session.total_score += evaluation.score

        event = SessionEvent.ANSWER_AUTO_SUBMITTED if plan.auto_submitted else SessionEvent.ANSWER_SUBMITTED
        logger.info(
            f"Event: {event.value} for {session.id} {len(session.answers)}/{session.total_questions}: "
            f"{evaluation.score}/{evaluation.max_score}"
        )

        if self.lifecycle.should_complete(session):
            self.lifecycle.complete(session)

        return SubmissionResult(
            evaluation=evaluation.model_copy(deep=True),
            session=session.snapshot(),
            is_complete=session.is_complete,
        )

    def _normalize(self, payload: Dict[str, Any], plan: SubmissionPlan) -> Evaluation:
        max_score = plan.question.max_score
        analysis = payload.get("analysis") or payload.get("ai_analysis") or {}

        return Evaluation(
            score=clamp_score(payload.get("score"), max_score),
            max_score=max_score,
            feedback=str(payload.get("feedback") or ""),
            strengths=as_text_list(payload.get("strengths")),
            weaknesses=as_text_list(payload.get("weaknesses")),
            suggestions=as_text_list(payload.get("suggestions")),
            analysis=AnalysisScores(
                technical_accuracy=clamp_sub_score(analysis.get("technical_accuracy")),
                communication_skills=clamp_sub_score(analysis.get("communication_skills")),
                problem_solving=clamp_sub_score(analysis.get("problem_solving")),
                confidence=clamp_sub_score(analysis.get("confidence")),
                relevance=clamp_sub_score(analysis.get("relevance")),
            ),
            job_fit_score=(
                optional_sub_score(payload.get("job_fit_score")) if plan.reports_job_fit else None
            ),
            role_competency_score=(
                optional_sub_score(payload.get("role_competency_score"))
                if plan.reports_role_competency else None
            ),
            topic_analysis=payload.get("topic_analysis") or None,
            improvement_suggestions=as_text_list(payload.get("improvement_suggestions")),
            next_steps=payload.get("next_steps") or None,
        )
