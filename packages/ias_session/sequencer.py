import logging
from dataclasses import dataclass, field
from typing import List, Optional

from packages.ias_core.errors import GenerationFailure
from packages.ias_providers.question import QuestionGenerator, QuestionRequest
from packages.ias_qbank.service import FallbackQuestionBank
from .dto import InterviewSession, Question
from .lifecycle import SessionLifecycle
from .policy import get_policy, TopicPlanner
from .state import QuestionSource, SessionEvent

logger = logging.getLogger("ias.sequencer")

# Codes of the most recent deliveries sent to the generator
RECENT_CODES_WINDOW = 3


@dataclass
class QuestionPlan:
    """
    What next() decided under the session lock.
    Exactly one of: finished, question (pending or scripted), request.
    """
    session_id: str
    index: int
    finished: bool = False
    question: Optional[Question] = None
    is_pending: bool = False
    request: Optional[QuestionRequest] = None
    used_texts: List[str] = field(default_factory=list)


class QuestionSequencer:
    """
    Chooses and delivers the next question of a session.
    Split in three steps so the generator call can run outside the lock:
      build_request (locked) -> obtain (unlocked) -> commit (locked)
    The index only moves in commit, once a question is in hand.
    """

    def __init__(
        self,
        generator: QuestionGenerator,
        fallback_bank: FallbackQuestionBank,
        lifecycle: Optional[SessionLifecycle] = None,
        topic_planner: Optional[TopicPlanner] = None,
        default_time_limit: int = 240,
        default_max_score: float = 10
    ):
        self.generator = generator
        self.fallback_bank = fallback_bank
        self.lifecycle = lifecycle or SessionLifecycle()
        self.topic_planner = topic_planner or TopicPlanner()
        self.default_time_limit = default_time_limit
        self.default_max_score = default_max_score

    def next(self, session: InterviewSession) -> Optional[Question]:
        """
        Single-threaded convenience: all three steps in a row.
        Returns None once every question was delivered.
        """
        plan = self.build_request(session)
        return self.commit(session, plan, self.obtain(plan))

    def build_request(self, session: InterviewSession) -> QuestionPlan:
        self.lifecycle.ensure_mutable(session)
        index = session.current_question_index

        pending = session.pending_question
        if pending is not None:
            return QuestionPlan(session.id, index, question=pending, is_pending=True)

        if index >= session.total_questions:
            return QuestionPlan(session.id, index, finished=True)

        scripted = self._scripted_question(session, index)
        if scripted is not None:
            return QuestionPlan(session.id, index, question=scripted)

        policy = get_policy(session.type)
        offset = 1 if session.bookend_questions else 0
        category = policy.category_for(index - offset)
        topic, depth = self.topic_planner.plan(session, category)

        request = QuestionRequest(
            session_type=session.type.value,
            category=category,
            industry=session.industry,
            position=session.position,
            difficulty=session.difficulty.value,
            previous_question_codes=[q.question_code for q in session.questions[-RECENT_CODES_WINDOW:]],
            job_requirements=session.job_requirements,
            role_competencies=session.role_competencies,
            topic=topic,
            depth=depth,
            experience_level=session.experience_level.value if session.experience_level else None,
        )
        return QuestionPlan(
            session.id,
            index,
            request=request,
            used_texts=[q.text for q in session.questions],
        )

    def obtain(self, plan: QuestionPlan) -> Optional[Question]:
        """
        Generator call with fallback. Touches no session state.
        Raises GenerationFailure when neither source has a question.
        """
        if plan.finished:
            return None
        if plan.question is not None:
            return plan.question

        request = plan.request
        error = None
        try:
            result = self.generator.generate_question(request)
            if result.success:
                return self._to_question(result.payload, request)
            error = result.error or "generator reported failure"
        except (ValueError, TypeError) as e:
            error = f"malformed generated question: {e}"
        except Exception as e:
            error = f"generator raised {type(e).__name__}: {e}"

        fallback = self.fallback_bank.lookup(
            request.position, request.category, request.difficulty, plan.used_texts
        )
        if fallback is None:
            logger.error(
                f"Generation failed for {plan.session_id} and no fallback exists "
                f"for ({request.position}, {request.category}, {request.difficulty}): {error}"
            )
            raise GenerationFailure(
                f"No question available for {request.position}/{request.category}/{request.difficulty}",
                details={"session_id": plan.session_id, "reason": error}
            )

        logger.warning(
            f"Event: {SessionEvent.QUESTION_FALLBACK.value} for {plan.session_id} "
            f"-> {fallback.question_code} ({error})"
        )
        return fallback

    def commit(self, session: InterviewSession, plan: QuestionPlan, question: Optional[Question]) -> Optional[Question]:
        """
        Append the question and advance the index.
        No-op for finished or pending plans, or when the session moved on meanwhile.
        """
        if plan.finished or plan.is_pending or question is None:
            return question

        self.lifecycle.ensure_mutable(session)
        if session.current_question_index != plan.index or session.pending_question is not None:
            logger.warning(
                f"Discarding question for {session.id}: index moved from {plan.index} "
                f"to {session.current_question_index}"
            )
            return session.pending_question

        session.questions.append(question)
        session.current_question_index += 1
        logger.info(
            f"Event: {SessionEvent.QUESTION_DELIVERED.value} for {session.id} "
            f"{session.current_question_index}/{session.total_questions}: {question.question_code}"
        )
        return question

    def _scripted_question(self, session: InterviewSession, index: int) -> Optional[Question]:
        if not session.bookend_questions:
            return None
        if index == 0:
            return self.fallback_bank.intro_question(session)
        if index == session.total_questions - 1:
            return self.fallback_bank.salary_question(session)
        return None

    def _to_question(self, payload: dict, request: QuestionRequest) -> Question:
        text = str(payload.get("text") or payload.get("question") or "").strip()
        if not text:
            raise ValueError("generated question has no text")

        topic = payload.get("topic") or request.topic
        difficulty = payload.get("difficulty") or request.difficulty
        code = payload.get("question_code") or f"GEN_{(topic or request.category).upper()}_{str(difficulty).upper()}"
        if not code.startswith("GEN_"):
            code = f"GEN_{code}"

        return Question(
            question_code=code,
            category=payload.get("category") or request.category,
            difficulty=difficulty,
            text=text,
            expected_keywords=list(payload.get("expected_keywords") or []),
            sample_answers=list(payload.get("sample_answers") or []),
            time_limit=int(payload.get("time_limit") or self.default_time_limit),
            max_score=float(payload.get("max_score") or self.default_max_score),
            topic=topic,
            depth=payload.get("depth") or request.depth,
            context=payload.get("context"),
            source=QuestionSource.GENERATED,
        )
