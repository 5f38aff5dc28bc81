import logging
from functools import partial
from typing import Any, Dict, List, Optional, Union

from packages.ias_core.dto import BaseDTO
from packages.ias_core.errors import (
    FinalizedSessionError,
    GenerationFailure,
    ResultsNotReadyError,
    SessionBusyError,
    SessionNotActiveError,
    SessionNotFoundError,
    StaleSubmissionError,
)
from packages.ias_eval.aggregator import EvaluationAggregator, SubmissionResult
from packages.ias_qbank.service import FallbackQuestionBank
from packages.ias_report.dto import ResultsBundle
from packages.ias_report.engine import ResultsComposer
from packages.ias_session.dto import InterviewSession, Question, SessionConfig
from packages.ias_session.lifecycle import SessionLifecycle
from packages.ias_session.repository import SessionRecord, SessionStore
from packages.ias_session.sequencer import QuestionSequencer
from packages.ias_session.state import SessionStatus, SessionType
from packages.ias_session.timer import AnswerTimer
from packages.ias_service.concurrency import ConcurrencyManager

logger = logging.getLogger("ias.service")

# Outcomes that turn a timer-driven submission into a no-op
_AUTO_SUBMIT_NOOP = (
    StaleSubmissionError,
    SessionBusyError,
    FinalizedSessionError,
    SessionNotActiveError,
    SessionNotFoundError,
)


class StartResult(BaseDTO):
    session: InterviewSession
    first_question: Optional[Question] = None


class InterviewSessionService:
    """
    Application Service for interview sessions.
    Responsible for:
    1. Session lookup in the store
    2. Concurrency control (per-session lock + fail-fast claims)
    3. Orchestrating sequencer, aggregator, timer and results calls
    Collaborator calls always run with the per-session lock released.
    """

    def __init__(
        self,
        store: SessionStore,
        sequencer: QuestionSequencer,
        aggregator: EvaluationAggregator,
        fallback_bank: FallbackQuestionBank,
        lifecycle: Optional[SessionLifecycle] = None,
        concurrency_manager: Optional[ConcurrencyManager] = None,
        timer_tick_sec: Optional[float] = 1.0
    ):
        self.store = store
        self.sequencer = sequencer
        self.aggregator = aggregator
        self.fallback_bank = fallback_bank
        self.lifecycle = lifecycle or SessionLifecycle()
        self.concurrency_manager = concurrency_manager or ConcurrencyManager()
        self.timer_tick_sec = timer_tick_sec

    # --- Commands ---

    def start(self, config: Union[SessionConfig, Dict[str, Any]]) -> StartResult:
        """
        Create a session and deliver its first question.
        A session whose first question cannot be produced is discarded.
        """
        session = self.lifecycle.create(config)
        if session.type == SessionType.ROLE_BASED and not session.role_competencies:
            level = session.experience_level.value if session.experience_level else None
            session.role_competencies = self.fallback_bank.competencies_for(session.position, level)

        self.store.add(session)
        try:
            first = self.next_question(session.id)
        except GenerationFailure:
            self.store.delete(session.id)
            raise
        return StartResult(session=self.get_session(session.id), first_question=first)

    def next_question(self, session_id: str) -> Optional[Question]:
        """
        Pending question if there is one, otherwise a new one.
        None once every question was delivered.
        """
        record = self._get_record(session_id)
        with record.lock:
            plan = self.sequencer.build_request(record.session)
            if plan.finished or plan.is_pending:
                return plan.question
            if plan.question is not None:
                # Scripted, no collaborator call
                question = self.sequencer.commit(record.session, plan, plan.question)
                self._start_timer(record, question)
                return question
            token = self.concurrency_manager.claim(session_id, "next")

        try:
            question = self.sequencer.obtain(plan)
            with record.lock:
                if not self.concurrency_manager.is_current(session_id, token):
                    logger.warning(f"Discarding question for {session_id}: claim was taken over")
                    raise SessionBusyError(session_id, "next")
                delivered = self.sequencer.commit(record.session, plan, question)
                if delivered is question:
                    self._start_timer(record, delivered)
                return delivered
        finally:
            self.concurrency_manager.release(session_id, token)

    def submit_answer(
        self,
        session_id: str,
        answer_text: str,
        time_spent: float,
        question_id: Optional[str] = None,
        auto_submitted: bool = False
    ) -> SubmissionResult:
        """
        Record the answer to the pending question.
        First writer wins: a concurrent second submission is stale.
        """
        record = self._get_record(session_id)
        with record.lock:
            plan = self.aggregator.prepare(
                record.session, answer_text, time_spent, question_id, auto_submitted
            )
            token = self.concurrency_manager.claim(session_id, "submit", plan.question.id)
            if record.timer is not None:
                record.timer.pause()

        committed = False
        try:
            evaluation = self.aggregator.evaluate(plan)
            with record.lock:
                if not self.concurrency_manager.is_current(session_id, token):
                    raise StaleSubmissionError(session_id, "submission claim was taken over")
                result = self.aggregator.commit(record.session, plan, evaluation)
                committed = True
                record.cancel_timer()
                record.draft = ""
                if result.is_complete and record.results is None:
                    record.results = ResultsComposer.compose(record.session)
                return result
        finally:
            if not committed:
                self._resume_timer(record)
            self.concurrency_manager.release(session_id, token)

    def save_draft(self, session_id: str, text: str, question_id: Optional[str] = None) -> None:
        """Keep the in-progress answer the timer submits on expiry."""
        record = self._get_record(session_id)
        with record.lock:
            session = record.session
            if session.status == SessionStatus.COMPLETED:
                raise FinalizedSessionError(session_id)
            pending = session.pending_question
            if pending is None:
                raise StaleSubmissionError(session_id, "no question is waiting for an answer")
            if question_id is not None and question_id not in (pending.id, pending.question_code):
                raise StaleSubmissionError(session_id, f"draft is for {question_id}, current question is {pending.id}")
            record.draft = text or ""

    def pause(self, session_id: str) -> bool:
        record = self._get_record(session_id)
        with record.lock:
            if not self.lifecycle.pause(record.session):
                return False
            if record.timer is not None:
                record.timer.pause()
            return True

    def resume(self, session_id: str) -> bool:
        record = self._get_record(session_id)
        with record.lock:
            if not self.lifecycle.resume(record.session):
                return False
            if record.timer is not None:
                record.timer.resume()
            return True

    def delete_session(self, session_id: str) -> bool:
        deleted = self.store.delete(session_id)
        self.concurrency_manager.forget(session_id)
        return deleted

    def evict_expired(self) -> List[str]:
        evicted = self.store.evict_expired()
        for session_id in evicted:
            self.concurrency_manager.forget(session_id)
        return evicted

    def shutdown(self) -> None:
        """Drop every live session and cancel its timer."""
        for session_id in self.store.session_ids():
            self.delete_session(session_id)

    # --- Queries ---

    def get_session(self, session_id: str) -> InterviewSession:
        record = self._get_record(session_id)
        with record.lock:
            return record.session.snapshot()

    def results(self, session_id: str) -> ResultsBundle:
        record = self._get_record(session_id)
        with record.lock:
            if record.results is None:
                if record.session.status != SessionStatus.COMPLETED:
                    raise ResultsNotReadyError(session_id, record.session.status.value)
                record.results = ResultsComposer.compose(record.session)
            # callers get their own copy; the cached bundle stays untouched
            return record.results.model_copy(deep=True)

    def time_remaining(self, session_id: str) -> Optional[float]:
        record = self._get_record(session_id)
        with record.lock:
            return record.timer.remaining if record.timer is not None else None

    def timer_for(self, session_id: str) -> Optional[AnswerTimer]:
        """The live timer, for headless drivers that tick it themselves."""
        record = self._get_record(session_id)
        with record.lock:
            return record.timer

    def stats(self) -> Dict[str, int]:
        return self.store.stats()

    # --- Internals ---

    def _get_record(self, session_id: str) -> SessionRecord:
        record = self.store.get(session_id)
        if record is None:
            self.concurrency_manager.forget(session_id)
            raise SessionNotFoundError(session_id)
        return record

    def _start_timer(self, record: SessionRecord, question: Question) -> None:
        record.cancel_timer()
        record.draft = ""
        timer = AnswerTimer(
            time_limit=question.time_limit,
            on_expire=partial(self._auto_submit, record.session.id, question.id, question.time_limit),
            draft_provider=lambda: record.draft,
            tick_interval=self.timer_tick_sec,
            name=f"timer-{record.session.id}-{question.id}",
        )
        record.timer = timer
        timer.start()
        if record.session.status != SessionStatus.ACTIVE:
            timer.pause()

    def _resume_timer(self, record: SessionRecord) -> None:
        with record.lock:
            if record.timer is not None and record.session.status == SessionStatus.ACTIVE:
                record.timer.resume()

    def _auto_submit(self, session_id: str, question_id: str, time_limit: float, draft: str) -> None:
        """Timer expiry: same path as a manual submission."""
        try:
            self.submit_answer(session_id, draft, time_limit, question_id=question_id, auto_submitted=True)
        except _AUTO_SUBMIT_NOOP as e:
            logger.info(f"Auto-submit for {session_id} skipped: {e}")
        except Exception:
            logger.exception(f"Auto-submit for {session_id} failed")
