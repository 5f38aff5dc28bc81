import logging
from datetime import datetime
from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from packages.ias_core.errors import (
    ValidationError,
    FinalizedSessionError,
    SessionNotActiveError,
)
from .dto import SessionConfig, InterviewSession
from .state import SessionStatus, SessionEvent

# Logger setup
logger = logging.getLogger("ias.session")


class SessionLifecycle:
    """
    State machine for an interview session.
    ACTIVE -> PAUSED -> ACTIVE ... -> COMPLETED (terminal).
    Owns creation and status transitions; the sequencer and the aggregator
    call ensure_mutable() before touching questions or answers.
    """

    def create(self, config: Union[SessionConfig, Dict[str, Any]]) -> InterviewSession:
        """
        Validate setup input and build a fresh ACTIVE session.
        Raises ValidationError listing every violated field.
        """
        if not isinstance(config, SessionConfig):
            config = self._validate_config(config)

        session = InterviewSession(
            type=config.type,
            industry=config.industry,
            position=config.position,
            difficulty=config.difficulty,
            total_questions=config.total_questions,
            experience_level=config.experience_level,
            job_requirements=config.job_requirements,
            role_competencies=config.role_competencies,
            candidate_name=config.candidate_name,
            bookend_questions=config.bookend_questions,
        )
        logger.info(
            f"Event: {SessionEvent.SESSION_STARTED.value} for {session.id} "
            f"({session.type.value}, {session.position}, {session.difficulty.value}, "
            f"{session.total_questions} questions)"
        )
        return session

    @staticmethod
    def _validate_config(data: Dict[str, Any]) -> SessionConfig:
        try:
            return SessionConfig.model_validate(data)
        except PydanticValidationError as e:
            errors = []
            for err in e.errors():
                field = ".".join(str(part) for part in err["loc"]) or "config"
                errors.append(f"{field}: {err['msg']}")
            logger.warning(f"Rejected session setup: {errors}")
            raise ValidationError(errors) from e

    def pause(self, session: InterviewSession) -> bool:
        """ACTIVE -> PAUSED. Returns False when the session is not active."""
        if session.status != SessionStatus.ACTIVE:
            logger.warning(f"Cannot pause session {session.id} from {session.status.value}")
            return False
        session.status = SessionStatus.PAUSED
        logger.info(f"Event: {SessionEvent.SESSION_PAUSED.value} for {session.id}")
        return True

    def resume(self, session: InterviewSession) -> bool:
        """PAUSED -> ACTIVE. Returns False when the session is not paused."""
        if session.status != SessionStatus.PAUSED:
            logger.warning(f"Cannot resume session {session.id} from {session.status.value}")
            return False
        session.status = SessionStatus.ACTIVE
        logger.info(f"Event: {SessionEvent.SESSION_RESUMED.value} for {session.id}")
        return True

    def ensure_mutable(self, session: InterviewSession) -> None:
        """
        Guard for question delivery and answer recording.
        COMPLETED -> FinalizedSessionError, PAUSED -> SessionNotActiveError.
        """
        if session.status == SessionStatus.COMPLETED:
            raise FinalizedSessionError(session.id)
        if session.status != SessionStatus.ACTIVE:
            raise SessionNotActiveError(session.id, session.status.value)

    def should_complete(self, session: InterviewSession) -> bool:
        return len(session.answers) >= session.total_questions

    def complete(self, session: InterviewSession) -> None:
        """Transition to COMPLETED. Final."""
        if session.status == SessionStatus.COMPLETED:
            return
        session.status = SessionStatus.COMPLETED
        session.end_time = datetime.now()
        logger.info(
            f"Event: {SessionEvent.SESSION_COMPLETED.value} for {session.id}. "
            f"Score {session.total_score}/{session.max_possible_score}"
        )
