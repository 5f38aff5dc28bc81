from typing import Optional, Dict, Any, List


class IASBaseError(Exception):
    """
    Top-level exception for the interview assessment engine.
    Every engine error derives from this class so the API layer can map it
    to a response without inspecting messages.

    Attributes:
        code (str): Error identifier (e.g. 'SESS_STALE')
        message (str): Human readable message
        details (Optional[Dict[str, Any]]): Extra debugging information
    """
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code}] {message}")


class ConfigurationError(IASBaseError):
    """Raised when settings cannot be loaded or validated."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="CONF_ERROR", message=message, details=details)


class ValidationError(IASBaseError):
    """
    Bad setup or submission input. Never retried automatically.
    details["errors"] lists every violated field.
    """
    def __init__(self, errors: List[str], details: Optional[Dict[str, Any]] = None):
        merged = dict(details or {})
        merged["errors"] = list(errors)
        super().__init__(code="VALIDATION_ERROR", message="; ".join(errors), details=merged)

    @property
    def errors(self) -> List[str]:
        return self.details["errors"]


class GenerationFailure(IASBaseError):
    """Question generation failed and no fallback question exists."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="GEN_FAILURE", message=message, details=details)


class EvaluationFailure(IASBaseError):
    """
    Evaluation collaborator failed.
    Recorded on the degraded evaluation, never raised to engine callers.
    """
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="EVAL_FAILURE", message=message, details=details)


class SessionNotFoundError(IASBaseError):
    def __init__(self, session_id: str):
        super().__init__(
            code="SESS_NOT_FOUND",
            message=f"Session {session_id} not found",
            details={"session_id": session_id}
        )


class FinalizedSessionError(IASBaseError):
    """Mutation attempted on a completed session."""
    def __init__(self, session_id: str):
        super().__init__(
            code="SESS_FINALIZED",
            message=f"Session {session_id} is completed and read-only",
            details={"session_id": session_id}
        )


class SessionNotActiveError(IASBaseError):
    """Mutation attempted on a paused session."""
    def __init__(self, session_id: str, status: str):
        super().__init__(
            code="SESS_NOT_ACTIVE",
            message=f"Session {session_id} is not active (status: {status})",
            details={"session_id": session_id, "status": status}
        )


class StaleSubmissionError(IASBaseError):
    """Answer does not correspond to the pending question."""
    def __init__(self, session_id: str, reason: str):
        super().__init__(
            code="SESS_STALE",
            message=f"Stale submission for session {session_id}: {reason}",
            details={"session_id": session_id, "reason": reason}
        )


class SessionBusyError(IASBaseError):
    """Another mutating operation is in flight for the same session (fail-fast)."""
    def __init__(self, session_id: str, operation: str):
        super().__init__(
            code="SESS_BUSY",
            message=f"Session {session_id} is busy with '{operation}'",
            details={"session_id": session_id, "operation": operation}
        )


class ResultsNotReadyError(IASBaseError):
    def __init__(self, session_id: str, status: str):
        super().__init__(
            code="RESULTS_NOT_READY",
            message=f"Results for session {session_id} are not available (status: {status})",
            details={"session_id": session_id, "status": status}
        )
