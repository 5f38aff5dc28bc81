import logging
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from packages.ias_core.errors import SessionBusyError, StaleSubmissionError

logger = logging.getLogger("ias.service")


@dataclass
class OperationClaim:
    token: str
    operation: str
    target: Optional[str]
    acquired_at: float


class ConcurrencyManager:
    """
    Single-writer discipline for mutating session operations.
    In-memory claims, one per session, with a FAIL-FAST policy: if a claim is
    held, immediately raise instead of waiting.
    A second submit for the question already being submitted is stale rather
    than busy (first writer wins). Claims older than claim_timeout_sec are
    taken over; the previous holder finds out through is_current().
    """

    def __init__(self, claim_timeout_sec: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.claim_timeout_sec = claim_timeout_sec
        self._clock = clock
        self._claims: Dict[str, OperationClaim] = {}
        self._lock = threading.Lock()

    def claim(self, session_id: str, operation: str, target: Optional[str] = None) -> str:
        now = self._clock()
        with self._lock:
            held = self._claims.get(session_id)
            if held is not None:
                if now - held.acquired_at > self.claim_timeout_sec:
                    logger.warning(
                        f"Taking over stale '{held.operation}' claim on {session_id} "
                        f"(held {now - held.acquired_at:.1f}s)"
                    )
                elif operation == "submit" and held.operation == "submit" and held.target == target:
                    raise StaleSubmissionError(session_id, f"answer for {target} is already being recorded")
                else:
                    raise SessionBusyError(session_id, held.operation)

            token = uuid.uuid4().hex
            self._claims[session_id] = OperationClaim(token, operation, target, now)
            return token

    def is_current(self, session_id: str, token: str) -> bool:
        with self._lock:
            held = self._claims.get(session_id)
            return held is not None and held.token == token

    def release(self, session_id: str, token: str) -> None:
        with self._lock:
            held = self._claims.get(session_id)
            if held is not None and held.token == token:
                del self._claims[session_id]

    def forget(self, session_id: str) -> None:
        with self._lock:
            self._claims.pop(session_id, None)
