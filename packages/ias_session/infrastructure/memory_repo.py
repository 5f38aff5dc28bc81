import logging
import threading
import time
from typing import Callable, Dict, List, Optional

from packages.ias_session.dto import InterviewSession
from packages.ias_session.repository import SessionRecord, SessionStore
from packages.ias_session.state import SessionEvent, SessionStatus

logger = logging.getLogger("ias.session")


class MemorySessionStore(SessionStore):
    """
    In-Memory implementation of SessionStore.
    The registry lock only guards the dict; per-session work uses the
    record's own lock. Idle sessions are evicted lazily on add() and get(),
    and whenever evict_expired() is called.
    """

    def __init__(self, ttl_sec: float = 3600.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_sec = ttl_sec
        self._clock = clock
        self._records: Dict[str, SessionRecord] = {}
        self._registry_lock = threading.Lock()

    def add(self, session: InterviewSession) -> SessionRecord:
        self.evict_expired()
        record = SessionRecord(session=session, last_access=self._clock())
        with self._registry_lock:
            self._records[session.id] = record
        return record

    def get(self, session_id: str) -> Optional[SessionRecord]:
        """Live record, or None. A record idle past the TTL is evicted, not served."""
        now = self._clock()
        expired = None
        with self._registry_lock:
            record = self._records.get(session_id)
            if record is not None:
                if now - record.last_access > self.ttl_sec:
                    expired = self._records.pop(session_id)
                    record = None
                else:
                    record.last_access = now

        if expired is not None:
            self._discard(expired)
        return record

    def session_ids(self) -> List[str]:
        with self._registry_lock:
            return list(self._records)

    def delete(self, session_id: str) -> bool:
        with self._registry_lock:
            record = self._records.pop(session_id, None)
        if record is None:
            return False
        with record.lock:
            record.cancel_timer()
        logger.info(f"Deleted session {session_id}")
        return True

    def evict_expired(self) -> List[str]:
        now = self._clock()
        with self._registry_lock:
            expired = [
                sid for sid, rec in self._records.items()
                if now - rec.last_access > self.ttl_sec
            ]
            evicted = [self._records.pop(sid) for sid in expired]

        for record in evicted:
            self._discard(record)
        return expired

    def _discard(self, record: SessionRecord) -> None:
        with record.lock:
            record.cancel_timer()
        logger.warning(f"Event: {SessionEvent.SESSION_EVICTED.value} for {record.session.id}")

    def stats(self) -> Dict[str, int]:
        with self._registry_lock:
            sessions = [rec.session for rec in self._records.values()]
        counts = {status.value: 0 for status in SessionStatus}
        for s in sessions:
            counts[s.status.value] += 1
        return {"total": len(sessions), **counts}
