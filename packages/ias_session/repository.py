import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .dto import InterviewSession
from .timer import AnswerTimer


@dataclass
class SessionRecord:
    """
    Everything the engine keeps per live session.
    `lock` guards the session and every other field here.
    """
    session: InterviewSession
    lock: threading.Lock = field(default_factory=threading.Lock)
    timer: Optional[AnswerTimer] = None
    draft: str = ""
    results: Optional[Any] = None
    last_access: float = field(default_factory=time.monotonic)

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None


class SessionStore(ABC):
    """
    Interface for the live session registry.
    Operations on different sessions never block one another.
    """

    @abstractmethod
    def add(self, session: InterviewSession) -> SessionRecord:
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[SessionRecord]:
        pass

    @abstractmethod
    def session_ids(self) -> List[str]:
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Remove a session and cancel its timer."""
        pass

    @abstractmethod
    def evict_expired(self) -> List[str]:
        """Drop sessions idle longer than the TTL. Returns evicted ids."""
        pass

    @abstractmethod
    def stats(self) -> Dict[str, int]:
        """Counts: total, active, paused, completed."""
        pass
