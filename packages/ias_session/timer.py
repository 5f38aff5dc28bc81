import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger("ias.timer")


class AnswerTimer:
    """
    Countdown for the question currently on screen.

    With a tick_interval it runs on a daemon thread; with tick_interval=None
    nothing runs by itself and the owner drives it through tick().
    Reaching 0 with a non-empty draft calls on_expire(draft) exactly once.
    A paused or cancelled timer never fires.
    """

    def __init__(
        self,
        time_limit: float,
        on_expire: Callable[[str], None],
        draft_provider: Callable[[], str],
        tick_interval: Optional[float] = 1.0,
        name: str = "answer-timer"
    ):
        self.time_limit = float(time_limit)
        self.tick_interval = tick_interval
        self.name = name
        self._on_expire = on_expire
        self._draft_provider = draft_provider

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._remaining = self.time_limit
        self._started = False
        self._running = False
        self._cancelled = False
        self._expired = False
        self._fired = False

    @property
    def remaining(self) -> float:
        with self._lock:
            return self._remaining

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def fired(self) -> bool:
        with self._lock:
            return self._fired

    @property
    def expired(self) -> bool:
        with self._lock:
            return self._expired

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def start(self) -> None:
        with self._lock:
            if self._started or self._cancelled:
                return
            self._started = True
            self._running = True

        if self.tick_interval is not None:
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()

    def pause(self) -> bool:
        with self._lock:
            if not self._running:
                return False
            self._running = False
            return True

    def resume(self) -> bool:
        with self._lock:
            if (not self._started or self._running or self._cancelled
                    or self._expired or self._remaining <= 0):
                return False
            self._running = True
            return True

    def cancel(self) -> None:
        """
        Stop for good. Once this returns no on_expire call can begin.
        Does not join the thread: the caller may hold a lock the callback needs.
        """
        with self._lock:
            self._cancelled = True
            self._running = False
        self._stop.set()

    def tick(self, seconds: Optional[float] = None) -> bool:
        """
        Advance the countdown by one step.
        Returns False once the timer is done (cancelled, expired or fired).
        """
        step = seconds if seconds is not None else (self.tick_interval or 1.0)
        with self._lock:
            if self._cancelled or self._expired:
                return False
            if not self._running:
                return True

            self._remaining = max(0.0, self._remaining - step)
            if self._remaining > 0:
                return True

            self._running = False
            self._expired = True
            draft = self._draft_provider() or ""
            if not draft.strip():
                logger.info(f"{self.name} expired with an empty draft; nothing to submit")
                return False
            self._fired = True

        try:
            self._on_expire(draft)
        except Exception:
            logger.exception(f"{self.name} auto-submit callback failed")
        return False

    def _run(self) -> None:
        while not self._stop.wait(self.tick_interval):
            if not self.tick():
                break
