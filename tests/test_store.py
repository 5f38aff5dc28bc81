import unittest

from packages.ias_core.errors import SessionBusyError, StaleSubmissionError
from packages.ias_service.concurrency import ConcurrencyManager
from packages.ias_session.infrastructure.memory_repo import MemorySessionStore
from packages.ias_session.lifecycle import SessionLifecycle
from packages.ias_session.timer import AnswerTimer


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def new_session(lifecycle=None):
    return (lifecycle or SessionLifecycle()).create({
        "type": "behavioral",
        "industry": "Retail",
        "position": "Product Manager",
        "difficulty": "medium",
        "total_questions": 2,
    })


class TestMemorySessionStore(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.store = MemorySessionStore(ttl_sec=60, clock=self.clock)

    def test_add_and_get(self):
        session = new_session()
        record = self.store.add(session)
        self.assertIs(self.store.get(session.id), record)
        self.assertIsNone(self.store.get("session_missing"))
        self.assertEqual(self.store.session_ids(), [session.id])

    def test_idle_sessions_are_evicted(self):
        session = new_session()
        self.store.add(session)
        self.clock.advance(61)
        self.assertEqual(self.store.evict_expired(), [session.id])
        self.assertIsNone(self.store.get(session.id))

    def test_get_keeps_session_alive(self):
        session = new_session()
        self.store.add(session)
        self.clock.advance(45)
        self.store.get(session.id)
        self.clock.advance(45)
        self.assertEqual(self.store.evict_expired(), [])

    def test_expired_session_is_not_served(self):
        session = new_session()
        record = self.store.add(session)
        timer = AnswerTimer(30, lambda d: None, lambda: "", tick_interval=None)
        timer.start()
        record.timer = timer

        self.clock.advance(61)
        # no sweep has run; the lookup itself must refuse the idle session
        self.assertIsNone(self.store.get(session.id))
        self.assertTrue(timer.cancelled)
        self.assertEqual(self.store.session_ids(), [])
        self.assertEqual(self.store.evict_expired(), [])

    def test_add_evicts_first(self):
        old = new_session()
        self.store.add(old)
        self.clock.advance(120)
        self.store.add(new_session())
        self.assertNotIn(old.id, self.store.session_ids())

    def test_eviction_cancels_timer(self):
        record = self.store.add(new_session())
        timer = AnswerTimer(30, lambda d: None, lambda: "", tick_interval=None)
        timer.start()
        record.timer = timer

        self.clock.advance(61)
        self.store.evict_expired()
        self.assertTrue(timer.cancelled)
        self.assertIsNone(record.timer)

    def test_delete(self):
        session = new_session()
        record = self.store.add(session)
        timer = AnswerTimer(30, lambda d: None, lambda: "", tick_interval=None)
        record.timer = timer

        self.assertTrue(self.store.delete(session.id))
        self.assertFalse(self.store.delete(session.id))
        self.assertTrue(timer.cancelled)

    def test_stats(self):
        lifecycle = SessionLifecycle()
        sessions = [new_session(lifecycle) for _ in range(3)]
        for s in sessions:
            self.store.add(s)
        lifecycle.pause(sessions[0])
        lifecycle.complete(sessions[1])

        self.assertEqual(
            self.store.stats(),
            {"total": 3, "active": 1, "paused": 1, "completed": 1}
        )


class TestConcurrencyManager(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.manager = ConcurrencyManager(claim_timeout_sec=60, clock=self.clock)

    def test_fail_fast_while_claimed(self):
        token = self.manager.claim("s1", "next")
        with self.assertRaises(SessionBusyError):
            self.manager.claim("s1", "submit", "q_1")
        self.manager.release("s1", token)
        self.manager.claim("s1", "submit", "q_1")

    def test_sessions_are_independent(self):
        self.manager.claim("s1", "next")
        self.manager.claim("s2", "next")

    def test_duplicate_submit_is_stale(self):
        self.manager.claim("s1", "submit", "q_1")
        with self.assertRaises(StaleSubmissionError):
            self.manager.claim("s1", "submit", "q_1")

    def test_stale_claim_is_taken_over(self):
        old = self.manager.claim("s1", "next")
        self.clock.advance(61)
        new = self.manager.claim("s1", "next")

        self.assertFalse(self.manager.is_current("s1", old))
        self.assertTrue(self.manager.is_current("s1", new))

        # The old holder's release must not drop the new claim
        self.manager.release("s1", old)
        self.assertTrue(self.manager.is_current("s1", new))

    def test_forget(self):
        token = self.manager.claim("s1", "next")
        self.manager.forget("s1")
        self.assertFalse(self.manager.is_current("s1", token))
        self.manager.claim("s1", "next")


if __name__ == "__main__":
    unittest.main()
