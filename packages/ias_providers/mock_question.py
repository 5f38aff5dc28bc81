import time
import threading
from typing import Iterable, Optional

from .question import QuestionGenerator, QuestionGenerationResult, QuestionRequest


class MockQuestionGenerator(QuestionGenerator):
    """
    Mock implementation for testing the fallback bank.
    Simulates latency and failure scenarios.
    fail_on_calls holds 1-based call numbers that should fail.
    """
    def __init__(
        self,
        should_fail: bool = False,
        latency: float = 0.0,
        fail_on_calls: Optional[Iterable[int]] = None,
        time_limit: int = 240,
        max_score: float = 10
    ):
        self.should_fail = should_fail
        self.latency = latency
        self.fail_on_calls = set(fail_on_calls or [])
        self.time_limit = time_limit
        self.max_score = max_score
        self.calls = 0
        self.requests = []
        self._lock = threading.Lock()

    def generate_question(self, request: QuestionRequest) -> QuestionGenerationResult:
        with self._lock:
            self.calls += 1
            call_no = self.calls
            self.requests.append(request)

        if self.latency > 0:
            time.sleep(self.latency)

        if self.should_fail or call_no in self.fail_on_calls:
            return QuestionGenerationResult({}, {}, False, "Mock Failure: Intentional Error")

        topic = request.topic or "general"
        text = (
            f"As a {request.position} in {request.industry}, walk me through your "
            f"experience with {topic.replace('_', ' ')} ({request.category}, {request.difficulty})."
        )
        return QuestionGenerationResult(
            payload={
                "text": text,
                "category": request.category,
                "difficulty": request.difficulty,
                "expected_keywords": [topic.replace("_", " "), request.position.lower()],
                "time_limit": self.time_limit,
                "max_score": self.max_score,
                "topic": topic,
                "depth": request.depth,
            },
            metadata={
                "model": "mock-generator",
                "timestamp": time.time(),
                "origin_type": "GENERATED"
            },
            success=True
        )
