from functools import lru_cache

from packages.ias_core.config import IASConfig
from packages.ias_eval.aggregator import EvaluationAggregator
from packages.ias_qbank.repository import InMemoryFallbackRepository, JsonFileFallbackRepository
from packages.ias_qbank.repository_interface import FallbackQuestionRepository
from packages.ias_qbank.service import FallbackQuestionBank
from packages.ias_session.infrastructure.memory_repo import MemorySessionStore
from packages.ias_session.lifecycle import SessionLifecycle
from packages.ias_session.repository import SessionStore
from packages.ias_session.sequencer import QuestionSequencer
from packages.ias_service.concurrency import ConcurrencyManager
from packages.ias_service.session_service import InterviewSessionService

# --- Providers (External Adapters) ---

from packages.ias_providers.question import QuestionGenerator
from packages.ias_providers.mock_question import MockQuestionGenerator
from packages.ias_providers.evaluation import AnswerEvaluator
from packages.ias_providers.mock_evaluation import MockAnswerEvaluator


@lru_cache
def get_config() -> IASConfig:
    return IASConfig.load()

@lru_cache
def get_question_generator() -> QuestionGenerator:
    """
    Singleton Question Generator (Mock for now).
    """
    config = get_config()
    return MockQuestionGenerator(
        latency=config.MOCK_LATENCY_MS / 1000.0,
        time_limit=config.DEFAULT_TIME_LIMIT_SEC,
        max_score=config.DEFAULT_MAX_SCORE
    )

@lru_cache
def get_answer_evaluator() -> AnswerEvaluator:
    """
    Singleton Answer Evaluator (Mock for now).
    """
    return MockAnswerEvaluator(latency=get_config().MOCK_LATENCY_MS / 1000.0)

# --- Repositories (Storage) ---

@lru_cache
def get_fallback_repository() -> FallbackQuestionRepository:
    """
    Built-in fallback table unless FALLBACK_BANK_PATH points at a JSON file.
    """
    path = get_config().FALLBACK_BANK_PATH
    if path:
        return JsonFileFallbackRepository(file_path=path)
    return InMemoryFallbackRepository()

@lru_cache
def get_session_store() -> SessionStore:
    """
    Singleton Session Store (Memory).
    Must be shared across requests to maintain state.
    """
    return MemorySessionStore(ttl_sec=get_config().SESSION_TTL_SEC)

# --- Domain Services (Application Logic) ---

@lru_cache
def get_fallback_bank() -> FallbackQuestionBank:
    return FallbackQuestionBank(repository=get_fallback_repository())

@lru_cache
def get_session_service() -> InterviewSessionService:
    """
    Singleton Session Service.
    Claims and timers live in memory, so every request must share one instance.
    """
    config = get_config()
    lifecycle = SessionLifecycle()
    return InterviewSessionService(
        store=get_session_store(),
        sequencer=QuestionSequencer(
            generator=get_question_generator(),
            fallback_bank=get_fallback_bank(),
            lifecycle=lifecycle,
            default_time_limit=config.DEFAULT_TIME_LIMIT_SEC,
            default_max_score=config.DEFAULT_MAX_SCORE
        ),
        aggregator=EvaluationAggregator(
            evaluator=get_answer_evaluator(),
            lifecycle=lifecycle,
            fallback_score=config.FALLBACK_EVALUATION_SCORE
        ),
        fallback_bank=get_fallback_bank(),
        lifecycle=lifecycle,
        concurrency_manager=ConcurrencyManager(claim_timeout_sec=config.CLAIM_TIMEOUT_SEC),
        timer_tick_sec=config.TIMER_TICK_SEC
    )
