from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from packages.ias_core.errors import ConfigurationError


class IASConfig(BaseSettings):
    """
    Application-wide settings.
    Loaded from environment variables and the .env file.
    """
    PROJECT_NAME: str = "IAS Interview Assessment Engine"
    VERSION: str = "0.1.0"

    # Session store
    SESSION_TTL_SEC: float = 3600.0
    # Background sweep for idle sessions (0 disables it)
    EVICTION_SWEEP_SEC: float = 60.0

    # Answer timer (seconds per tick)
    TIMER_TICK_SEC: float = 1.0

    # In-flight operation claim is considered stale after this many seconds
    CLAIM_TIMEOUT_SEC: float = 60.0

    # Question defaults when the generator omits them
    DEFAULT_TIME_LIMIT_SEC: int = 240
    DEFAULT_MAX_SCORE: int = 10

    # Score given by the neutral evaluation when the evaluator fails
    FALLBACK_EVALUATION_SCORE: int = 5

    # Mock collaborators
    MOCK_LATENCY_MS: int = 0

    # Optional JSON file replacing the built-in fallback bank
    FALLBACK_BANK_PATH: Optional[str] = None

    # Logging (LOG_DIR defaults to <repo>/logs/engine)
    LOG_DIR: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @classmethod
    def load(cls) -> "IASConfig":
        """
        Load settings, wrapping any failure in ConfigurationError.
        """
        try:
            return cls()
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}") from e
