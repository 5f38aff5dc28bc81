from .config import setup_logging, get_logger, LOGGING_CONFIG

__all__ = ["setup_logging", "get_logger", "LOGGING_CONFIG"]
