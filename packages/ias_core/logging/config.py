import logging
import logging.config
import os
from typing import Any, Dict, Optional


BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../"))
DEFAULT_LOG_DIR = os.path.join(BASE_DIR, "logs", "engine")

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(filename)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _rotating_file(filename: str, level: str) -> Dict[str, Any]:
    return {
        "level": level,
        "class": "logging.handlers.TimedRotatingFileHandler",
        "filename": filename,
        "when": "midnight",
        "interval": 1,
        "backupCount": 30,
        "encoding": "utf-8",
        "formatter": "standard",
    }


def build_logging_config(log_dir: str = DEFAULT_LOG_DIR, console_level: str = "INFO") -> Dict[str, Any]:
    """
    Console + daily rotating engine.log / engine.error.log under log_dir.
    Engine loggers are named ias.* (ias.session, ias.timer, ias.service, ...).
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "console": {
                "level": console_level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
            },
            "file_engine": _rotating_file(os.path.join(log_dir, "engine.log"), "DEBUG"),
            "file_error": _rotating_file(os.path.join(log_dir, "engine.error.log"), "ERROR"),
        },
        "root": {
            "handlers": ["console", "file_engine", "file_error"],
            "level": "DEBUG",
        },
    }


LOGGING_CONFIG = build_logging_config()

_configured = False


def setup_logging(log_dir: Optional[str] = None, console_level: str = "INFO"):
    """Apply the engine logging configuration."""
    global _configured
    log_dir = log_dir or DEFAULT_LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    logging.config.dictConfig(build_logging_config(log_dir, console_level))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance, configuring defaults on first use."""
    if not _configured and not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
