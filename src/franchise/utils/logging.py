"""Logging configuration for the franchise domain.

Stdlib logging goes to stdout; structlog renders JSON in production and
staging and a console view with rich tracebacks everywhere else.
"""

import logging
import os
import sys

import structlog

_ENV_LOG_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def get_log_level() -> str:
    env = (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()
    return os.getenv("LOG_LEVEL", _ENV_LOG_LEVELS.get(env, "INFO"))


def _setup_stdlib_logging() -> None:
    log_level = get_log_level()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    for noisy in ("protean", "urllib3", "httpx", "openai", "stripe"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _renderer():
    if os.getenv("ENVIRONMENT", "development").lower() in ("production", "staging"):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
    )


def configure_logging() -> None:
    """Configure stdlib logging and structlog for the app and the engine."""
    _setup_stdlib_logging()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
