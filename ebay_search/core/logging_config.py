"""
Structured logging configuration using structlog.

Provides JSON-formatted logs when LOG_JSON is set (searchable/aggregatable)
and human-readable colored output otherwise.

Usage:
    from ebay_search.core.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("search page parsed", items=48, ads=2, total_count=1234)

Output with LOG_JSON=true:
    {"event": "search page parsed", "items": 48, "ads": 2, "total_count": 1234,
     "timestamp": "2024-01-01T12:00:00Z", "level": "info"}

Output in development (colored):
    2024-01-01 12:00:00 [info     ] search page parsed   items=48 ads=2 total_count=1234
"""

import logging
import sys
from typing import Any

import structlog

from ebay_search.core.config import settings

IS_JSON = settings.LOG_JSON
IS_TEST = "pytest" in sys.modules


def configure_logging() -> None:
    """Configure structlog with appropriate processors for the environment."""

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if IS_JSON:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=not IS_TEST),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # Capture logs from third-party libraries; stdout stays free for command output
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    # Reduce noise from chatty libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        A structlog bound logger with JSON/console output based on settings
    """
    return structlog.get_logger(name)


# Configure on import
configure_logging()
