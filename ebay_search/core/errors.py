"""
Error types and structured error capture.

Field-level parse failures never reach this module: extractors fall back to
their documented defaults. Only failures that make a whole call meaningless
are raised:

- StructuralMismatchError: the document is not a recognizable search page
- DocumentFetchError: the document source gave up after its retries

Usage:
    try:
        result = parse_search_page(html)
    except EbaySearchError as exc:
        capture_exception(exc, context={"source_url": url})
        raise
"""

from typing import Optional, Any, Dict
from datetime import datetime, timezone

import structlog

logger = structlog.get_logger(__name__)

__all__ = [
    "EbaySearchError",
    "StructuralMismatchError",
    "DocumentFetchError",
    "capture_exception",
]


class EbaySearchError(Exception):
    """Base class for all errors raised by the search pipeline."""


class StructuralMismatchError(EbaySearchError):
    """A required structural anchor is missing from the document."""

    def __init__(self, selector: str, message: Optional[str] = None):
        self.selector = selector
        super().__init__(message or f"Document has no element matching {selector!r}; not a search results page")


class DocumentFetchError(EbaySearchError):
    """The document source could not produce a usable page."""

    def __init__(self, url: str, attempts: int, cause: Optional[BaseException] = None):
        self.url = url
        self.attempts = attempts
        self.cause = cause
        super().__init__(f"Failed to fetch {url} after {attempts} attempts: {cause}")


def capture_exception(
    exc: BaseException,
    context: Optional[Dict[str, Any]] = None,
    level: str = "error",
) -> None:
    """
    Log an exception as a structured event.

    Args:
        exc: Exception to capture
        context: Additional context dict (e.g., {"source_url": url})
        level: Log level name (debug, info, warning, error)
    """
    enriched_context = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "error_type": type(exc).__name__,
        **(context or {}),
    }

    log_func = getattr(logger, level, logger.error)
    log_func("Exception captured", exc_info=exc, **enriched_context)
