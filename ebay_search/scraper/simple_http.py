"""
HTTP document source for search pages.
Uses httpx with browser-like headers; the list view is served as plain HTML.
"""

import asyncio
import random
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from ebay_search.core.config import settings
from ebay_search.core.errors import DocumentFetchError
from ebay_search.core.logging_config import get_logger

logger = get_logger(__name__)

# Rotate through multiple user agents
USER_AGENTS = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
]

MIN_CONTENT_LENGTH = 100


@dataclass(frozen=True)
class FetchedDocument:
    html: str
    final_url: str  # after redirects


class DocumentSource(Protocol):
    async def fetch(self, url: str) -> FetchedDocument: ...


def _build_headers() -> dict:
    return {
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
        "Accept-Language": "de-DE,de;q=0.9,en;q=0.5",
        "DNT": "1",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "none",
        "Sec-Fetch-User": "?1",
        "Cache-Control": "max-age=0",
    }


class HttpDocumentSource:
    """
    Fetches pages with retries and exponential backoff.

    Args:
        retries: Attempts before giving up (defaults to settings.HTTP_RETRIES)
        timeout: Per-request timeout in seconds
        backoff_base: First backoff delay in seconds, doubled per attempt
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        retries: Optional[int] = None,
        timeout: Optional[float] = None,
        backoff_base: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.retries = max(1, retries if retries is not None else settings.HTTP_RETRIES)
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.backoff_base = backoff_base if backoff_base is not None else settings.HTTP_BACKOFF_BASE
        self.transport = transport

    async def _get(self, url: str) -> FetchedDocument:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=_build_headers(),
            transport=self.transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()

            content = response.text
            if not content or len(content) < MIN_CONTENT_LENGTH:
                raise httpx.HTTPError("Empty or invalid page content")

            return FetchedDocument(html=content, final_url=str(response.url))

    async def fetch(self, url: str) -> FetchedDocument:
        last_error: Optional[Exception] = None

        for attempt in range(self.retries):
            try:
                return await self._get(url)
            except httpx.HTTPError as e:
                last_error = e
                logger.warning(
                    "fetch attempt failed",
                    url=url,
                    attempt=attempt + 1,
                    retries=self.retries,
                    error=str(e),
                )

                if attempt < self.retries - 1:
                    # Exponential backoff
                    wait_time = self.backoff_base * (2**attempt) + random.uniform(0, self.backoff_base)
                    await asyncio.sleep(wait_time)

        raise DocumentFetchError(url, self.retries, last_error)
