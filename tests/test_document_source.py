"""
Tests for the HTTP document source and the search orchestration.

HTTP is served by httpx.MockTransport; no network access.
"""

import httpx
import pytest

from conftest import listing_html, page_html
from ebay_search.core.errors import DocumentFetchError, StructuralMismatchError
from ebay_search.models import SearchRequest
from ebay_search.scraper.search import search
from ebay_search.scraper.simple_http import FetchedDocument, HttpDocumentSource

BASE_URL = "https://www.ebay.de/sch/i.html"


class FakeSource:
    """Document source returning canned markup."""

    def __init__(self, html: str, final_url: str = ""):
        self.html = html
        self.final_url = final_url
        self.requested = []

    async def fetch(self, url: str) -> FetchedDocument:
        self.requested.append(url)
        return FetchedDocument(html=self.html, final_url=self.final_url or url)


def _source(handler, retries: int = 3) -> HttpDocumentSource:
    return HttpDocumentSource(
        retries=retries,
        timeout=5.0,
        backoff_base=0.0,
        transport=httpx.MockTransport(handler),
    )


class TestHttpDocumentSource:

    @pytest.mark.asyncio
    async def test_returns_html_and_final_url(self):
        html = page_html()

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/sch/i.html":
                return httpx.Response(301, headers={"Location": "https://www.ebay.de/sch/lego/i.html?_nkw=lego"})
            return httpx.Response(200, text=html)

        document = await _source(handler).fetch(BASE_URL + "?_nkw=lego")

        assert document.html == html
        assert document.final_url == "https://www.ebay.de/sch/lego/i.html?_nkw=lego"

    @pytest.mark.asyncio
    async def test_sends_browser_headers(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, text=page_html())

        await _source(handler).fetch(BASE_URL)

        assert seen["user-agent"].startswith("Mozilla/5.0")
        assert "de-DE" in seen["accept-language"]

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 3:
                return httpx.Response(503)
            return httpx.Response(200, text=page_html())

        document = await _source(handler, retries=3).fetch(BASE_URL)

        assert len(calls) == 3
        assert "ListViewInner" in document.html

    @pytest.mark.asyncio
    async def test_gives_up_after_retries(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(DocumentFetchError) as exc_info:
            await _source(handler, retries=2).fetch(BASE_URL)

        assert len(calls) == 2
        assert exc_info.value.attempts == 2
        assert exc_info.value.url == BASE_URL

    @pytest.mark.asyncio
    async def test_short_body_counts_as_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html></html>")

        with pytest.raises(DocumentFetchError):
            await _source(handler, retries=1).fetch(BASE_URL)

    @pytest.mark.asyncio
    async def test_network_error_is_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DocumentFetchError) as exc_info:
            await _source(handler, retries=1).fetch(BASE_URL)

        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_at_least_one_attempt(self):
        assert HttpDocumentSource(retries=0).retries == 1


class TestSearch:

    @pytest.mark.asyncio
    async def test_fetches_request_url_and_parses(self):
        html = page_html(listings=[
            listing_html(listing_id="n0"),
            listing_html(listing_id="n1", rank="1"),
            listing_html(listing_id="n2", rank="1"),
        ])
        source = FakeSource(html, final_url="https://www.ebay.de/sch/i.html?_nkw=lego&_pgn=2")
        request = SearchRequest(query="lego", page=2)

        result = await search(request, source=source, base_url=BASE_URL)

        assert source.requested == [request.build_url(BASE_URL)]
        assert result.source_url == "https://www.ebay.de/sch/i.html?_nkw=lego&_pgn=2"
        assert [item.id for item in result.items] == ["n0"]
        assert [ad.id for ad in result.ads] == ["n2"]

    @pytest.mark.asyncio
    async def test_uses_configured_base_url(self):
        source = FakeSource(page_html())

        await search(SearchRequest(query="lego"), source=source)

        assert source.requested[0].startswith("https://www.ebay.de/sch/i.html?")

    @pytest.mark.asyncio
    async def test_structural_mismatch_propagates(self):
        source = FakeSource(page_html(with_container=False))

        with pytest.raises(StructuralMismatchError):
            await search(SearchRequest(query="lego"), source=source)

    @pytest.mark.asyncio
    async def test_end_to_end_over_http(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["_nkw"] == "lego"
            return httpx.Response(200, text=page_html(listings=[listing_html(listing_id="n0")], total="12"))

        result = await search(SearchRequest(query="lego"), source=_source(handler), base_url=BASE_URL)

        assert result.total_count == 12
        assert result.source_url.startswith(BASE_URL)
        assert [item.id for item in result.items] == ["n0"]
