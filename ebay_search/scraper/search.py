from typing import Optional

from ebay_search.core.config import settings
from ebay_search.core.logging_config import get_logger
from ebay_search.models.listing import SearchResult
from ebay_search.models.request import SearchRequest
from ebay_search.scraper.ebay import parse_search_page
from ebay_search.scraper.simple_http import DocumentSource, HttpDocumentSource

logger = get_logger(__name__)


async def search(
    request: SearchRequest,
    source: Optional[DocumentSource] = None,
    base_url: Optional[str] = None,
) -> SearchResult:
    """
    Fetches one search results page and extracts it.

    Args:
        request: Search parameters
        source: Document source, defaults to HttpDocumentSource()
        base_url: Search endpoint, defaults to settings.EBAY_BASE_URL

    Returns:
        SearchResult whose source_url is the final URL after redirects

    Raises:
        DocumentFetchError: the page could not be fetched
        StructuralMismatchError: the page is not a list view results page
    """
    source = source or HttpDocumentSource()
    url = request.build_url(base_url or settings.EBAY_BASE_URL)

    logger.info("fetching search page", url=url, query=request.query, page=request.page)
    document = await source.fetch(url)

    return parse_search_page(document.html, source_url=document.final_url)
