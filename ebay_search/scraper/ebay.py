import re
from typing import Dict, List, Optional, Tuple

from ebay_search.core.errors import StructuralMismatchError
from ebay_search.core.logging_config import get_logger
from ebay_search.models.listing import ItemCondition, Listing, SearchResult
from ebay_search.scraper import fields
from ebay_search.scraper.element import Element, SoupElement
from ebay_search.scraper.utils import strip_grouping_punctuation

logger = get_logger(__name__)

LISTING_CONTAINER_SELECTOR = "#ListViewInner"
LISTING_NODE_SELECTOR = "li[listingid]"
RESULT_COUNT_SELECTOR = ".rsHdr .rcnt"
ZIP_SELECTOR = "a[aria-describedby=loczip]"
CONDITION_FILTER_SELECTOR = "input[name=LH_ItemCondition]"

# Digits with "." or "," thousands separators, e.g. "1.234.567"
COUNT_RUN_PATTERN = re.compile(r"\d[\d.,]*")


def parse_listing(item: Element) -> Listing:
    """
    Builds a Listing from one result node. Never fails; unreadable fields
    keep their defaults.
    """
    return Listing(
        id=fields.extract_id(item),
        title=fields.extract_title(item),
        is_new=fields.is_newly_listed(item),
        condition=fields.extract_condition(item),
        is_auction=fields.is_auction(item),
        is_buy_now=fields.is_buy_now(item),
        allows_offer=fields.allows_offer(item),
        is_price_range=fields.is_price_range(item),
        is_plus_program=fields.is_plus_program(item),
        price=fields.extract_price(item),
        shipping=fields.extract_shipping(item),
        currency=fields.extract_currency(item),
        images=fields.extract_images(item),
    )


def _is_top_ranked(item: Element) -> bool:
    return item.attr("r") == "1"


def segment_listings(container: Element) -> Tuple[List[Listing], List[Listing]]:
    """
    Splits the listing container into organic items and promoted ads.

    The page renders its top slot twice: once as the first node and once as
    the first node flagged r="1". The first node therefore always goes to
    items, and the first r="1" node is never reported as an ad.

    Returns:
        (items, ads), each in document order
    """
    items: List[Listing] = []
    ads: List[Listing] = []

    nodes = container.select(LISTING_NODE_SELECTOR)
    skipped_first_ad = False

    for index, node in enumerate(nodes):
        top_ranked = _is_top_ranked(node)

        if index == 0:
            items.append(parse_listing(node))
            if top_ranked:
                skipped_first_ad = True
            continue

        if not top_ranked:
            items.append(parse_listing(node))
        elif not skipped_first_ad:
            skipped_first_ad = True
        else:
            ads.append(parse_listing(node))

    return items, ads


def parse_total_count(document: Element) -> int:
    """
    Parses the total number of results from the page header ("1.234").
    """
    header = document.select_one(RESULT_COUNT_SELECTOR)
    if header is None:
        logger.warning("result count header missing", selector=RESULT_COUNT_SELECTOR)
        return 0
    text = header.text()
    match = COUNT_RUN_PATTERN.search(text)
    if not match:
        logger.warning("result count not parsable", raw=text)
        return 0
    return strip_grouping_punctuation(match.group(0))


def parse_zip(document: Element) -> str:
    zip_elem = document.select_one(ZIP_SELECTOR)
    return zip_elem.text() if zip_elem is not None else ""


def parse_condition_counts(document: Element) -> Dict[ItemCondition, int]:
    """
    Reads the condition facet: every filter checkbox is followed by its
    label and then by the count in parentheses, e.g. "Gebraucht" "(2.051)".
    """
    condition_counts: Dict[ItemCondition, int] = {}

    for condition_input in document.select(CONDITION_FILTER_SELECTOR):
        label = condition_input.next_element_sibling()
        count = label.next_element_sibling() if label is not None else None
        if label is None or count is None:
            logger.debug("condition facet incomplete", value=condition_input.attr("value"))
            continue

        try:
            value = strip_grouping_punctuation(count.text())
        except ValueError:
            logger.debug("condition facet count not parsable", raw=count.text())
            continue

        condition_counts[ItemCondition.parse(label.text())] = value

    return condition_counts


def aggregate(document: Element, source_url: str = "") -> SearchResult:
    """
    Extracts everything from a parsed search results page.

    Raises:
        StructuralMismatchError: the page has no listing container at all.
            A page with zero results still has an (empty) container.
    """
    container = document.select_one(LISTING_CONTAINER_SELECTOR)
    if container is None:
        raise StructuralMismatchError(LISTING_CONTAINER_SELECTOR)

    items, ads = segment_listings(container)

    result = SearchResult(
        source_url=source_url,
        items=items,
        ads=ads,
        total_count=parse_total_count(document),
        zip=parse_zip(document),
        condition_counts=parse_condition_counts(document),
    )

    logger.info(
        "search page parsed",
        source_url=source_url,
        items=len(result.items),
        ads=len(result.ads),
        total_count=result.total_count,
    )
    return result


def parse_search_page(html_content: str, source_url: Optional[str] = None) -> SearchResult:
    """
    Parses ebay.de list view HTML into a SearchResult.

    Args:
        html_content: Raw page markup.
        source_url: URL the markup was fetched from, kept as provenance.
    """
    return aggregate(SoupElement.parse(html_content), source_url=source_url or "")
