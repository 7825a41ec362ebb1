"""
Per-field extractors for one listing node of the ebay.de list view.

Every extractor is independent and side-effect free. Missing or malformed
markup never raises: each field falls back to its default (empty string,
UNKNOWN, a price/shipping sentinel, no image).
"""

import re
from typing import List, Optional

from ebay_search.models.listing import (
    ItemCondition,
    ItemImage,
    PRICE_NOT_FOUND,
    SHIPPING_NOT_FOUND,
)
from ebay_search.scraper.element import Element, joined_text
from ebay_search.scraper.utils import extract_decimal

# /<type>/<identifier>/ inside a CDN thumbnail URL
IMAGE_PATTERN = re.compile(r"/((\w)/(.*))/")

THUMBNAIL_MARKER = "thumbs"
PRICE_RANGE_VARIANT = "m"

# Markers in the lower-cased format line ("Sofort-Kaufen", "5 Gebote", "Preisvorschlag")
AUCTION_MARKER = "gebot"
BUY_NOW_MARKER = "sofort-kauf"
BEST_OFFER_MARKER = "preisvorschlag"

PLUS_PROGRAM_CLASS = "eplus-icon"


def extract_id(item: Element) -> str:
    if item.has_attr("iid"):
        return item.attr("iid")
    carriers = item.by_attribute("iid")
    return carriers[0].attr("iid") if carriers else ""


def extract_title(item: Element) -> str:
    """
    Title anchor text without the badges and icons nested inside it.
    """
    title_elem = item.select_one(".lvtitle > a")
    if title_elem is None:
        return ""
    return title_elem.own_text()


def extract_condition(item: Element) -> ItemCondition:
    subtitles = item.by_class("lvsubtitle")
    if not subtitles:
        return ItemCondition.UNKNOWN
    # The condition is always the last subtitle line
    return ItemCondition.parse(subtitles[-1].text())


def extract_price(item: Element) -> float:
    price = extract_decimal(joined_text(item.by_class("lvprice")))
    return price if price is not None else PRICE_NOT_FOUND


def extract_shipping(item: Element) -> float:
    """
    Shipping fee, or 0 when no separate fee is shown.

    0 also covers free shipping; the two are not distinguishable on the page.
    """
    shipping = extract_decimal(joined_text(item.by_class("fee")))
    return shipping if shipping is not None else SHIPPING_NOT_FOUND


def extract_currency(item: Element) -> str:
    currency_elem = item.select_one("li.lvprice > span b")
    return currency_elem.text() if currency_elem is not None else ""


def _format_text(item: Element) -> str:
    return joined_text(item.by_class("lvformat")).lower()


def is_auction(item: Element) -> bool:
    return AUCTION_MARKER in _format_text(item)


def is_buy_now(item: Element) -> bool:
    # Best offer listings can always be bought directly as well
    format_text = _format_text(item)
    return BUY_NOW_MARKER in format_text or BEST_OFFER_MARKER in format_text


def allows_offer(item: Element) -> bool:
    return BEST_OFFER_MARKER in _format_text(item)


def is_plus_program(item: Element) -> bool:
    return bool(item.by_class(PLUS_PROGRAM_CLASS))


def is_newly_listed(item: Element) -> bool:
    return item.select_one("span.newly") is not None


def parse_image_url(url: str) -> Optional[ItemImage]:
    """
    Splits a thumbnail URL into image variant and identifier.

    Example:
        "https://i.ebayimg.com/thumbs/images/m/xyz789/s-l225.jpg"
        -> ItemImage(identifier="xyz789", variant="m")
    """
    match = IMAGE_PATTERN.search(url)
    if not match:
        return None
    return ItemImage(identifier=match.group(3), variant=match.group(2))


def extract_images(item: Element) -> List[ItemImage]:
    """
    The single representative thumbnail of a listing, if any.

    Lazy-loaded images keep the real URL in "imgurl" and a placeholder in
    "src", so the URL is read from "imgurl" whenever the element carries one.
    """
    image_elem = item.select_one(f"img[src*={THUMBNAIL_MARKER}]")
    if image_elem is None:
        image_elem = item.select_one(f"img[imgurl*={THUMBNAIL_MARKER}]")
    if image_elem is None:
        return []

    url = image_elem.attr("imgurl") or image_elem.attr("src")
    image = parse_image_url(url)
    return [image] if image is not None else []


def is_price_range(item: Element) -> bool:
    images = extract_images(item)
    return bool(images) and images[0].variant == PRICE_RANGE_VARIANT
