from .listing import (
    ItemCondition,
    ItemImage,
    Listing,
    SearchResult,
    PRICE_NOT_FOUND,
    SHIPPING_NOT_FOUND,
)
from .request import SearchRequest, CONDITION_IDS

__all__ = [
    "ItemCondition",
    "ItemImage",
    "Listing",
    "SearchResult",
    "SearchRequest",
    "CONDITION_IDS",
    "PRICE_NOT_FOUND",
    "SHIPPING_NOT_FOUND",
]
