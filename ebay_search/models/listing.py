from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


# Sentinels for values the page did not expose in a parsable form
PRICE_NOT_FOUND = -1.0
SHIPPING_NOT_FOUND = 0.0


class ItemCondition(str, Enum):
    """
    Item condition as shown by ebay.de.

    Declaration order is the matching order: the first member whose label is
    contained in the source text wins.
    """

    NEW = "Neu"
    REFURBISHED = "Refurbished"
    USED = "Gebraucht"
    DEFECTIVE = "Defekt"  # "Als Ersatzteil / defekt"
    NOT_SPECIFIED = "Nicht angegeben"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, text: str | None) -> "ItemCondition":
        """Map free text to a condition, case-insensitively. UNKNOWN if nothing matches."""
        if not text:
            return cls.UNKNOWN
        text_lower = text.lower()
        for condition in cls:
            if condition.value.lower() in text_lower:
                return condition
        return cls.UNKNOWN


class ItemImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str
    variant: str  # CDN image type code, "m" marks a price range listing


class Listing(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    is_new: bool = False
    condition: ItemCondition = ItemCondition.UNKNOWN
    is_auction: bool = False
    is_buy_now: bool = False
    allows_offer: bool = False
    is_price_range: bool = False
    is_plus_program: bool = False
    price: float = PRICE_NOT_FOUND
    shipping: float = SHIPPING_NOT_FOUND
    currency: str = ""
    images: List[ItemImage] = Field(default_factory=list)

    @property
    def has_price(self) -> bool:
        return self.price != PRICE_NOT_FOUND

    @property
    def has_shipping_fee(self) -> bool:
        # 0 covers both free shipping and a fee we could not read
        return self.shipping != SHIPPING_NOT_FOUND


class SearchResult(BaseModel):
    """Everything extracted from one search results page."""

    model_config = ConfigDict(frozen=True)

    source_url: str = ""
    items: List[Listing] = Field(default_factory=list)
    ads: List[Listing] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)
    zip: str = ""
    condition_counts: Dict[ItemCondition, NonNegativeInt] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping; condition keys and values use enum names."""
        data = self.model_dump(mode="json")
        data["condition_counts"] = {
            condition.name: count for condition, count in self.condition_counts.items()
        }
        for listing in data["items"] + data["ads"]:
            listing["condition"] = ItemCondition(listing["condition"]).name
        return data
