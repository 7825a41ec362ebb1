import urllib.parse
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .listing import ItemCondition

# eBay condition filter ids (LH_ItemCondition)
CONDITION_IDS = {
    ItemCondition.NEW: "1000",
    ItemCondition.REFURBISHED: "2500",
    ItemCondition.USED: "3000",
    ItemCondition.DEFECTIVE: "7000",
    ItemCondition.NOT_SPECIFIED: "10",
}


class SearchRequest(BaseModel):
    """Parameters of one search results page."""

    query: str
    page: int = Field(default=1, ge=1)
    per_page: Literal[25, 50, 100, 200] = 50
    conditions: List[ItemCondition] = Field(default_factory=list)
    auction_only: bool = False
    buy_now_only: bool = False
    zip_code: Optional[str] = None
    radius_km: Optional[int] = Field(default=None, gt=0)
    category_id: Optional[str] = None

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be empty")
        return v

    def build_url(self, base_url: str) -> str:
        """
        Constructs the search URL for this request.

        Args:
            base_url: Search endpoint, e.g. "https://www.ebay.de/sch/i.html".

        Returns:
            A search URL that renders the list view layout.
        """
        params = {
            "_nkw": self.query,
            "_pgn": str(self.page),
            "_ipg": str(self.per_page),
            "_dmd": "1",  # list view, the layout the parser understands
        }

        condition_ids = [CONDITION_IDS[c] for c in self.conditions if c in CONDITION_IDS]
        if condition_ids:
            params["LH_ItemCondition"] = "|".join(condition_ids)

        if self.auction_only:
            params["LH_Auction"] = "1"
        if self.buy_now_only:
            params["LH_BIN"] = "1"

        if self.zip_code:
            params["_stpos"] = self.zip_code
            if self.radius_km:
                params["_sadis"] = str(self.radius_km)

        if self.category_id:
            params["_sacat"] = self.category_id

        query_string = urllib.parse.urlencode(params)
        return f"{base_url}?{query_string}"
