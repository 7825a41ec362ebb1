"""
Test fixtures for ebay_search tests.

Provides builders for ebay.de list view markup: single listing nodes and
complete search pages.
"""

from typing import List, Optional

import pytest

from ebay_search.scraper.element import SoupElement


def listing_html(
    listing_id: str = "100",
    rank: Optional[str] = None,
    iid: Optional[str] = None,
    title: str = "LEGO Technic 42100 Liebherr",
    title_badge: str = "",
    subtitles: Optional[List[str]] = None,
    price: str = "EUR 249,99",
    currency: str = "EUR",
    fee: Optional[str] = "+EUR 5,99 Versand",
    format_text: str = "Sofort-Kaufen",
    image_src: Optional[str] = "https://i.ebayimg.com/thumbs/images/g/abc123/s-l225.jpg",
    image_imgurl: Optional[str] = None,
    newly: bool = False,
    plus: bool = False,
) -> str:
    """Markup of one <li> result node as rendered by the list view."""
    rank_attr = f' r="{rank}"' if rank is not None else ""
    iid_attr = f' iid="{iid if iid is not None else listing_id}"'

    img_attrs = ""
    if image_src is not None:
        img_attrs += f' src="{image_src}"'
    if image_imgurl is not None:
        img_attrs += f' imgurl="{image_imgurl}"'
    image = f'<img class="img"{img_attrs}>' if img_attrs else ""

    subtitle_html = "".join(f'<div class="lvsubtitle">{s}</div>' for s in (subtitles or []))
    newly_html = '<span class="newly">Neues Angebot</span>' if newly else ""
    plus_html = '<span class="eplus-icon"></span>' if plus else ""
    fee_html = f'<li class="lvshipping"><span class="fee">{fee}</span></li>' if fee is not None else ""
    price_html = (
        f'<li class="lvprice prc"><span class="bold"><b>{currency}</b> {price.replace(currency, "").strip()}</span></li>'
        if currency
        else f'<li class="lvprice prc"><span class="bold">{price}</span></li>'
    )

    return f"""
    <li class="sresult lvresult" listingid="{listing_id}"{rank_attr}>
      <div class="lvpic pic img left"{iid_attr}>
        <div class="lvpicinner full-width picW">{image}</div>
      </div>
      <h3 class="lvtitle"><a href="https://www.ebay.de/itm/{listing_id}">{newly_html}{title}{title_badge}</a></h3>
      {subtitle_html}
      <ul class="lvprices left space-zero">
        {price_html}
        <li class="lvformat"><span>{format_text}</span></li>
        {fee_html}
      </ul>
      {plus_html}
    </li>
    """


def page_html(
    listings: Optional[List[str]] = None,
    total: Optional[str] = "1.234",
    zip_label: Optional[str] = "10115 Berlin",
    facets: Optional[List[tuple]] = None,
    with_container: bool = True,
) -> str:
    """Markup of a complete search results page."""
    header = (
        f'<div class="rsHdr"><span class="rcnt">{total}</span> Ergebnisse</div>' if total is not None else ""
    )
    location = (
        f'<a href="#" aria-describedby="loczip">{zip_label}</a>' if zip_label is not None else ""
    )
    facet_html = "".join(
        f'<div class="cbx"><input type="checkbox" name="LH_ItemCondition" value="{value}">'
        f'<span class="cbx">{label}</span><span class="cnt">{count}</span></div>'
        for value, label, count in (facets or [])
    )
    container = (
        f'<ul id="ListViewInner">{"".join(listings or [])}</ul>' if with_container else ""
    )
    return f"""
    <html><head><title>eBay</title></head>
    <body>
      {header}
      <div id="LeftNavContainer">{location}{facet_html}</div>
      <div id="Results">{container}</div>
    </body></html>
    """


def parse_node(html: str) -> SoupElement:
    """First listing node of the given markup."""
    node = SoupElement.parse(html).select_one("li[listingid]")
    assert node is not None
    return node


@pytest.fixture
def listing_node():
    """Builder fixture: listing_node(**kwargs) -> SoupElement."""

    def _build(**kwargs) -> SoupElement:
        return parse_node(listing_html(**kwargs))

    return _build
