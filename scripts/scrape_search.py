#!/usr/bin/env python3
"""
Extract an ebay.de search results page and print it as JSON.

Usage:
    python scripts/scrape_search.py "lego 42100"                     # Fetch page 1
    python scripts/scrape_search.py "lego 42100" --page 2 --condition USED
    python scripts/scrape_search.py "lego" --zip 10115 --radius 50 --auction
    python scripts/scrape_search.py --html data/ebay_sample.html     # Parse a saved page
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from pydantic import ValidationError  # noqa: E402

from ebay_search.core.errors import EbaySearchError, capture_exception  # noqa: E402
from ebay_search.models import ItemCondition, SearchRequest  # noqa: E402
from ebay_search.scraper.ebay import parse_search_page  # noqa: E402
from ebay_search.scraper.search import search  # noqa: E402

CONDITION_CHOICES = [c.name for c in ItemCondition if c is not ItemCondition.UNKNOWN]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract an ebay.de search results page")
    parser.add_argument("query", nargs="?", help="Search terms")
    parser.add_argument("--html", type=Path, help="Parse a saved HTML page instead of fetching")
    parser.add_argument("--url", default="", help="Source URL recorded for --html input")
    parser.add_argument("--page", type=int, default=1, help="Result page (default: 1)")
    parser.add_argument("--per-page", type=int, default=50, choices=[25, 50, 100, 200])
    parser.add_argument(
        "--condition",
        action="append",
        default=[],
        choices=CONDITION_CHOICES,
        help="Condition filter, repeatable",
    )
    parser.add_argument("--zip", dest="zip_code", help="Postal code to search around")
    parser.add_argument("--radius", type=int, help="Radius in km around --zip")
    parser.add_argument("--auction", action="store_true", help="Auctions only")
    parser.add_argument("--buy-now", action="store_true", help="Buy-now listings only")
    return parser


def build_request(args: argparse.Namespace) -> SearchRequest:
    return SearchRequest(
        query=args.query,
        page=args.page,
        per_page=args.per_page,
        conditions=[ItemCondition[name] for name in args.condition],
        auction_only=args.auction,
        buy_now_only=args.buy_now,
        zip_code=args.zip_code,
        radius_km=args.radius,
    )


async def run(args: argparse.Namespace, request: Optional[SearchRequest] = None) -> dict:
    if args.html:
        html = args.html.read_text(encoding="utf-8")
        return parse_search_page(html, source_url=args.url).to_dict()

    result = await search(request or build_request(args))
    return result.to_dict()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.html and not args.query:
        parser.error("either a query or --html is required")

    request = None
    if not args.html:
        try:
            request = build_request(args)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            parser.error(f"invalid search: {problems}")

    try:
        data = asyncio.run(run(args, request))
    except EbaySearchError as e:
        capture_exception(e, context={"query": args.query, "html": str(args.html or "")})
        return 1

    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
