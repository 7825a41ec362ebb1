import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from ebay_search.core.config import settings  # noqa: E402
from ebay_search.models import SearchRequest  # noqa: E402
from ebay_search.scraper.simple_http import HttpDocumentSource  # noqa: E402


async def fetch_sample(query: str = "lego technic", target: str = "data/ebay_sample.html"):
    url = SearchRequest(query=query).build_url(settings.EBAY_BASE_URL)
    print(f"Fetching {url}...")

    document = await HttpDocumentSource().fetch(url)

    Path(target).parent.mkdir(parents=True, exist_ok=True)
    Path(target).write_text(document.html, encoding="utf-8")
    print(f"Saved to {target} (final URL: {document.final_url})")


if __name__ == "__main__":
    asyncio.run(fetch_sample(*sys.argv[1:]))
