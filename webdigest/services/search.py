"""DuckDuckGo HTML search: one GET, results extracted from the markup."""

import logging
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup

from webdigest.exceptions import SearchError
from webdigest.models.search import SearchOptions, SearchResult

logger = logging.getLogger(__name__)

SEARCH_URL = "https://html.duckduckgo.com/html/"
_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def parse_results(html: str, max_results: int) -> List[SearchResult]:
    """Extract up to *max_results* result records from a results page, in page order.

    Only the first *max_results* result blocks are examined; blocks without
    a title link or a snippet are skipped.
    """
    soup = BeautifulSoup(html, "lxml")
    blocks = soup.select(".result__body")

    results: List[SearchResult] = []
    for block in blocks[:max_results]:
        link = block.select_one(".result__a")
        snippet = block.select_one(".result__snippet")
        if link is None or snippet is None:
            continue
        results.append(
            SearchResult(
                url=str(link.get("href") or ""),
                title=link.get_text().strip(),
                snippet=snippet.get_text().strip(),
            )
        )
    return results


async def search(query: str, options: Optional[SearchOptions] = None) -> List[SearchResult]:
    """Query DuckDuckGo and return structured results.

    Raises:
        SearchError: on network errors, a non-success HTTP status, or an
            unparseable results page.
    """
    options = options or SearchOptions()
    logger.debug("Searching for query: %s", query)

    try:
        async with httpx.AsyncClient(
            timeout=options.timeout_ms / 1000, follow_redirects=True
        ) as client:
            response = await client.get(
                SEARCH_URL,
                params={"q": query},
                headers={"User-Agent": _USER_AGENT},
            )
        if not response.is_success:
            logger.error("Search failed: HTTP status %d", response.status_code)
            raise SearchError(f"Search failed: HTTP error! status: {response.status_code}")
        results = parse_results(response.text, options.max_results)
    except SearchError:
        raise
    except Exception as exc:
        message = str(exc) or exc.__class__.__name__
        logger.error("Search failed: %s", message)
        raise SearchError(f"Search failed: {message}") from exc

    logger.debug("Found %d results", len(results))
    return results
