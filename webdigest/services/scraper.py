"""Top-level scrape orchestration: validate, render in waves, reduce."""

import logging
from typing import AsyncContextManager, Callable, Iterable, List, Optional

from playwright.async_api import Browser

from webdigest.exceptions import InvalidInputError
from webdigest.models.request import ScrapeOptions
from webdigest.models.response import ScrapedContent
from webdigest.services.browser_fetcher import launch_browser
from webdigest.services.session_pool import session_pool
from webdigest.services.validator import filter_valid_urls

logger = logging.getLogger(__name__)

BrowserLauncher = Callable[[], AsyncContextManager[Browser]]


async def scrape_urls(
    urls: Iterable[str],
    options: Optional[ScrapeOptions] = None,
    *,
    launcher: BrowserLauncher = launch_browser,
) -> List[ScrapedContent]:
    """Render every valid URL in *urls* and return its reduced text content.

    Invalid URLs are logged and left out of the result.  One browser is
    launched for the whole call and shared by
    ``min(len(valid_urls), options.max_concurrent)`` contexts; contexts and
    browser are closed on every exit path.

    Raises:
        InvalidInputError: if no URL survives validation (nothing is launched).
    """
    options = options or ScrapeOptions()

    valid_urls = filter_valid_urls(urls)
    if not valid_urls:
        raise InvalidInputError("No valid URLs provided")

    session_count = min(len(valid_urls), options.max_concurrent)
    logger.info(
        "Scraping %d URL(s) with %d browser context(s)", len(valid_urls), session_count
    )

    async with launcher() as browser:
        async with session_pool(browser, session_count, options.user_agent) as pool:
            results = await pool.dispatch(
                valid_urls,
                max_concurrent=options.max_concurrent,
                timeout_ms=options.timeout_ms,
                selector=options.selector,
            )

    failed = sum(1 for r in results if r.error)
    logger.info("Scraped %d URL(s), %d failed", len(results), failed)
    return results
