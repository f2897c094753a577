"""Fixed-size pool of render sessions and the wave-based URL dispatcher."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence

from playwright.async_api import Browser

from webdigest.models.response import ScrapedContent
from webdigest.services.browser_fetcher import RenderSession
from webdigest.services.reducer import reduce_html

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch page"


class SessionPool:
    """Render sessions shared round-robin across every URL of a scrape.

    URLs are dispatched in consecutive waves of ``max_concurrent``; a wave
    only starts once every fetch of the previous wave has settled.  With the
    pool sized to ``min(len(urls), max_concurrent)`` each session serves at
    most one fetch per wave.
    """

    def __init__(self, sessions: Sequence[RenderSession]) -> None:
        if not sessions:
            raise ValueError("A session pool needs at least one session.")
        self._sessions = list(sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def session_for(self, index: int) -> RenderSession:
        return self._sessions[index % len(self._sessions)]

    async def dispatch(
        self,
        urls: Sequence[str],
        *,
        max_concurrent: int,
        timeout_ms: int,
        selector: Optional[str] = None,
    ) -> List[ScrapedContent]:
        """Fetch and reduce *urls*, returning one record per URL in input order."""
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1.")

        results: List[ScrapedContent] = []
        for start in range(0, len(urls), max_concurrent):
            wave = urls[start : start + max_concurrent]
            logger.debug("Dispatching wave of %d URL(s) starting at #%d", len(wave), start)

            html_documents = await asyncio.gather(
                *(
                    self.session_for(index).fetch(url, timeout_ms)
                    for index, url in enumerate(wave)
                )
            )

            for url, html in zip(wave, html_documents):
                results.append(
                    ScrapedContent(
                        url=url,
                        title=url,
                        content=reduce_html(html, selector),
                        error=FETCH_FAILED if html is None else None,
                    )
                )

        return results

    async def close(self) -> None:
        """Close every session concurrently; failures are logged, never raised."""
        outcomes = await asyncio.gather(
            *(session.close() for session in self._sessions), return_exceptions=True
        )
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                logger.error("Error closing browser context: %s", outcome)


@asynccontextmanager
async def session_pool(
    browser: Browser, size: int, user_agent: str
) -> AsyncIterator[SessionPool]:
    """Create *size* browser contexts for *user_agent* and close them on exit.

    If any context cannot be created, the ones that were created are closed
    before the first creation error is raised.
    """
    created = await asyncio.gather(
        *(browser.new_context(user_agent=user_agent) for _ in range(size)),
        return_exceptions=True,
    )
    sessions = [RenderSession(c) for c in created if not isinstance(c, BaseException)]
    failures = [c for c in created if isinstance(c, BaseException)]

    if failures:
        if sessions:
            await SessionPool(sessions).close()
        raise failures[0]

    pool = SessionPool(sessions)
    logger.debug("Created %d browser context(s)", len(pool))
    try:
        yield pool
    finally:
        await pool.close()
