"""Playwright-based rendering of JavaScript-driven (dynamic) web pages."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, BrowserContext, async_playwright

logger = logging.getLogger(__name__)

_LAUNCH_ARGS = [
    # --no-sandbox is required when running as root inside a container
    # (Docker drops the user namespace needed by Chromium's sandbox).
    # In non-containerised environments, omit this flag and rely on the
    # OS-level sandbox instead.
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


@asynccontextmanager
async def launch_browser() -> AsyncIterator[Browser]:
    """Start Playwright, launch headless Chromium, and close it on exit.

    A failure while closing the browser is logged rather than raised so it
    cannot hide an error raised inside the ``async with`` block.
    """
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(headless=True, args=_LAUNCH_ARGS)
        try:
            yield browser
        finally:
            try:
                await browser.close()
            except Exception as exc:
                logger.error("Error closing browser: %s", exc)


class RenderSession:
    """One isolated browser context used to render pages one at a time.

    Every :meth:`fetch` opens its own page and closes it before returning, so
    a session holds no page between fetches.
    """

    def __init__(self, context: BrowserContext) -> None:
        self._context = context
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def fetch(self, url: str, timeout_ms: int) -> Optional[str]:
        """Render *url* and return the settled HTML, or ``None`` on failure.

        *timeout_ms* bounds navigation and the whole open/navigate/read
        sequence; expiry is treated like any other fetch failure.
        """
        logger.info("Fetching %s", url)
        try:
            html = await asyncio.wait_for(
                self._render(url, timeout_ms), timeout=timeout_ms / 1000
            )
        except asyncio.TimeoutError:
            logger.error("Error fetching %s: timed out after %d ms", url, timeout_ms)
            return None
        except Exception as exc:
            logger.error("Error fetching %s: %s", url, exc)
            return None

        logger.info("Successfully fetched %s", url)
        return html

    async def _render(self, url: str, timeout_ms: int) -> str:
        page = await self._context.new_page()
        try:
            # networkidle: no network connections for at least 500 ms, so
            # content injected by client-side scripts is captured
            await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            return await page.content()
        finally:
            try:
                await page.close()
            except Exception as exc:
                logger.error("Error closing page for %s: %s", url, exc)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._context.close()
