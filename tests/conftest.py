"""Fixtures: an in-memory stand-in for the Playwright browser API.

``FakeBrowser`` mimics the slice of Playwright used by the scraper
(``new_context`` / ``new_page`` / ``goto`` / ``content`` / ``close``) and
records what happened: page start/end order, peak in-flight fetches,
and every close call.
"""

import asyncio
import itertools
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Union

import pytest

DEFAULT_HTML = "<html><body><h1>Default page</h1></body></html>"


class FakePage:
    def __init__(self, browser: "FakeBrowser", context: "FakeContext") -> None:
        self._browser = browser
        self.context = context
        self.url: Optional[str] = None
        self.close_calls = 0

    async def goto(self, url: str, wait_until: Optional[str] = None, timeout: Optional[float] = None):
        browser = self._browser
        self.url = url
        browser.goto_kwargs.append({"wait_until": wait_until, "timeout": timeout})
        browser.events.append(("start", url, next(browser.clock)))
        browser.in_flight += 1
        browser.peak_in_flight = max(browser.peak_in_flight, browser.in_flight)
        try:
            await asyncio.sleep(browser.delays.get(url, browser.default_delay))
        finally:
            browser.in_flight -= 1
            browser.events.append(("end", url, next(browser.clock)))

        outcome = browser.pages.get(url, DEFAULT_HTML)
        if isinstance(outcome, BaseException):
            raise outcome

    async def content(self) -> str:
        return self._browser.pages.get(self.url, DEFAULT_HTML)

    async def close(self) -> None:
        self.close_calls += 1


class FakeContext:
    def __init__(self, browser: "FakeBrowser", user_agent: Optional[str]) -> None:
        self._browser = browser
        self.user_agent = user_agent
        self.pages: List[FakePage] = []
        self.close_calls = 0

    async def new_page(self) -> FakePage:
        page = FakePage(self._browser, self)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.close_calls += 1


class FakeBrowser:
    def __init__(self) -> None:
        self.pages: Dict[str, Union[str, BaseException]] = {}
        self.delays: Dict[str, float] = {}
        self.default_delay = 0.01
        self.contexts: List[FakeContext] = []
        self.events: List[tuple] = []
        self.goto_kwargs: List[dict] = []
        self.clock = itertools.count()
        self.in_flight = 0
        self.peak_in_flight = 0
        self.launch_calls = 0
        self.close_calls = 0

    async def new_context(self, user_agent: Optional[str] = None) -> FakeContext:
        context = FakeContext(self, user_agent)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.close_calls += 1

    def launcher(self):
        """Return a callable usable as ``scrape_urls(..., launcher=...)``."""

        @asynccontextmanager
        async def _launch():
            self.launch_calls += 1
            try:
                yield self
            finally:
                await self.close()

        return _launch

    def started(self, url: str) -> int:
        return next(t for kind, u, t in self.events if kind == "start" and u == url)

    def ended(self, url: str) -> int:
        return next(t for kind, u, t in self.events if kind == "end" and u == url)


@pytest.fixture
def fake_browser() -> FakeBrowser:
    return FakeBrowser()
