"""Tests for webdigest.services.browser_fetcher."""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from webdigest.services.browser_fetcher import RenderSession, launch_browser

_URL = "https://example.com/page"
_HTML = "<html><body><p>Rendered</p></body></html>"


class TestRenderSessionFetch:
    async def test_returns_rendered_html(self, fake_browser):
        fake_browser.pages[_URL] = _HTML
        context = await fake_browser.new_context(user_agent="test-agent")
        session = RenderSession(context)

        assert await session.fetch(_URL, 5_000) == _HTML

    async def test_waits_for_network_idle_with_deadline(self, fake_browser):
        context = await fake_browser.new_context()
        await RenderSession(context).fetch(_URL, 1_234)

        assert fake_browser.goto_kwargs == [{"wait_until": "networkidle", "timeout": 1_234}]

    async def test_page_closed_after_success(self, fake_browser):
        context = await fake_browser.new_context()
        await RenderSession(context).fetch(_URL, 5_000)

        assert len(context.pages) == 1
        assert context.pages[0].close_calls == 1

    async def test_navigation_error_returns_none(self, fake_browser, caplog):
        fake_browser.pages[_URL] = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
        context = await fake_browser.new_context()

        with caplog.at_level(logging.ERROR, logger="webdigest.services.browser_fetcher"):
            assert await RenderSession(context).fetch(_URL, 5_000) is None

        assert context.pages[0].close_calls == 1
        assert any(
            f"Error fetching {_URL}: net::ERR_NAME_NOT_RESOLVED" in r.getMessage()
            for r in caplog.records
        )

    async def test_deadline_expiry_returns_none(self, fake_browser, caplog):
        fake_browser.delays[_URL] = 5.0
        context = await fake_browser.new_context()

        with caplog.at_level(logging.ERROR, logger="webdigest.services.browser_fetcher"):
            assert await RenderSession(context).fetch(_URL, 50) is None

        assert context.pages[0].close_calls == 1
        assert any("timed out after 50 ms" in r.getMessage() for r in caplog.records)

    async def test_page_close_failure_is_logged(self, fake_browser, caplog):
        context = await fake_browser.new_context()
        page = await context.new_page()

        async def broken_close():
            raise RuntimeError("target closed")

        page.close = broken_close

        async def reuse_page():
            return page

        context.new_page = reuse_page

        with caplog.at_level(logging.ERROR, logger="webdigest.services.browser_fetcher"):
            html = await RenderSession(context).fetch(_URL, 5_000)

        assert html is not None
        assert any("Error closing page" in r.getMessage() for r in caplog.records)


class TestRenderSessionClose:
    async def test_close_is_idempotent(self, fake_browser):
        context = await fake_browser.new_context()
        session = RenderSession(context)

        await session.close()
        await session.close()

        assert session.closed is True
        assert context.close_calls == 1


def _playwright_with(browser):
    """Build a stand-in for ``async_playwright()`` that launches *browser*."""
    pw = MagicMock()
    pw.chromium.launch = AsyncMock(return_value=browser)
    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=pw)
    manager.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=manager), pw


class TestLaunchBrowser:
    async def test_launches_headless_and_closes_once(self):
        browser = MagicMock()
        browser.close = AsyncMock()
        factory, pw = _playwright_with(browser)

        with patch("webdigest.services.browser_fetcher.async_playwright", new=factory):
            async with launch_browser() as launched:
                assert launched is browser
                browser.close.assert_not_awaited()

        browser.close.assert_awaited_once()
        _, kwargs = pw.chromium.launch.call_args
        assert kwargs["headless"] is True
        assert "--no-sandbox" in kwargs["args"]

    async def test_close_failure_logged_and_body_error_propagates(self, caplog):
        browser = MagicMock()
        browser.close = AsyncMock(side_effect=RuntimeError("browser already gone"))
        factory, _ = _playwright_with(browser)

        with patch("webdigest.services.browser_fetcher.async_playwright", new=factory):
            with caplog.at_level(logging.ERROR, logger="webdigest.services.browser_fetcher"):
                with pytest.raises(ValueError, match="failure inside the block"):
                    async with launch_browser():
                        raise ValueError("failure inside the block")

        browser.close.assert_awaited_once()
        assert any(
            "Error closing browser: browser already gone" in r.getMessage()
            for r in caplog.records
        )

    async def test_close_failure_on_clean_exit_is_not_raised(self, caplog):
        browser = MagicMock()
        browser.close = AsyncMock(side_effect=RuntimeError("browser already gone"))
        factory, _ = _playwright_with(browser)

        with patch("webdigest.services.browser_fetcher.async_playwright", new=factory):
            with caplog.at_level(logging.ERROR, logger="webdigest.services.browser_fetcher"):
                async with launch_browser():
                    pass

        browser.close.assert_awaited_once()
        assert any("Error closing browser" in r.getMessage() for r in caplog.records)
