from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from cinedex.scraper.errors import NavigationError, SessionNotReadyError
from cinedex.scraper.session import BrowserSession

URL = "https://www.imdb.com/title/tt0111161/"


def mock_playwright(goto_side_effect=None, launch_side_effect=None):
    """Build a mocked async_playwright() chain."""
    page = AsyncMock()
    page.goto.side_effect = goto_side_effect

    context = AsyncMock()
    context.new_page.return_value = page

    browser = AsyncMock()
    browser.new_context.return_value = context

    playwright = AsyncMock()
    playwright.chromium.launch.return_value = browser
    playwright.chromium.launch.side_effect = launch_side_effect

    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)
    return starter, playwright, browser, context, page


class TestBrowserSession:
    """Browser launch, navigation and teardown."""

    @pytest.mark.asyncio
    async def test_close_is_idempotent_without_start(self, test_settings):
        session = BrowserSession(test_settings)

        await session.close()
        await session.close()

        assert session.is_active is False

    def test_page_before_start_fails_fast(self, test_settings):
        with pytest.raises(SessionNotReadyError, match="Page not loaded"):
            BrowserSession(test_settings).page

    @pytest.mark.asyncio
    async def test_start_configures_browser_and_waits(self, test_settings):
        starter, playwright, browser, context, page = mock_playwright()

        with patch("cinedex.scraper.session.async_playwright", return_value=starter):
            async with BrowserSession(test_settings) as session:
                await session.start(URL)
                assert session.page is page

        launch_kwargs = playwright.chromium.launch.call_args.kwargs
        assert launch_kwargs["headless"] is True
        assert "--disable-blink-features=AutomationControlled" in launch_kwargs["args"]

        context_kwargs = browser.new_context.call_args.kwargs
        assert context_kwargs["viewport"] == {"width": 1920, "height": 1080}
        assert context_kwargs["user_agent"] == test_settings.browser_user_agent
        context.add_init_script.assert_awaited_once()

        page.goto.assert_awaited_once_with(URL, wait_until="networkidle", timeout=test_settings.navigation_timeout_ms)
        page.wait_for_timeout.assert_awaited_once_with(test_settings.settle_delay_ms)

        page.close.assert_awaited_once()
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()
        assert session.is_active is False

    @pytest.mark.asyncio
    async def test_retries_transient_navigation_failure(self, test_settings):
        starter, _, _, _, page = mock_playwright(
            goto_side_effect=[PlaywrightTimeoutError("Timeout 30000ms exceeded"), None]
        )

        with patch("cinedex.scraper.session.async_playwright", return_value=starter):
            session = BrowserSession(test_settings)
            await session.start(URL)

        assert page.goto.await_count == 2
        assert session.page is page
        await session.close()

    @pytest.mark.asyncio
    async def test_navigation_error_after_last_attempt_tears_down(self, test_settings):
        starter, playwright, browser, _, page = mock_playwright(
            goto_side_effect=PlaywrightTimeoutError("Timeout 30000ms exceeded")
        )

        with patch("cinedex.scraper.session.async_playwright", return_value=starter):
            session = BrowserSession(test_settings)
            with pytest.raises(NavigationError) as exc_info:
                await session.start(URL)

        assert exc_info.value.attempts == test_settings.navigation_attempts
        assert exc_info.value.url == URL
        assert page.goto.await_count == test_settings.navigation_attempts
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()
        assert session.is_active is False

        # closing again after a failed start is harmless
        await session.close()
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_launch_failure_is_navigation_error(self, test_settings):
        starter, playwright, _, _, _ = mock_playwright(
            launch_side_effect=PlaywrightError("Executable doesn't exist")
        )

        with patch("cinedex.scraper.session.async_playwright", return_value=starter):
            session = BrowserSession(test_settings)
            with pytest.raises(NavigationError):
                await session.start(URL)

        playwright.stop.assert_awaited_once()
        assert session.is_active is False
