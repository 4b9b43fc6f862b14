"""Headless browser session for one scrape call."""
import asyncio
import logging
from typing import Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from cinedex.config import Settings, settings as default_settings
from cinedex.scraper.errors import NavigationError, SessionNotReadyError

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-blink-features=AutomationControlled',
]

HIDE_WEBDRIVER = "Object.defineProperty(navigator, 'webdriver', { get: () => undefined });"


class BrowserSession:
    """One Chromium process and one page, owned by a single scrape call.

    Use as an async context manager so the browser is released on every
    exit path::

        async with BrowserSession() as session:
            await session.start(url)
            title = await extract_basic_info(session.page)
    """

    def __init__(self, config: Optional[Settings] = None):
        """Initialize session."""
        self.config = config or default_settings
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self.url: Optional[str] = None

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    @property
    def page(self) -> Page:
        """The loaded page.

        Raises:
            SessionNotReadyError: if ``start`` has not completed
        """
        if self._page is None:
            raise SessionNotReadyError()
        return self._page

    @property
    def is_active(self) -> bool:
        return self._page is not None

    async def start(self, url: str) -> None:
        """Launch the browser, open ``url`` and wait for it to render.

        Args:
            url: Absolute URL of the page to load

        Raises:
            NavigationError: if the page never reached network idle
        """
        if self.is_active:
            logger.warning(f"Session already open on {self.url}, restarting")
            await self.close()

        try:
            await self._launch()
        except PlaywrightError as e:
            await self.close()
            raise NavigationError(url, 0, e) from e
        except BaseException:
            await self.close()
            raise

        try:
            await self._navigate(url)
        except BaseException:
            await self.close()
            raise

        self.url = url

    async def _launch(self) -> None:
        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(
            headless=self.config.browser_headless,
            executable_path=self.config.browser_executable_path,
            args=LAUNCH_ARGS,
        )
        self.context = await self.browser.new_context(
            viewport={'width': self.config.viewport_width, 'height': self.config.viewport_height},
            user_agent=self.config.browser_user_agent,
            locale='en-US',
        )
        await self.context.add_init_script(HIDE_WEBDRIVER)
        self._page = await self.context.new_page()

    async def _navigate(self, url: str) -> None:
        attempts = max(1, self.config.navigation_attempts)
        last_error: Optional[BaseException] = None

        for attempt in range(1, attempts + 1):
            try:
                logger.info(f"[Attempt {attempt}/{attempts}] Navigating to {url}")
                await self._page.goto(
                    url,
                    wait_until="networkidle",
                    timeout=self.config.navigation_timeout_ms,
                )
                break
            except PlaywrightError as e:
                last_error = e
                logger.warning(f"Navigation attempt {attempt} failed for {url}: {e}")
                if attempt < attempts:
                    await asyncio.sleep(self.config.navigation_backoff_seconds * attempt)
        else:
            raise NavigationError(url, attempts, last_error)

        # Client-side rendering keeps going after the network settles
        await self._page.wait_for_timeout(self.config.settle_delay_ms)

    async def close(self) -> None:
        """Close page, context and browser. Safe to call more than once."""
        page, context, browser, playwright = self._page, self.context, self.browser, self.playwright
        self._page = None
        self.context = None
        self.browser = None
        self.playwright = None

        try:
            if page:
                await page.close()
        except Exception as e:
            logger.debug(f"Error closing page: {e}")
        try:
            if context:
                await context.close()
        except Exception as e:
            logger.debug(f"Error closing context: {e}")
        try:
            if browser:
                await browser.close()
        except Exception as e:
            logger.debug(f"Error closing browser: {e}")
        try:
            if playwright:
                await playwright.stop()
        except Exception as e:
            logger.debug(f"Error stopping playwright: {e}")
