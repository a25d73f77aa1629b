"""Playwright navigation context shared by every crawl step."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import RunConfiguration
from .errors import FatalError, NavigationFailure

logger = logging.getLogger("club_scraper")


class BrowserSession:
    """One browser page reused for every navigation of a run.

    The page is not safe for concurrent use; callers await each ``load``
    before issuing the next one.
    """

    def __init__(self, browser: Browser, page: Page) -> None:
        self._browser = browser
        self._page = page

    @classmethod
    async def open(cls, playwright: Playwright, config: RunConfiguration) -> "BrowserSession":
        try:
            browser = await playwright.chromium.launch(headless=config.headless)
            page = await browser.new_page()
        except PlaywrightError as exc:
            raise FatalError(f"Unable to launch browser: {exc}") from exc
        page.set_default_navigation_timeout(config.navigation_timeout * 1000)
        return cls(browser, page)

    async def load(self, url: str) -> str:
        """Navigate to ``url`` and return the rendered HTML."""
        logger.debug("Loading %s", url)
        try:
            response = await self._page.goto(url, wait_until="domcontentloaded")
        except PlaywrightTimeoutError as exc:
            raise NavigationFailure(url, f"timeout ({exc})") from exc
        except PlaywrightError as exc:
            raise NavigationFailure(url, str(exc)) from exc
        if response is not None and not response.ok:
            raise NavigationFailure(url, f"HTTP {response.status}")
        try:
            return await self._page.content()
        except PlaywrightError as exc:
            raise NavigationFailure(url, str(exc)) from exc

    async def close(self) -> None:
        await self._browser.close()


@asynccontextmanager
async def open_session(config: RunConfiguration) -> AsyncIterator[BrowserSession]:
    """Start Playwright, yield a session, and always shut the browser down."""
    async with async_playwright() as playwright:
        session = await BrowserSession.open(playwright, config)
        try:
            yield session
        finally:
            await session.close()
