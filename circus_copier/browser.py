"""Playwright persistent browser context for Circus and ATS pages.

Uses a persistent user data directory so the Circus and ATS login sessions
survive across runs. Log in by hand once in the opened window; later runs
reuse the session.
"""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.async_api import BrowserContext, Page, async_playwright

from circus_copier.page import PlaywrightPageAccessor

logger = logging.getLogger("circus_copier")


class BrowserManager:
    """Manages a persistent Chromium browser context."""

    def __init__(
        self,
        user_data_dir: str = "browser_data",
        headless: bool = False,
        slow_mo: int = 50,
    ):
        self._user_data_dir = str(Path(user_data_dir).resolve())
        self._headless = headless
        self._slow_mo = slow_mo
        self._playwright = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    async def launch(self) -> Page:
        """Launch persistent Chromium context and return the active page."""
        self._playwright = await async_playwright().start()
        self._context = await self._playwright.chromium.launch_persistent_context(
            self._user_data_dir,
            headless=self._headless,
            slow_mo=self._slow_mo,
            viewport={"width": 1440, "height": 900},
            locale="ja-JP",
        )
        self._page = self._context.pages[0] if self._context.pages else await self._context.new_page()
        logger.info("Browser launched (persistent context: %s)", self._user_data_dir)
        return self._page

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Browser not launched. Call launch() first.")
        return self._page

    def accessor(self) -> PlaywrightPageAccessor:
        """PageAccessor bound to the active page."""
        return PlaywrightPageAccessor(self.page)

    async def open(self, url: str) -> Page:
        """Navigate the active page to `url`, launching the browser if needed."""
        if not self._page:
            await self.launch()
        logger.info("Opening %s", url)
        await self.page.goto(url, wait_until="domcontentloaded")
        return self.page

    async def close(self) -> None:
        """Gracefully close the browser context."""
        if self._context:
            await self._context.close()
        if self._playwright:
            await self._playwright.stop()
        logger.info("Browser closed.")
