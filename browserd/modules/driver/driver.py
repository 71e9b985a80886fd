"""
Driver Module for browserd.

Owns the Playwright process for the lifetime of the server and launches
browsers of the requested engine. Everything above this module works with
the Browser/BrowserContext/Page objects it hands out and never imports the
Playwright entry point itself.
"""

import logging
from typing import Any, Optional, Protocol

from playwright.async_api import Browser, Playwright, async_playwright

from browserd.modules.api.models import Engine

logger = logging.getLogger("browserd.driver")


class BrowserDriver(Protocol):
    """What the session registry needs from a driver."""

    async def launch(self, engine: Engine, **options: Any) -> Browser:
        """Launch a fresh browser process of the given engine."""
        ...


class PlaywrightDriver:
    """
    Playwright-backed driver.

    start() must be awaited before the first launch(); stop() shuts the
    Playwright connection down and should run after every browser it
    launched has been closed.
    """

    def __init__(self):
        self._playwright: Optional[Playwright] = None

    @property
    def started(self) -> bool:
        return self._playwright is not None

    async def start(self) -> None:
        if self._playwright is None:
            self._playwright = await async_playwright().start()
            logger.info("Playwright driver started")

    async def stop(self) -> None:
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
            logger.info("Playwright driver stopped")

    async def launch(self, engine: Engine, **options: Any) -> Browser:
        if self._playwright is None:
            raise RuntimeError("Playwright driver is not started")

        browser_type = getattr(self._playwright, engine.value)
        return await browser_type.launch(**options)
