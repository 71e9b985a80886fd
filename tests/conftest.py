"""
Shared pytest fixtures for browserd tests.

This module provides common fixtures including:
- FakeDriver: stands in for Playwright, handing out mock browsers
- Session registry and dispatcher wired to the fake driver
- Browser config pointing screenshots at a temp directory
"""

import os
import sys
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from browserd.config.provider import APIConfig, BrowserConfig
from browserd.modules.dispatch import Dispatcher
from browserd.modules.session import SessionModule


# =============================================================================
# Playwright Mocking Infrastructure
# =============================================================================


def make_page(url: str = "about:blank", text: Optional[str] = "Example Domain") -> MagicMock:
    """Create a mock Playwright Page."""
    page = MagicMock()
    page.url = url
    page.goto = AsyncMock(return_value=None)
    page.click = AsyncMock(return_value=None)
    page.fill = AsyncMock(return_value=None)
    page.text_content = AsyncMock(return_value=text)
    page.screenshot = AsyncMock(return_value=b"\x89PNG")
    return page


def make_browser(page: Optional[MagicMock] = None) -> MagicMock:
    """Create a mock Playwright Browser with one context and page."""
    page = page or make_page()
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()
    browser.context = context
    browser.page = page
    return browser


class FakeDriver:
    """
    Driver double recording every launch.

    Usage:
        def test_something(fake_driver):
            fake_driver.launch_error = RuntimeError("no binary")
            ...
            assert fake_driver.launches[0]["engine"] == Engine.CHROMIUM
    """

    def __init__(self):
        self.launches: List[Dict[str, Any]] = []
        self.browsers: List[MagicMock] = []
        self.launch_error: Optional[Exception] = None
        self.next_browser: Optional[MagicMock] = None
        self.started = False
        self.stopped = False

    async def start(self):
        self.started = True

    async def stop(self):
        self.stopped = True

    async def launch(self, engine, **options):
        self.launches.append({"engine": engine, "options": options})
        if self.launch_error is not None:
            raise self.launch_error
        browser = self.next_browser or make_browser()
        self.next_browser = None
        self.browsers.append(browser)
        return browser


@pytest.fixture
def fake_driver():
    """Fake browser driver."""
    return FakeDriver()


@pytest.fixture
def browser_config(tmp_path):
    """Browser config writing screenshots to a per-test directory."""
    return BrowserConfig(screenshot_dir=str(tmp_path / "screenshots"))


@pytest.fixture
def session_module(fake_driver, browser_config):
    """Create a SessionModule backed by the fake driver."""
    return SessionModule(fake_driver, browser_config)


@pytest.fixture
def dispatcher(session_module, browser_config):
    """Create a Dispatcher over the session module."""
    return Dispatcher(session_module, browser_config)


class StaticConfigProvider:
    """Config provider returning fixed configs, no environment access."""

    def __init__(self, api_config: APIConfig, browser_config: BrowserConfig):
        self.api_config = api_config
        self.browser_config = browser_config

    def get_api_config(self) -> APIConfig:
        return self.api_config

    def get_browser_config(self) -> BrowserConfig:
        return self.browser_config


@pytest.fixture
def config_provider(browser_config):
    """Config provider for building test apps."""
    return StaticConfigProvider(APIConfig(), browser_config)


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring a real browser"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take a long time to run"
    )
