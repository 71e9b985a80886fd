"""
Driver Module - Black Box Interface

Purpose: Start/stop the browser automation driver and launch browsers
Interface: PlaywrightDriver.start(), launch(), stop()
Hidden: Playwright process management

Replaceable with any object satisfying BrowserDriver (e.g. a fake in tests).
"""

from .driver import BrowserDriver, PlaywrightDriver

__all__ = ["BrowserDriver", "PlaywrightDriver"]
