"""
browserd error kinds.

Every failure a command can hit is one of these. The dispatcher catches them
at the command boundary and turns them into a failure envelope, so messages
carry enough context (handle, selector, URL, command name) to be useful to a
client without server-side logs.
"""

import logging
from typing import Iterable, Optional


class BrowserdError(Exception):
    """Base class for all browserd errors."""

    log_level = logging.ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class UnknownCommandError(BrowserdError):
    """Command name is not one of the supported tools."""

    log_level = logging.WARNING

    def __init__(self, name: Optional[str]):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArgumentError(BrowserdError):
    """Required arguments are missing or arguments have the wrong type."""

    log_level = logging.WARNING

    def __init__(
        self,
        command: str,
        missing: Iterable[str] = (),
        invalid: Iterable[str] = (),
    ):
        self.command = command
        self.missing = list(missing)
        self.invalid = list(invalid)

        problems = []
        if self.missing:
            problems.append(f"missing required argument(s): {', '.join(self.missing)}")
        if self.invalid:
            problems.append(f"invalid argument(s): {'; '.join(self.invalid)}")
        super().__init__(f"Invalid arguments for {command}: {'; '.join(problems)}")


class NotFoundError(BrowserdError):
    """No live session is registered under the handle."""

    log_level = logging.WARNING

    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(f"Browser not found: {handle}")


class LaunchError(BrowserdError):
    """The driver could not produce a browser, context and page."""

    def __init__(self, engine: str, cause: object):
        self.engine = engine
        self.cause = cause
        super().__init__(f"Failed to launch browser ({engine}): {cause}")


class NavigationError(BrowserdError):
    """Navigation failed or did not settle within its timeout."""

    def __init__(self, handle: str, url: str, cause: object):
        self.handle = handle
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to navigate to {url} in browser {handle}: {cause}")


class InteractionError(BrowserdError):
    """Click, fill or text read on a selector failed."""

    def __init__(self, handle: str, operation: str, selector: str, cause: object):
        self.handle = handle
        self.operation = operation
        self.selector = selector
        self.cause = cause
        super().__init__(f"Failed to {operation} {selector} in browser {handle}: {cause}")


class ScreenshotError(BrowserdError):
    """Capturing or storing a screenshot failed."""

    def __init__(self, handle: str, cause: object):
        self.handle = handle
        self.cause = cause
        super().__init__(f"Failed to take screenshot in browser {handle}: {cause}")


class CloseError(BrowserdError):
    """
    The driver failed to close a browser.

    Non-fatal: by the time this is raised the session is already gone from
    the registry.
    """

    log_level = logging.WARNING

    def __init__(self, handle: str, cause: object):
        self.handle = handle
        self.cause = cause
        super().__init__(f"Failed to close browser {handle} cleanly: {cause}")


__all__ = [
    "BrowserdError",
    "UnknownCommandError",
    "InvalidArgumentError",
    "NotFoundError",
    "LaunchError",
    "NavigationError",
    "InteractionError",
    "ScreenshotError",
    "CloseError",
]
