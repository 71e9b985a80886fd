"""
Command dispatcher for browserd.

Turns a validated command into one driver call against the target session
and wraps the outcome in the uniform result envelope. execute() never
raises: every browserd error and every unexpected driver exception is
converted into ``{"success": false, "error": ...}`` here.
"""

import itertools
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from browserd.config.provider import BrowserConfig
from browserd.errors import BrowserdError, InteractionError, NavigationError, ScreenshotError
from browserd.modules.api.models import ToolResponse
from browserd.modules.session import SessionModule

from .commands import (
    ClickElement,
    CloseBrowser,
    Command,
    GetText,
    LaunchBrowser,
    NavigateTo,
    Screenshot,
    TypeText,
    parse_command,
)

logger = logging.getLogger("browserd.dispatch")

NO_TEXT_FOUND = "No text found"


class Dispatcher:
    def __init__(self, sessions: SessionModule, browser_config: Optional[BrowserConfig] = None):
        """
        Initialize dispatcher.

        Args:
            sessions: Registry that owns the live browser sessions
            browser_config: Timeouts and screenshot location
        """
        self.sessions = sessions
        self.config = browser_config or sessions.browser_config
        self._screenshot_seq = itertools.count(1)
        self._handlers: Dict[Type[Command], Callable[[Any], Awaitable[Dict[str, Any]]]] = {
            LaunchBrowser: self._launch_browser,
            NavigateTo: self._navigate_to,
            ClickElement: self._click_element,
            TypeText: self._type_text,
            GetText: self._get_text,
            Screenshot: self._screenshot,
            CloseBrowser: self._close_browser,
        }

    async def execute(self, name: Any, arguments: Any = None) -> ToolResponse:
        """Validate and run one tool invocation, always returning an envelope."""
        try:
            command = parse_command(name, arguments)
            result = await self.run(command)
        except BrowserdError as e:
            logger.log(e.log_level, f"Tool execution error ({name}, {e.kind}): {e.message}")
            return ToolResponse(success=False, error=e.message)
        except Exception as e:
            logger.exception(f"Unexpected error executing tool {name}")
            return ToolResponse(success=False, error=f"Unexpected error in {name}: {e}")

        return ToolResponse(success=True, result=result)

    async def run(self, command: Command) -> Dict[str, Any]:
        """Run an already validated command; browserd errors propagate."""
        return await self._handlers[type(command)](command)

    async def _launch_browser(self, command: LaunchBrowser) -> Dict[str, Any]:
        handle = await self.sessions.create_session(
            engine=command.engine,
            headless=command.headless,
            engine_options=command.engine_options,
        )
        return {
            "handle": handle,
            "engine": command.engine,
            "message": f"Browser launched successfully. Browser ID: {handle}",
        }

    async def _navigate_to(self, command: NavigateTo) -> Dict[str, Any]:
        session = self.sessions.get_session(command.handle)
        async with session.lock:
            try:
                await session.page.goto(
                    command.url,
                    wait_until="networkidle",
                    timeout=self.config.navigation_timeout_ms,
                )
            except Exception as e:
                raise NavigationError(command.handle, command.url, e) from e
            resolved_url = session.page.url

        logger.info(f"Navigation successful: {command.url} ({command.handle})")
        return {
            "url": command.url,
            "resolvedUrl": resolved_url,
            "message": f"Successfully navigated to: {command.url}",
        }

    async def _click_element(self, command: ClickElement) -> Dict[str, Any]:
        session = self.sessions.get_session(command.handle)
        async with session.lock:
            try:
                await session.page.click(command.selector, timeout=self.config.action_timeout_ms)
            except Exception as e:
                raise InteractionError(command.handle, "click element", command.selector, e) from e

        logger.info(f"Element clicked: {command.selector} ({command.handle})")
        return {
            "selector": command.selector,
            "message": f"Successfully clicked element: {command.selector}",
        }

    async def _type_text(self, command: TypeText) -> Dict[str, Any]:
        session = self.sessions.get_session(command.handle)
        async with session.lock:
            try:
                await session.page.fill(
                    command.selector, command.text, timeout=self.config.action_timeout_ms
                )
            except Exception as e:
                raise InteractionError(command.handle, "type text into", command.selector, e) from e

        # Typed text may be a credential; log only its size.
        logger.info(f"Typed {len(command.text)} characters into {command.selector} ({command.handle})")
        return {
            "selector": command.selector,
            "text": command.text,
            "message": f"Successfully typed text into: {command.selector}",
        }

    async def _get_text(self, command: GetText) -> Dict[str, Any]:
        session = self.sessions.get_session(command.handle)
        async with session.lock:
            try:
                text = await session.page.text_content(
                    command.selector, timeout=self.config.action_timeout_ms
                )
            except Exception as e:
                raise InteractionError(command.handle, "get text from", command.selector, e) from e

        logger.info(f"Text retrieved from {command.selector} ({command.handle})")
        return {
            "selector": command.selector,
            "text": text or NO_TEXT_FOUND,
            "message": f"Text content retrieved from {command.selector}",
        }

    async def _screenshot(self, command: Screenshot) -> Dict[str, Any]:
        session = self.sessions.get_session(command.handle)
        path = self._screenshot_path()
        async with session.lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                await session.page.screenshot(
                    path=str(path), full_page=command.full_page, type="png"
                )
            except Exception as e:
                raise ScreenshotError(command.handle, e) from e

        logger.info(f"Screenshot saved: {path} ({command.handle})")
        return {
            "filename": str(path),
            "fullPage": command.full_page,
            "message": f"Screenshot saved to: {path}",
        }

    async def _close_browser(self, command: CloseBrowser) -> Dict[str, Any]:
        await self.sessions.end_session(command.handle)
        return {
            "handle": command.handle,
            "message": f"Successfully closed browser: {command.handle}",
        }

    def _screenshot_path(self) -> Path:
        """
        Unique PNG path in the screenshot directory.

        The millisecond timestamp alone can repeat, so a per-process sequence
        number is appended.
        """
        now = datetime.now(UTC)
        stamp = now.strftime("%Y-%m-%dT%H-%M-%S") + f"-{now.microsecond // 1000:03d}Z"
        seq = next(self._screenshot_seq)
        return Path(self.config.screenshot_dir) / f"screenshot_{stamp}_{seq:04d}.png"
