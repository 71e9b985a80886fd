"""
Session registry for browserd.

The registry is the single source of truth for which browser sessions are
usable: a handle it knows about always maps to a browser, context and page
that were opened and have not been closed.

Concurrency:
- Inserts, removals and the shutdown drain take one asyncio.Lock around the
  structural change to the map.
- get() and list_handles() are plain synchronous reads; on a single event
  loop they cannot observe a half-finished mutation.
- Each Session carries its own lock so the dispatcher can serialize commands
  aimed at the same handle.
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from browserd.config.provider import BrowserConfig
from browserd.errors import CloseError, LaunchError, NotFoundError
from browserd.modules.api.models import Engine
from browserd.modules.driver import BrowserDriver

from .handles import HandleFactory

logger = logging.getLogger("browserd.session")

# engine_options keys that configure the browsing context rather than the launch
CONTEXT_OPTION_KEYS = {"viewport": "viewport", "userAgent": "user_agent", "user_agent": "user_agent"}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    """Map JS-style option names (slowMo) onto Playwright's Python kwargs (slow_mo)."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


@dataclass(frozen=True)
class Session:
    """One live browser: the browser process, its isolated context and its page."""

    handle: str
    engine: Engine
    browser: Any
    context: Any
    page: Any
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)


class SessionModule:
    def __init__(
        self,
        driver: BrowserDriver,
        browser_config: Optional[BrowserConfig] = None,
        handle_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize session module.

        Args:
            driver: Launches browsers of a given engine
            browser_config: Default viewport, user agent and launch args
            handle_factory: Callable returning a new unique handle
        """
        self.driver = driver
        self.browser_config = browser_config or BrowserConfig()
        self._new_handle = handle_factory or HandleFactory()
        self._sessions: Dict[str, Session] = {}
        self._lock = asyncio.Lock()

    def build_options(
        self, headless: bool, engine_options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Split caller options into (launch options, context options).

        Defaults come from the browser config; anything in engine_options
        overrides them.
        """
        launch_options: Dict[str, Any] = {
            "headless": headless,
            "args": list(self.browser_config.launch_args),
        }
        context_options: Dict[str, Any] = {
            "viewport": dict(self.browser_config.viewport),
            "user_agent": self.browser_config.user_agent,
        }

        for key, value in (engine_options or {}).items():
            if key in CONTEXT_OPTION_KEYS:
                context_options[CONTEXT_OPTION_KEYS[key]] = value
            else:
                launch_options[_snake_case(key)] = value

        return launch_options, context_options

    async def create_session(
        self,
        engine: str = Engine.CHROMIUM.value,
        headless: bool = True,
        engine_options: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Launch a browser and register it as a new session.

        Args:
            engine: One of chromium, firefox, webkit
            headless: Run without a visible window
            engine_options: Launch overrides plus optional viewport/userAgent

        Returns:
            The new session handle

        Raises:
            LaunchError: Unknown engine or the driver failed; nothing is registered

        Logic:
        1. Resolve the engine
        2. Launch browser, open context, open page
        3. On any failure close whatever was opened
        4. Issue a handle and insert under the lock
        """
        try:
            resolved = Engine(engine)
        except ValueError:
            raise LaunchError(
                str(engine), f"unsupported engine, expected one of {[e.value for e in Engine]}"
            ) from None

        launch_options, context_options = self.build_options(headless, engine_options)

        browser = None
        try:
            browser = await self.driver.launch(resolved, **launch_options)
            context = await browser.new_context(**context_options)
            page = await context.new_page()
        except Exception as e:
            logger.error(f"Browser launch failed ({resolved.value}): {e}")
            if browser is not None:
                await self._close_quietly(browser, resolved.value)
            raise LaunchError(resolved.value, e) from e

        async with self._lock:
            handle = self._new_handle()
            self._sessions[handle] = Session(
                handle=handle,
                engine=resolved,
                browser=browser,
                context=context,
                page=page,
            )

        logger.info(f"Browser launched successfully: {handle} ({resolved.value})")
        return handle

    def get_session(self, handle: str) -> Session:
        """
        Get a live session.

        Raises:
            NotFoundError: The handle was never issued or is already closed
        """
        session = self._sessions.get(handle)
        if session is None:
            raise NotFoundError(handle)
        return session

    async def end_session(self, handle: str) -> Session:
        """
        Close a session's browser and forget the handle.

        The entry is claimed under the lock before the driver is asked to
        close, so concurrent closes of one handle reach the driver once and
        the loser gets NotFoundError.

        Raises:
            NotFoundError: No such live session
            CloseError: The browser did not close cleanly; the session is
                removed regardless
        """
        async with self._lock:
            session = self._sessions.pop(handle, None)

        if session is None:
            raise NotFoundError(handle)

        try:
            await session.browser.close()
        except Exception as e:
            logger.warning(f"Browser {handle} removed but did not close cleanly: {e}")
            raise CloseError(handle, e) from e

        logger.info(f"Browser closed: {handle}")
        return session

    def list_handles(self) -> List[str]:
        """Snapshot of live handles, oldest first."""
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, handle: str) -> bool:
        return handle in self._sessions

    async def drain_all(self) -> List[str]:
        """
        Close every remaining session. Used at shutdown.

        One failing close never stops the others from being attempted.

        Returns:
            Handles whose browser failed to close
        """
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()

        failed = []
        for session in sessions:
            try:
                await session.browser.close()
                logger.info(f"Closed browser: {session.handle}")
            except Exception as e:
                logger.error(f"Error closing browser {session.handle}: {e}")
                failed.append(session.handle)

        if sessions:
            logger.info(f"Drained {len(sessions)} browser session(s), {len(failed)} failed to close")
        return failed

    async def _close_quietly(self, browser: Any, engine: str) -> None:
        """Close a browser left over from a failed launch."""
        try:
            await browser.close()
        except Exception as e:
            logger.warning(f"Could not close partially launched {engine} browser: {e}")
