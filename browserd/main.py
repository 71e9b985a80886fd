#!/usr/bin/env python3
"""
browserd - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Serves the HTTP API

All business logic is in the modules, following black box principles.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from browserd import __version__
from browserd.config.provider import ConfigProvider, EnvConfigProvider
from browserd.modules.api import (
    TOOL_DEFINITIONS,
    BrowserListResponse,
    ExecuteToolRequest,
    HealthResponse,
    ToolListResponse,
)
from browserd.modules.dispatch import Dispatcher
from browserd.modules.driver import PlaywrightDriver
from browserd.modules.session import SessionModule

logger = logging.getLogger("browserd.main")


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    driver_factory: Callable[[], object] = PlaywrightDriver,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Source of API and browser settings (environment by default)
        driver_factory: Builds the browser driver at startup; must return an
            object with async start(), stop() and launch()
    """
    config_provider = config_provider or EnvConfigProvider()
    api_config = config_provider.get_api_config()
    browser_config = config_provider.get_browser_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - start the driver, drain sessions on exit.
        """
        logger.info("Starting browserd...")

        driver = driver_factory()
        await driver.start()

        session_module = SessionModule(driver, browser_config)
        app.state.driver = driver
        app.state.session_module = session_module
        app.state.dispatcher = Dispatcher(session_module, browser_config)
        app.state.started_at = time.monotonic()

        logger.info(f"browserd running on port {api_config.port}")

        yield

        # Shutdown (SIGINT/SIGTERM are turned into this by uvicorn)
        logger.info("Shutting down server...")
        failed = await session_module.drain_all()
        if failed:
            logger.error(f"Browsers that did not close cleanly: {', '.join(failed)}")
        await driver.stop()
        logger.info("browserd shutdown complete")

    app = FastAPI(
        title="browserd",
        description="Browser automation over HTTP",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            200: Service healthy, with live browser count and uptime
        """
        state = request.app.state
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(UTC),
            browsers=len(state.session_module),
            uptime=time.monotonic() - state.started_at,
        )

    @app.get("/tools", response_model=ToolListResponse)
    async def list_tools():
        """List the supported tools and their input schemas."""
        return ToolListResponse(tools=TOOL_DEFINITIONS)

    @app.post("/tools/execute")
    async def execute_tool(payload: ExecuteToolRequest, request: Request):
        """
        Execute a tool.

        Returns:
            200: {"success": true, "result": ...}
            500: {"success": false, "error": ...}
        """
        dispatcher: Dispatcher = request.app.state.dispatcher
        response = await dispatcher.execute(payload.name, payload.arguments)
        return JSONResponse(
            status_code=200 if response.success else 500,
            content=response.to_payload(),
        )

    @app.get("/browsers", response_model=BrowserListResponse)
    async def list_browsers(request: Request):
        """List live browser session handles."""
        handles = request.app.state.session_module.list_handles()
        return BrowserListResponse(browsers=handles, count=len(handles))

    # Error handlers

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request, exc):
        """Malformed request bodies get the same failure envelope as tool errors."""
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.warning(f"Validation error: {problems}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": f"Invalid request: {problems}"},
        )

    return app


app = create_app()
