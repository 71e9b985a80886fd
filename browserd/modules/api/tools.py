"""
Static tool descriptors served by ``GET /tools``.

Discovery only: the dispatcher validates arguments with its own command
models and never reads these schemas.
"""

from typing import List

from .models import Engine, ToolDefinition, ToolName

_HANDLE = {"type": "string", "description": "Browser session handle returned by launch_browser"}
_SELECTOR = {"type": "string", "description": "CSS or Playwright selector"}


TOOL_DEFINITIONS: List[ToolDefinition] = [
    ToolDefinition(
        name=ToolName.LAUNCH_BROWSER,
        description="Launch a new browser instance",
        inputSchema={
            "type": "object",
            "properties": {
                "engine": {
                    "type": "string",
                    "enum": [e.value for e in Engine],
                    "default": Engine.CHROMIUM.value,
                },
                "headless": {"type": "boolean", "default": True},
                "engineOptions": {
                    "type": "object",
                    "default": {},
                    "description": "Extra launch options; 'viewport' and 'userAgent' override the page defaults",
                },
            },
        },
    ),
    ToolDefinition(
        name=ToolName.NAVIGATE_TO,
        description="Navigate to a URL",
        inputSchema={
            "type": "object",
            "properties": {"handle": _HANDLE, "url": {"type": "string"}},
            "required": ["handle", "url"],
        },
    ),
    ToolDefinition(
        name=ToolName.CLICK_ELEMENT,
        description="Click an element on the page",
        inputSchema={
            "type": "object",
            "properties": {"handle": _HANDLE, "selector": _SELECTOR},
            "required": ["handle", "selector"],
        },
    ),
    ToolDefinition(
        name=ToolName.TYPE_TEXT,
        description="Type text into an input field",
        inputSchema={
            "type": "object",
            "properties": {"handle": _HANDLE, "selector": _SELECTOR, "text": {"type": "string"}},
            "required": ["handle", "selector", "text"],
        },
    ),
    ToolDefinition(
        name=ToolName.GET_TEXT,
        description="Get text content from an element",
        inputSchema={
            "type": "object",
            "properties": {"handle": _HANDLE, "selector": _SELECTOR},
            "required": ["handle", "selector"],
        },
    ),
    ToolDefinition(
        name=ToolName.SCREENSHOT,
        description="Take a screenshot of the current page",
        inputSchema={
            "type": "object",
            "properties": {"handle": _HANDLE, "fullPage": {"type": "boolean", "default": False}},
            "required": ["handle"],
        },
    ),
    ToolDefinition(
        name=ToolName.CLOSE_BROWSER,
        description="Close a browser instance",
        inputSchema={
            "type": "object",
            "properties": {"handle": _HANDLE},
            "required": ["handle"],
        },
    ),
]
