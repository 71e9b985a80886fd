"""
API Module - Black Box Interface

Purpose: HTTP request/response models and tool discovery
Interface: pydantic models, TOOL_DEFINITIONS
Hidden: Schema details of each tool descriptor

The API module only describes the wire format - it contains no business logic.
"""

from .models import (
    BrowserListResponse,
    Engine,
    ExecuteToolRequest,
    HealthResponse,
    ToolDefinition,
    ToolListResponse,
    ToolName,
    ToolResponse,
)
from .tools import TOOL_DEFINITIONS

__all__ = [
    "Engine",
    "ToolName",
    "ExecuteToolRequest",
    "ToolResponse",
    "HealthResponse",
    "BrowserListResponse",
    "ToolDefinition",
    "ToolListResponse",
    "TOOL_DEFINITIONS",
]
