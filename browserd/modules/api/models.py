"""
browserd shared data models.

These models define the structure of data passed between the HTTP surface
and the modules behind it.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

# Enums


class Engine(str, Enum):
    """Browser engines the driver can launch."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class ToolName(str, Enum):
    """Names of the supported tools."""

    LAUNCH_BROWSER = "launch_browser"
    NAVIGATE_TO = "navigate_to"
    CLICK_ELEMENT = "click_element"
    TYPE_TEXT = "type_text"
    GET_TEXT = "get_text"
    SCREENSHOT = "screenshot"
    CLOSE_BROWSER = "close_browser"


# Request Models (API Input)


class ExecuteToolRequest(BaseModel):
    """Request to run one tool."""

    # Kept as a free string so an unknown tool reaches the dispatcher and
    # comes back as a failure envelope instead of a 422.
    name: Optional[str] = Field(None, description="Tool name")
    arguments: Optional[Dict[str, Any]] = Field(
        default=None, description="Tool arguments"
    )


# Response Models (API Output)


class ToolResponse(BaseModel):
    """Uniform result envelope for every tool invocation."""

    success: bool
    result: Optional[Any] = None
    error: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Envelope as sent on the wire: result on success, error on failure."""
        if self.success:
            return {"success": True, "result": self.result}
        return {"success": False, "error": self.error}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status", pattern="^(healthy|unhealthy)$")
    timestamp: datetime
    browsers: int = Field(..., description="Number of live browser sessions")
    uptime: float = Field(..., description="Seconds since the server started")


class BrowserListResponse(BaseModel):
    """Live session handles."""

    browsers: List[str]
    count: int


class ToolDefinition(BaseModel):
    """Discovery descriptor for a tool."""

    name: ToolName
    description: str
    inputSchema: Dict[str, Any]


class ToolListResponse(BaseModel):
    """All tool descriptors."""

    tools: List[ToolDefinition]


__all__ = [
    # Enums
    "Engine",
    "ToolName",
    # Request models
    "ExecuteToolRequest",
    # Response models
    "ToolResponse",
    "HealthResponse",
    "BrowserListResponse",
    "ToolDefinition",
    "ToolListResponse",
]
