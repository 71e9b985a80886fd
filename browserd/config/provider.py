"""Configuration provider following Black Box Design principles."""
import os
import tempfile
from dataclasses import dataclass, field
from typing import Dict, List, Protocol

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_LAUNCH_ARGS = [
    "--disable-dev-shm-usage",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-gpu",
    "--disable-extensions",
    "--no-first-run",
    "--disable-default-apps",
]


@dataclass
class APIConfig:
    """API configuration."""
    port: int = 8080
    host: str = "0.0.0.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class BrowserConfig:
    """Browser session defaults and driver timeouts."""
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1920, "height": 1080})
    user_agent: str = DEFAULT_USER_AGENT
    launch_args: List[str] = field(default_factory=lambda: list(DEFAULT_LAUNCH_ARGS))
    navigation_timeout_ms: int = 30000
    action_timeout_ms: int = 10000
    screenshot_dir: str = field(default_factory=tempfile.gettempdir)


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_browser_config(self) -> BrowserConfig:
        """Get browser configuration."""
        ...


def parse_viewport(value: str) -> Dict[str, int]:
    """Parse a ``WIDTHxHEIGHT`` string, e.g. ``1280x800``."""
    try:
        width, height = value.lower().split("x", 1)
        return {"width": int(width), "height": int(height)}
    except ValueError:
        raise ValueError(f"Invalid viewport '{value}', expected WIDTHxHEIGHT (e.g. 1920x1080)")


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("MCP_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
        )

    def get_browser_config(self) -> BrowserConfig:
        """Get browser configuration from environment variables."""
        return BrowserConfig(
            viewport=parse_viewport(os.getenv("BROWSER_VIEWPORT", "1920x1080")),
            user_agent=os.getenv("BROWSER_USER_AGENT", DEFAULT_USER_AGENT),
            navigation_timeout_ms=int(os.getenv("NAVIGATION_TIMEOUT_MS", "30000")),
            action_timeout_ms=int(os.getenv("ACTION_TIMEOUT_MS", "10000")),
            screenshot_dir=os.getenv("SCREENSHOT_DIR") or tempfile.gettempdir(),
        )
