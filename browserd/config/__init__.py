"""
Config - environment-driven settings for the API server and browser sessions.
"""

from .provider import (
    DEFAULT_LAUNCH_ARGS,
    DEFAULT_USER_AGENT,
    APIConfig,
    BrowserConfig,
    ConfigProvider,
    EnvConfigProvider,
)

__all__ = [
    "APIConfig",
    "BrowserConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "DEFAULT_LAUNCH_ARGS",
    "DEFAULT_USER_AGENT",
]
