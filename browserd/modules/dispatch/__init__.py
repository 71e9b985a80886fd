"""
Dispatch Module - Black Box Interface

Purpose: Validate tool invocations and run them against browser sessions
Interface: Dispatcher.execute(name, arguments) -> ToolResponse, parse_command()
Hidden: Per-tool argument models, driver calls, timeouts, error mapping
"""

from .commands import COMMANDS, Command, parse_command
from .dispatcher import NO_TEXT_FOUND, Dispatcher

__all__ = ["Dispatcher", "Command", "COMMANDS", "parse_command", "NO_TEXT_FOUND"]
