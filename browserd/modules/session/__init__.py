"""
Session Module - Black Box Interface

Purpose: Own the registry of live browser sessions
Interface: create_session(), get_session(), end_session(), list_handles(), drain_all()
Hidden: Handle format, locking, launch/context option merging

Replaceable with any registry honouring the same lifecycle contract.
"""

from .handles import HandleFactory, generate_handle
from .session import Session, SessionModule

__all__ = ["SessionModule", "Session", "HandleFactory", "generate_handle"]
