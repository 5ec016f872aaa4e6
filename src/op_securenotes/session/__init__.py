"""Editing sessions and their sync state.

    >>> from op_securenotes.session import SessionRegistry
    >>> registry = SessionRegistry()
    >>> session = registry.create(document_id, item)
    >>> registry.get(document_id) is session
    True
"""

from op_securenotes.session.registry import EditingSession, SessionRegistry
from op_securenotes.session.state import (
    CHOICE_EVENTS,
    TRANSITIONS,
    ConflictChoice,
    SyncEvent,
    SyncOutcome,
    SyncState,
    transition,
)

__all__ = [
    # Registry
    "EditingSession",
    "SessionRegistry",
    # State machine
    "CHOICE_EVENTS",
    "TRANSITIONS",
    "ConflictChoice",
    "SyncEvent",
    "SyncOutcome",
    "SyncState",
    "transition",
]
