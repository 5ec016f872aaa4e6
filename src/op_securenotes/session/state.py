"""Sync State Types.

Per-session state of the save/reload protocols:

    IDLE → SAVING → IDLE                                   (save)
    IDLE → FETCHING → IDLE                                 (reload, clean)
    IDLE → AWAITING_CONFLICT_CHOICE → FETCHING → IDLE      (reload, discard)
    IDLE → AWAITING_CONFLICT_CHOICE → SAVING → IDLE        (reload, overwrite)
    IDLE → AWAITING_CONFLICT_CHOICE → IDLE                 (reload, cancel)
"""

from __future__ import annotations

from enum import Enum

from op_securenotes.types import InvalidTransitionError


class SyncState(Enum):
    """Sync state of one editing session."""

    IDLE = "idle"
    AWAITING_CONFLICT_CHOICE = "awaiting_conflict_choice"
    FETCHING = "fetching"
    SAVING = "saving"


class SyncEvent(Enum):
    """State transition trigger."""

    SAVE_REQUESTED = "save_requested"
    RELOAD_CLEAN = "reload_clean"
    RELOAD_DIRTY = "reload_dirty"
    CHOSE_OVERWRITE = "chose_overwrite"
    CHOSE_DISCARD = "chose_discard"
    CHOSE_CANCEL = "chose_cancel"
    FINISHED = "finished"


class ConflictChoice(Enum):
    """Answer to the unsaved-changes prompt, in prompt order."""

    OVERWRITE = "Overwrite with current document text"
    DISCARD = "Discard current document changes"
    CANCEL = "Cancel"


CHOICE_EVENTS: dict[ConflictChoice, SyncEvent] = {
    ConflictChoice.OVERWRITE: SyncEvent.CHOSE_OVERWRITE,
    ConflictChoice.DISCARD: SyncEvent.CHOSE_DISCARD,
    ConflictChoice.CANCEL: SyncEvent.CHOSE_CANCEL,
}

TRANSITIONS: dict[tuple[SyncState, SyncEvent], SyncState] = {
    (SyncState.IDLE, SyncEvent.SAVE_REQUESTED): SyncState.SAVING,
    (SyncState.IDLE, SyncEvent.RELOAD_CLEAN): SyncState.FETCHING,
    (SyncState.IDLE, SyncEvent.RELOAD_DIRTY): SyncState.AWAITING_CONFLICT_CHOICE,
    (SyncState.AWAITING_CONFLICT_CHOICE, SyncEvent.CHOSE_OVERWRITE): SyncState.SAVING,
    (SyncState.AWAITING_CONFLICT_CHOICE, SyncEvent.CHOSE_DISCARD): SyncState.FETCHING,
    (SyncState.AWAITING_CONFLICT_CHOICE, SyncEvent.CHOSE_CANCEL): SyncState.IDLE,
    # terminal: success, failure, or an error while waiting
    (SyncState.IDLE, SyncEvent.FINISHED): SyncState.IDLE,
    (SyncState.AWAITING_CONFLICT_CHOICE, SyncEvent.FINISHED): SyncState.IDLE,
    (SyncState.FETCHING, SyncEvent.FINISHED): SyncState.IDLE,
    (SyncState.SAVING, SyncEvent.FINISHED): SyncState.IDLE,
}


def transition(state: SyncState, event: SyncEvent) -> SyncState:
    """Next state for an event.

    Raises:
        InvalidTransitionError: If the event is not accepted in state
    """
    try:
        return TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransitionError(state.value, event.value) from None


class SyncOutcome(Enum):
    """Result of a public engine operation."""

    SAVED = "saved"
    RELOADED = "reloaded"
    CANCELLED = "cancelled"
    FAILED = "failed"
    NOOP = "noop"
    BUSY = "busy"
    DISREGARDED = "disregarded"


__all__ = [
    "CHOICE_EVENTS",
    "TRANSITIONS",
    "ConflictChoice",
    "SyncEvent",
    "SyncOutcome",
    "SyncState",
    "transition",
]
