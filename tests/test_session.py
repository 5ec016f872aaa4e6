"""Tests for the session registry and sync state machine."""

import pytest

from conftest import item_json
from op_securenotes.session import (
    CHOICE_EVENTS,
    ConflictChoice,
    SessionRegistry,
    SyncEvent,
    SyncState,
    transition,
)
from op_securenotes.types import InvalidTransitionError, Item, RegistryClosedError


def make_item(**kwargs) -> Item:
    return Item.from_dict(item_json(**kwargs))


class TestSessionRegistry:
    """Test SessionRegistry."""

    def test_create_and_get(self):
        registry = SessionRegistry()
        session = registry.create(1, make_item())

        assert registry.get(1) is session
        assert session.item_id == "item-1"
        assert session.vault_id == "vault-1"
        assert session.title == "Recovery codes"
        assert session.is_idle
        assert 1 in registry
        assert len(registry) == 1

    def test_get_unknown(self):
        assert SessionRegistry().get(99) is None

    def test_create_replaces_existing(self):
        registry = SessionRegistry()
        registry.create(1, make_item(item_id="a"))
        session = registry.create(1, make_item(item_id="b"))

        assert registry.get(1) is session
        assert len(registry) == 1

    def test_destroy(self):
        registry = SessionRegistry()
        registry.create(1, make_item())

        assert registry.destroy(1) is True
        assert registry.destroy(1) is False
        assert registry.get(1) is None

    def test_sessions_for_item(self):
        registry = SessionRegistry()
        registry.create(1, make_item(item_id="a"))
        registry.create(2, make_item(item_id="a"))
        registry.create(3, make_item(item_id="b"))

        assert [s.document_id for s in registry.sessions_for_item("a")] == [1, 2]

    def test_close_destroys_all_and_rejects_new(self):
        registry = SessionRegistry()
        registry.create(1, make_item())
        registry.create(2, make_item())

        registry.close()

        assert registry.closed
        assert len(registry) == 0
        with pytest.raises(RegistryClosedError):
            registry.create(3, make_item())


class TestTransitions:
    """Test the sync state machine."""

    @pytest.mark.parametrize(
        "events, expected",
        [
            ([SyncEvent.SAVE_REQUESTED], SyncState.SAVING),
            ([SyncEvent.RELOAD_CLEAN], SyncState.FETCHING),
            ([SyncEvent.RELOAD_DIRTY], SyncState.AWAITING_CONFLICT_CHOICE),
            ([SyncEvent.RELOAD_DIRTY, SyncEvent.CHOSE_OVERWRITE], SyncState.SAVING),
            ([SyncEvent.RELOAD_DIRTY, SyncEvent.CHOSE_DISCARD], SyncState.FETCHING),
            ([SyncEvent.RELOAD_DIRTY, SyncEvent.CHOSE_CANCEL], SyncState.IDLE),
        ],
    )
    def test_paths(self, events, expected):
        state = SyncState.IDLE
        for event in events:
            state = transition(state, event)
        assert state is expected

    @pytest.mark.parametrize("state", list(SyncState))
    def test_finished_always_returns_to_idle(self, state):
        assert transition(state, SyncEvent.FINISHED) is SyncState.IDLE

    @pytest.mark.parametrize(
        "state, event",
        [
            (SyncState.SAVING, SyncEvent.SAVE_REQUESTED),
            (SyncState.FETCHING, SyncEvent.RELOAD_CLEAN),
            (SyncState.IDLE, SyncEvent.CHOSE_DISCARD),
            (SyncState.AWAITING_CONFLICT_CHOICE, SyncEvent.RELOAD_DIRTY),
        ],
    )
    def test_invalid_transition(self, state, event):
        with pytest.raises(InvalidTransitionError) as exc_info:
            transition(state, event)
        assert exc_info.value.state == state.value
        assert exc_info.value.event == event.value

    def test_every_choice_has_an_event(self):
        assert set(CHOICE_EVENTS) == set(ConflictChoice)
        assert [c.value for c in ConflictChoice][-1] == "Cancel"
