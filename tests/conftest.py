"""Test configuration for op-securenotes."""
import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional, Sequence
from unittest.mock import AsyncMock, MagicMock

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from op_securenotes.config import SecureNotesConfig
from op_securenotes.host import InMemoryDocumentHost
from op_securenotes.session import SessionRegistry
from op_securenotes.sync import SyncEngine
from op_securenotes.types import CommandResult


# =============================================================================
# Builders
# =============================================================================


def item_json(
    item_id: str = "item-1",
    title: str = "Recovery codes",
    vault_id: str = "vault-1",
    notes: Optional[str] = "line one\nline two",
    extra_fields: Sequence[dict] = (),
) -> dict:
    """JSON object as printed by ``op item get --format json``."""
    fields = list(extra_fields)
    if notes is not None:
        fields.insert(
            0,
            {
                "id": "notesPlain",
                "type": "STRING",
                "purpose": "NOTES",
                "label": "notesPlain",
                "value": notes,
            },
        )
    return {
        "id": item_id,
        "title": title,
        "vault": {"id": vault_id, "name": "Private"},
        "category": "SECURE_NOTE",
        "fields": fields,
    }


def ok_result(data: Any) -> CommandResult:
    return CommandResult(stdout_lines=json.dumps(data, indent=2).split("\n"))


def error_result(*lines: str) -> CommandResult:
    return CommandResult(stderr_lines=list(lines), exit_code=1)


def empty_result() -> CommandResult:
    return CommandResult()


# =============================================================================
# Host doubles
# =============================================================================


class ScriptedPrompter:
    """Prompter answering from queued responses and recording each prompt.

    Queue entries are returned as-is; for select() an int entry picks the
    option at that index. A callable entry is called with the prompt
    arguments and its return value is used.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: list[tuple[str, str]] = []
        self.options: list[list[str]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def _next(self, *args: Any) -> Any:
        if not self.responses:
            raise AssertionError(f"Unexpected prompt: {args}")
        response = self.responses.pop(0)
        if callable(response):
            return response(*args)
        return response

    async def input(self, prompt: str, default: Optional[str] = None) -> Optional[str]:
        self.calls.append(("input", prompt))
        return self._next(prompt, default)

    async def select(
        self,
        options: Sequence[Any],
        prompt: str,
        labeler: Callable[[Any], str] = str,
    ):
        self.calls.append(("select", prompt))
        self.options.append([labeler(o) for o in options])
        response = self._next(options, prompt)
        if isinstance(response, int) and not isinstance(response, bool):
            return options[response]
        return response

    async def confirm(self, prompt: str, choices: Sequence[str]) -> Optional[int]:
        self.calls.append(("confirm", prompt))
        self.options.append(list(choices))
        return self._next(prompt, choices)


class RecordingNotifier:
    """Notifier keeping every message as (level, message)."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def levels(self, level: str) -> list[str]:
        return [m for lvl, m in self.messages if lvl == level]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def config():
    return SecureNotesConfig(cli_path="/usr/bin/op")


@pytest.fixture
def gateway(config):
    """OpGateway double: async commands are AsyncMocks, blocking ones MagicMocks."""
    mock = MagicMock()
    mock.config = config
    mock.get_item = AsyncMock(return_value=ok_result(item_json()))
    mock.edit_item = AsyncMock(return_value=ok_result(item_json()))
    mock.create_item = AsyncMock(return_value=ok_result(item_json()))
    mock.list_items = AsyncMock(return_value=ok_result([]))
    mock.list_vaults = AsyncMock(return_value=ok_result([]))
    mock.list_items_sync = MagicMock(return_value=ok_result([]))
    mock.list_vaults_sync = MagicMock(
        return_value=ok_result([{"id": "vault-1", "name": "Private"}])
    )
    return mock


@pytest.fixture
def host():
    return InMemoryDocumentHost()


@pytest.fixture
def prompter():
    return ScriptedPrompter()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def engine(registry, gateway, host, prompter, notifier, config):
    return SyncEngine(registry, gateway, host, prompter, notifier, config)
