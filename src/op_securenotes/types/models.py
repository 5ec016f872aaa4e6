"""Secure Notes Types - Data Models.

This module defines the structures exchanged with the ``op`` CLI.

For Callers:
    1. Check result.ok first (no error lines)
    2. Check result.is_empty for a valid no-op outcome (e.g. empty list)
    3. Use result.json() or Item.from_result() to decode stdout

Serialization:
    Item, ItemField and Vault provide from_dict()/to_dict() mirroring the
    JSON emitted by ``op ... --format json``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from op_securenotes.types.exceptions import ParseError

# Field carrying the body of a Secure Note
NOTE_FIELD_ID = "notesPlain"


class FieldPurpose(Enum):
    """Field purpose as reported by ``op``.

    Attributes:
        NOTES: Plain-text note body
        USERNAME: Login username
        PASSWORD: Login password
    """
    NOTES = "NOTES"
    USERNAME = "USERNAME"
    PASSWORD = "PASSWORD"


class ItemCategory(Enum):
    """Item categories used by this package (``op --category`` values)."""
    SECURE_NOTE = "Secure Note"
    LOGIN = "Login"
    PASSWORD = "Password"
    API_CREDENTIAL = "API Credential"


@dataclass
class Vault:
    """Vault reference.

    Attributes:
        id: Vault UUID
        name: Vault display name
    """
    id: str
    name: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> Vault:
        """Create from dictionary (JSON deserialization)."""
        return cls(id=data["id"], name=data.get("name", ""))


@dataclass
class ItemField:
    """A single field of an item.

    Attributes:
        id: Field id (e.g. "notesPlain", "password")
        type: Field type (e.g. "STRING", "CONCEALED")
        purpose: Field purpose ("NOTES", "PASSWORD", ...) or None
        label: Display label
        value: Field value, None when the field is empty
    """
    id: str
    type: str = "STRING"
    purpose: Optional[str] = None
    label: str = ""
    value: Optional[str] = None

    @property
    def is_note_body(self) -> bool:
        return self.id == NOTE_FIELD_ID and self.purpose == FieldPurpose.NOTES.value

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"id": self.id, "type": self.type, "label": self.label}
        if self.purpose is not None:
            data["purpose"] = self.purpose
        if self.value is not None:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> ItemField:
        """Create from dictionary (JSON deserialization)."""
        return cls(
            id=data.get("id", ""),
            type=data.get("type", "STRING"),
            purpose=data.get("purpose"),
            label=data.get("label", ""),
            value=data.get("value"),
        )


@dataclass
class Item:
    """A 1Password item, or an item overview from ``op item list``.

    Overviews carry no fields.

    Attributes:
        id: Item UUID
        title: Item title
        vault: Vault holding the item
        category: Category string as reported by ``op`` (e.g. "SECURE_NOTE")
        fields: Ordered item fields
    """
    id: str
    title: str
    vault: Vault
    category: str = ""
    fields: list[ItemField] = field(default_factory=list)

    @property
    def vault_id(self) -> str:
        return self.vault.id

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "vault": self.vault.to_dict(),
            "category": self.category,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Item:
        """Create from dictionary (JSON deserialization)."""
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            vault=Vault.from_dict(data.get("vault") or {"id": ""}),
            category=data.get("category", ""),
            fields=[ItemField.from_dict(f) for f in data.get("fields") or []],
        )

    @classmethod
    def from_result(cls, result: CommandResult, command: str = "item get") -> Item:
        """Decode a single item from a successful command result.

        Raises:
            ParseError: If stdout is not a JSON object describing an item
        """
        data = result.json(command)
        if not isinstance(data, dict):
            raise ParseError(command, "expected a JSON object")
        try:
            return cls.from_dict(data)
        except KeyError as e:
            raise ParseError(command, f"missing key {e}") from e


@dataclass
class CommandResult:
    """Outcome of one ``op`` invocation.

    Attributes:
        stdout_lines: Result lines (stdout split on newlines)
        stderr_lines: Error lines (non-blank stderr lines)
        exit_code: Process exit code (-1 when the process never ran)
        duration_ms: Execution duration in milliseconds
    """
    stdout_lines: list[str] = field(default_factory=list)
    stderr_lines: list[str] = field(default_factory=list)
    exit_code: int = 0
    duration_ms: int = 0

    @property
    def error_lines(self) -> list[str]:
        return self.stderr_lines

    @property
    def ok(self) -> bool:
        """True when the command reported no errors."""
        return not self.stderr_lines

    @property
    def is_empty(self) -> bool:
        """True when the command produced neither results nor errors."""
        return not self.stdout_lines and not self.stderr_lines

    @property
    def first_error(self) -> Optional[str]:
        return self.stderr_lines[0] if self.stderr_lines else None

    def json(self, command: str = "") -> Any:
        """Decode stdout as a single JSON document.

        Raises:
            ParseError: If stdout is not valid JSON
        """
        try:
            return json.loads("".join(self.stdout_lines))
        except json.JSONDecodeError as e:
            raise ParseError(command, str(e)) from e

    @classmethod
    def from_output(
        cls,
        stdout: str,
        stderr: str,
        exit_code: int,
        duration_ms: int = 0,
    ) -> CommandResult:
        """Build a result from raw process output.

        A non-zero exit with an empty stderr still yields one error line,
        so callers never mistake a failed command for a no-op.
        """
        stdout_lines = stdout.splitlines() if stdout.strip() else []
        stderr_lines = [line for line in stderr.splitlines() if line.strip()]
        if exit_code != 0 and not stderr_lines:
            stderr_lines = [f"op exited with status {exit_code}"]
        return cls(
            stdout_lines=stdout_lines,
            stderr_lines=stderr_lines,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    @classmethod
    def failure(cls, message: str, duration_ms: int = 0) -> CommandResult:
        """Result for a command that could not run at all."""
        return cls(stderr_lines=[message], exit_code=-1, duration_ms=duration_ms)
