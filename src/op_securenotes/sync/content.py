"""Content transform between a Secure Note item and document lines.

Only the note-body field takes part; every other field is ignored.
"""

from __future__ import annotations

from typing import Optional, Sequence

from op_securenotes.types import Item, ItemField


def note_body_field(item: Item) -> Optional[ItemField]:
    """The item's plain-text note body field, if present."""
    for item_field in item.fields:
        if item_field.is_note_body:
            return item_field
    return None


def to_lines(item: Item) -> list[str]:
    """Return note contents as a list of lines.

    An item without a body yields a single empty line.
    """
    body = note_body_field(item)
    contents = (body.value if body else None) or ""
    return contents.replace("\r\n", "\n").split("\n")


def to_field_value(lines: Sequence[str]) -> str:
    """Join document lines into the note body value."""
    return "\n".join(lines)


__all__ = ["note_body_field", "to_field_value", "to_lines"]
