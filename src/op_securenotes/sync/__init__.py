"""Document synchronization: content transform and sync engine."""

from op_securenotes.sync.content import note_body_field, to_field_value, to_lines
from op_securenotes.sync.engine import SyncEngine

__all__ = [
    "SyncEngine",
    "note_body_field",
    "to_field_value",
    "to_lines",
]
