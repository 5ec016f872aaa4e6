"""Shared types for op-securenotes.

Data models, field shape patterns and the exception hierarchy.
"""

from op_securenotes.types.exceptions import (
    CliNotFoundError,
    DocumentHostError,
    GatewayError,
    InvalidConfigError,
    InvalidTransitionError,
    NoActiveSessionError,
    ParseError,
    RegistryClosedError,
    SecureNotesError,
    ValidationError,
)
from op_securenotes.types.fields import (
    DEFAULT_OP_TYPE,
    FIELD_TYPE_PATTERNS,
    FieldType,
    FieldTypePattern,
    detect_field_type,
    op_type_for,
    suggested_field_name,
)
from op_securenotes.types.models import (
    NOTE_FIELD_ID,
    CommandResult,
    FieldPurpose,
    Item,
    ItemCategory,
    ItemField,
    Vault,
)

__all__ = [
    # Models
    "NOTE_FIELD_ID",
    "CommandResult",
    "FieldPurpose",
    "Item",
    "ItemCategory",
    "ItemField",
    "Vault",
    # Field shapes
    "DEFAULT_OP_TYPE",
    "FIELD_TYPE_PATTERNS",
    "FieldType",
    "FieldTypePattern",
    "detect_field_type",
    "op_type_for",
    "suggested_field_name",
    # Exceptions
    "CliNotFoundError",
    "DocumentHostError",
    "GatewayError",
    "InvalidConfigError",
    "InvalidTransitionError",
    "NoActiveSessionError",
    "ParseError",
    "RegistryClosedError",
    "SecureNotesError",
    "ValidationError",
]
