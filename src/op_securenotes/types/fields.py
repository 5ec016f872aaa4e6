"""Field shape detection.

Classifies a free-form string against a fixed, ordered set of patterns so the
item-creation wizard can suggest a field name and an ``op`` field type.
More specific patterns come first: a card number or an ISO date would also
look like a phone number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FieldType(Enum):
    """Recognizable field shapes."""

    OTP = "otp"
    URL = "url"
    EMAIL = "email"
    DATE = "date"
    CARD_NUMBER = "card_number"
    PHONE = "phone"
    SECRET = "secret"


@dataclass(frozen=True)
class FieldTypePattern:
    """Pattern for one field shape.

    Attributes:
        pattern: Compiled regex matched against the stripped value
        field: Suggested field name
        op_type: Type used in ``op`` assignment statements
    """

    pattern: re.Pattern
    field: str
    op_type: str


# Insertion order is detection order
FIELD_TYPE_PATTERNS: dict[FieldType, FieldTypePattern] = {
    FieldType.OTP: FieldTypePattern(
        re.compile(r"^otpauth://\S+$", re.IGNORECASE), "one-time password", "otp"
    ),
    FieldType.URL: FieldTypePattern(
        re.compile(r"^https?://\S+$", re.IGNORECASE), "website", "url"
    ),
    FieldType.EMAIL: FieldTypePattern(
        re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$"), "email", "email"
    ),
    FieldType.DATE: FieldTypePattern(
        re.compile(r"^\d{4}-\d{2}-\d{2}$"), "date", "date"
    ),
    FieldType.CARD_NUMBER: FieldTypePattern(
        re.compile(r"^\d{4}(?:[ -]?\d{4}){3}$"), "card number", "password"
    ),
    FieldType.PHONE: FieldTypePattern(
        re.compile(r"^\+?\d[\d\s().-]{5,}\d$"), "phone", "phone"
    ),
    FieldType.SECRET: FieldTypePattern(
        re.compile(r"^(?=.*[A-Za-z])(?=.*\d)\S{16,}$"), "password", "password"
    ),
}

# op assignment type for values with no recognizable shape
DEFAULT_OP_TYPE = "text"


def detect_field_type(value: str) -> Optional[FieldType]:
    """Return the first field shape matching value, or None."""
    candidate = value.strip()
    if not candidate:
        return None
    for field_type, shape in FIELD_TYPE_PATTERNS.items():
        if shape.pattern.match(candidate):
            return field_type
    return None


def suggested_field_name(field_type: Optional[FieldType]) -> Optional[str]:
    if field_type is None:
        return None
    return FIELD_TYPE_PATTERNS[field_type].field


def op_type_for(field_type: Optional[FieldType]) -> str:
    if field_type is None:
        return DEFAULT_OP_TYPE
    return FIELD_TYPE_PATTERNS[field_type].op_type


__all__ = [
    "DEFAULT_OP_TYPE",
    "FIELD_TYPE_PATTERNS",
    "FieldType",
    "FieldTypePattern",
    "detect_field_type",
    "op_type_for",
    "suggested_field_name",
]
