"""Helpers for ``op`` output and candidate lists."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Hashable, Iterable, TypeVar

T = TypeVar("T", bound=Hashable)

# Marker op prints when a lookup by name is ambiguous
MORE_THAN_ONE_MATCH = "More than one item matches"

_MATCH_LINE = re.compile(
    r'for the item "(?P<title>.*)" in vault (?P<vault>[^:]+): (?P<id>\S+)'
)


@dataclass
class MatchCandidate:
    """One item listed in an ambiguous-match error."""

    title: str
    vault: str
    id: str


def dedup_list(values: Iterable[T]) -> list[T]:
    """Remove duplicates, keeping first occurrences in order.

    Does not modify the input.
    """
    seen: set[T] = set()
    result: list[T] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def is_ambiguous_match(error_lines: list[str]) -> bool:
    """True when op refused a lookup because several items matched."""
    return any(MORE_THAN_ONE_MATCH in line for line in error_lines)


def parse_match_candidates(error_lines: list[str]) -> list[MatchCandidate]:
    """Parse the items listed by an ambiguous-match error.

    op lists one candidate per line, e.g.::

        * for the item "GitHub" in vault Private: 4xz2jvw3tq2lrkysyaw6nkm3ua

    Lines that do not describe a candidate are skipped.
    """
    candidates = []
    for line in error_lines:
        match = _MATCH_LINE.search(line.strip())
        if match:
            candidates.append(
                MatchCandidate(
                    title=match.group("title"),
                    vault=match.group("vault").strip(),
                    id=match.group("id"),
                )
            )
    return candidates


def escape_assignment_name(name: str) -> str:
    """Escape a field name for an op assignment statement.

    Periods, equal signs and backslashes are significant in
    ``[section.]field[type]=value`` and must be backslash-escaped.
    """
    return re.sub(r"([\\.=])", r"\\\1", name)


__all__ = [
    "MORE_THAN_ONE_MATCH",
    "MatchCandidate",
    "dedup_list",
    "escape_assignment_name",
    "is_ambiguous_match",
    "parse_match_candidates",
]
