"""Core utilities and helper functions."""

from op_securenotes.core.discovery import (
    CLIInfo,
    clear_cache,
    discover_cli,
    get_cli_path,
    is_supported_version,
)
from op_securenotes.core.utils import (
    MORE_THAN_ONE_MATCH,
    MatchCandidate,
    dedup_list,
    escape_assignment_name,
    is_ambiguous_match,
    parse_match_candidates,
)

__all__ = [
    # Discovery
    "CLIInfo",
    "clear_cache",
    "discover_cli",
    "get_cli_path",
    "is_supported_version",
    # Output helpers
    "MORE_THAN_ONE_MATCH",
    "MatchCandidate",
    "dedup_list",
    "escape_assignment_name",
    "is_ambiguous_match",
    "parse_match_candidates",
]
