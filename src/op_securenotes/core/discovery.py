"""CLI Discovery.

Locates the 1Password CLI executable and reads its version.
Results are cached for the lifetime of the process.
"""

from __future__ import annotations

import os
import re
import shutil
import subprocess
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from packaging.version import InvalidVersion, Version

# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class CLIInfo:
    """Information about a discovered CLI."""

    name: str
    path: Optional[str] = None
    version: Optional[str] = None
    available: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def summary(self) -> str:
        """Return human-readable summary."""
        status = "+" if self.available else "-"
        version = f" (v{self.version})" if self.version else ""
        return f"{status} {self.name}: {self.path or 'not found'}{version}"


_cache: dict[str, CLIInfo] = {}


# =============================================================================
# Path Search Functions
# =============================================================================


def _get_search_paths(cli_name: str) -> list[str]:
    """Common install locations, searched after PATH.

    User-local installs first, then system locations, Homebrew and Snap.
    """
    home = Path.home()
    return [
        str(home / ".local" / "bin" / cli_name),
        str(home / "bin" / cli_name),
        f"/usr/local/bin/{cli_name}",
        f"/usr/bin/{cli_name}",
        f"/opt/homebrew/bin/{cli_name}",
        f"/snap/bin/{cli_name}",
    ]


def _find_cli_path(cli_name: str) -> Optional[str]:
    """Find CLI executable path.

    Args:
        cli_name: Name of the CLI executable

    Returns:
        Full path to executable or None if not found
    """
    path = shutil.which(cli_name)
    if path:
        return path

    for potential_path in _get_search_paths(cli_name):
        if os.path.isfile(potential_path) and os.access(potential_path, os.X_OK):
            return potential_path

    return None


def _get_cli_version(cli_path: str) -> Optional[str]:
    """Get version string from ``<cli> --version``.

    Args:
        cli_path: Path to CLI executable

    Returns:
        Version string or None
    """
    try:
        result = subprocess.run(
            [cli_path, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    version_line = result.stdout.strip().split("\n")[0]
    match = re.search(r"\d+\.\d+\.\d+(?:[-.\w]*)?", version_line)
    if match:
        return match.group()
    return version_line[:50] or None


# =============================================================================
# Discovery Functions
# =============================================================================


def discover_cli(cli_name: str = "op", refresh: bool = False) -> CLIInfo:
    """Discover a CLI, using the process cache unless refresh is set.

    Args:
        cli_name: Executable name
        refresh: Ignore any cached result

    Returns:
        CLIInfo with discovery results
    """
    if not refresh and cli_name in _cache:
        return _cache[cli_name]

    path = _find_cli_path(cli_name)
    if path:
        info = CLIInfo(
            name=cli_name,
            path=path,
            version=_get_cli_version(path),
            available=True,
        )
    else:
        info = CLIInfo(
            name=cli_name,
            available=False,
            error=f"{cli_name} CLI not found in PATH or common locations",
        )
    _cache[cli_name] = info
    return info


def get_cli_path(cli_name: str = "op") -> Optional[str]:
    """Get full path to CLI binary, or None if not installed."""
    return discover_cli(cli_name).path


def clear_cache() -> None:
    """Forget all cached discovery results."""
    _cache.clear()


def is_supported_version(version: Optional[str], minimum: str) -> bool:
    """Check a CLI version against a minimum.

    Unknown or unparsable versions are treated as supported; only a
    version that is known to be older fails the check.
    """
    if not version:
        return True
    try:
        return Version(version) >= Version(minimum)
    except InvalidVersion:
        return True


__all__ = [
    "CLIInfo",
    "clear_cache",
    "discover_cli",
    "get_cli_path",
    "is_supported_version",
]
