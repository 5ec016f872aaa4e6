"""op-securenotes Configuration.

This module defines the SecureNotesConfig class and the YAML loader.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from op_securenotes.types import InvalidConfigError, ItemCategory

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "op-securenotes" / "config.yaml"


@dataclass
class SecureNotesConfig:
    """Configuration for the gateway, engine and client.

    Attributes:
        cli_name: Name of the 1Password CLI executable
        cli_path: Explicit path to the CLI (None = discover)
        account: Account shorthand or sign-in address passed as --account
        timeout: Timeout in seconds for each op invocation
        min_cli_version: Oldest op version known to work
        buf_name_prefix: Prefix for document titles (None or "" = no prefix)
        filetype: Content type assigned to Secure Note documents
        note_category: Category used when creating Secure Notes
        item_category: Category used when creating items from text fields
        env: Extra environment variables for op (e.g. OP_SERVICE_ACCOUNT_TOKEN)

    Example:
        >>> config = SecureNotesConfig(account="my.1password.com", timeout=10.0)
        >>> config.format_title("  Recovery codes ")
        '1Password: Recovery codes'
    """
    cli_name: str = "op"
    cli_path: Optional[str] = None
    account: Optional[str] = None
    timeout: float = 30.0
    min_cli_version: str = "2.0.0"
    buf_name_prefix: Optional[str] = "1Password:"
    filetype: str = "markdown"
    note_category: str = ItemCategory.SECURE_NOTE.value
    item_category: str = ItemCategory.LOGIN.value
    env: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise InvalidConfigError(f"timeout must be positive, got {self.timeout}")
        if not self.cli_name:
            raise InvalidConfigError("cli_name must not be empty")

    def format_title(self, title: str) -> str:
        """Document title for an item, with the configured prefix."""
        if self.buf_name_prefix:
            return f"{self.buf_name_prefix.strip()} {title.strip()}"
        return title.strip()

    def with_overrides(self, **changes: Any) -> SecureNotesConfig:
        """Return a new config with the given fields replaced."""
        unknown = set(changes) - _field_names()
        if unknown:
            raise InvalidConfigError(f"unknown option(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SecureNotesConfig:
        """Create from dictionary.

        Raises:
            InvalidConfigError: On unknown keys or wrongly typed values
        """
        if not isinstance(data, dict):
            raise InvalidConfigError("configuration must be a mapping")
        unknown = set(data) - _field_names()
        if unknown:
            raise InvalidConfigError(f"unknown option(s): {', '.join(sorted(unknown))}")
        env = data.get("env") or {}
        if not isinstance(env, dict):
            raise InvalidConfigError("env must be a mapping")
        values = dict(data)
        values["env"] = {str(k): str(v) for k, v in env.items()}
        if "timeout" in values:
            try:
                values["timeout"] = float(values["timeout"])
            except (TypeError, ValueError) as e:
                raise InvalidConfigError(f"timeout must be a number: {e}") from e
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> SecureNotesConfig:
        """Load config from a YAML file."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InvalidConfigError(f"{path}: {e}") from e
        return cls.from_dict(data or {})


def _field_names() -> set[str]:
    return {f.name for f in fields(SecureNotesConfig)}


def load_config(path: Optional[Union[str, Path]] = None) -> SecureNotesConfig:
    """Load configuration, falling back to defaults.

    Args:
        path: Explicit YAML file. When None, DEFAULT_CONFIG_PATH is used
            if it exists.

    Returns:
        Loaded or default SecureNotesConfig
    """
    if path is not None:
        return SecureNotesConfig.from_yaml(path)
    if DEFAULT_CONFIG_PATH.is_file():
        logger.debug(f"Loading config from {DEFAULT_CONFIG_PATH}")
        return SecureNotesConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return SecureNotesConfig()


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SecureNotesConfig",
    "load_config",
]
