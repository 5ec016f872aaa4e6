"""Secure Notes Types - Exception Classes.

This module defines all exceptions used by op-securenotes.
All exceptions inherit from SecureNotesError for easy catching.

Usage:
    try:
        await engine.create_note(title, vault_id)
    except SecureNotesError as e:
        print(f"Secure Notes error: {e}")
"""

from __future__ import annotations


class SecureNotesError(Exception):
    """Base exception for all op-securenotes errors.

    Every error the engine reports to the user is a SecureNotesError;
    its string form is the message shown.
    """
    pass


class GatewayError(SecureNotesError):
    """Raised when an ``op`` command returned error lines.

    The message is the first error line, verbatim.
    """

    def __init__(self, first_line: str, error_lines: list[str] | None = None):
        self.first_line = first_line
        self.error_lines = error_lines or [first_line]
        super().__init__(first_line)


class NoActiveSessionError(SecureNotesError):
    """Raised when an operation targets a document with no editing session."""

    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(f"No active editing session for document {document_id}")


class ValidationError(SecureNotesError):
    """Raised when user-supplied data fails a local precondition.

    Always raised before any remote call is attempted.
    """
    pass


class ParseError(SecureNotesError):
    """Raised when unable to parse ``op`` output.

    This usually indicates an unexpected output format from the CLI.
    """

    def __init__(self, command: str, message: str = ""):
        self.command = command
        msg = f"Failed to parse output of 'op {command}'"
        if message:
            msg += f": {message}"
        super().__init__(msg)


class CliNotFoundError(SecureNotesError):
    """Raised when the ``op`` CLI is not installed."""

    def __init__(self, cli_name: str, path: str = ""):
        self.cli_name = cli_name
        self.path = path
        msg = f"{cli_name} CLI not found"
        if path:
            msg += f" at {path}"
        msg += f". Please install the 1Password CLI ({cli_name}) first."
        super().__init__(msg)


class InvalidConfigError(SecureNotesError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str):
        super().__init__(f"Invalid configuration: {message}")


class DocumentHostError(SecureNotesError):
    """Raised by a document host that cannot serve a request."""
    pass


class InvalidTransitionError(SecureNotesError):
    """Raised when the sync state machine receives an event it cannot accept."""

    def __init__(self, state: str, event: str):
        self.state = state
        self.event = event
        super().__init__(f"Invalid sync transition: {event} while {state}")


class RegistryClosedError(SecureNotesError):
    """Raised when a session is created on a registry that was closed."""

    def __init__(self) -> None:
        super().__init__("Session registry is closed")


__all__ = [
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
