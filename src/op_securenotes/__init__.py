"""Edit 1Password Secure Notes as host documents.

This package keeps host documents in step with the note body of 1Password
items through the ``op`` CLI: saving a document updates the item, reloading
it pulls the item back, with a prompt when local edits would be lost.

Package Dependencies:
    - op: Required. The 1Password CLI (v2), found on PATH or via config
    - pyyaml: Required. Reads the optional config file
      (~/.config/op-securenotes/config.yaml)

Basic Usage:
    >>> from op_securenotes import SecureNotes, InMemoryDocumentHost
    >>> host = InMemoryDocumentHost()
    >>> async with SecureNotes(host, prompter) as notes:
    ...     document_id = await notes.open_secure_note()
    ...     host.edit(document_id, ["new", "text"])
    ...     host.write(document_id)

Lower-level Usage:
    >>> from op_securenotes import OpGateway, SessionRegistry, SyncEngine
    >>> engine = SyncEngine(SessionRegistry(), OpGateway(), host, prompter, notifier)
    >>> document_id = await engine.load(item_id, vault_id)
    >>> await engine.save(document_id)
    <SyncOutcome.SAVED: 'saved'>

Creating Items From Text:
    >>> item = await notes.create_item_from_text(["me@example.com", "s3cr3t"])
"""

__version__ = "0.1.0"

from op_securenotes.client import SecureNotes
from op_securenotes.config import (
    DEFAULT_CONFIG_PATH,
    SecureNotesConfig,
    load_config,
)
from op_securenotes.core import (
    CLIInfo,
    MatchCandidate,
    discover_cli,
    is_supported_version,
)
from op_securenotes.gateway import BaseGateway, OpGateway, RequestTracker
from op_securenotes.host import (
    DocumentHost,
    DocumentId,
    InMemoryDocumentHost,
    LoggingNotifier,
    Notifier,
    Prompter,
    TriggerEvent,
    WriteMode,
)
from op_securenotes.session import (
    ConflictChoice,
    EditingSession,
    SessionRegistry,
    SyncOutcome,
    SyncState,
)
from op_securenotes.sync import SyncEngine, to_field_value, to_lines
from op_securenotes.types import (
    NOTE_FIELD_ID,
    CliNotFoundError,
    CommandResult,
    DocumentHostError,
    FieldType,
    GatewayError,
    InvalidConfigError,
    InvalidTransitionError,
    Item,
    ItemField,
    NoActiveSessionError,
    ParseError,
    RegistryClosedError,
    SecureNotesError,
    ValidationError,
    Vault,
)
from op_securenotes.wizard import FieldDraft, FieldSelectionWizard, ItemDraft

__all__ = [
    "__version__",
    # Client
    "SecureNotes",
    # Config
    "DEFAULT_CONFIG_PATH",
    "SecureNotesConfig",
    "load_config",
    # Discovery
    "CLIInfo",
    "MatchCandidate",
    "discover_cli",
    "is_supported_version",
    # Gateway
    "BaseGateway",
    "OpGateway",
    "RequestTracker",
    # Host
    "DocumentHost",
    "DocumentId",
    "InMemoryDocumentHost",
    "LoggingNotifier",
    "Notifier",
    "Prompter",
    "TriggerEvent",
    "WriteMode",
    # Sessions
    "ConflictChoice",
    "EditingSession",
    "SessionRegistry",
    "SyncOutcome",
    "SyncState",
    # Sync
    "SyncEngine",
    "to_field_value",
    "to_lines",
    # Types
    "NOTE_FIELD_ID",
    "CommandResult",
    "FieldType",
    "Item",
    "ItemField",
    "Vault",
    # Wizard
    "FieldDraft",
    "FieldSelectionWizard",
    "ItemDraft",
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
