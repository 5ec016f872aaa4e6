"""Host integration: protocols and bundled implementations."""

from op_securenotes.host.memory import Document, InMemoryDocumentHost
from op_securenotes.host.notify import NOTIFY_LOGGER, LoggingNotifier
from op_securenotes.host.protocols import (
    DocumentHost,
    DocumentId,
    Notifier,
    Prompter,
    TriggerEvent,
    TriggerHandler,
    WriteMode,
)

__all__ = [
    # Protocols
    "DocumentHost",
    "DocumentId",
    "Notifier",
    "Prompter",
    "TriggerEvent",
    "TriggerHandler",
    "WriteMode",
    # Implementations
    "Document",
    "InMemoryDocumentHost",
    "LoggingNotifier",
    "NOTIFY_LOGGER",
]
