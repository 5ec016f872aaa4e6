"""In-memory document host.

A headless DocumentHost for scripts and tests. Besides the protocol it
offers the user-side actions an editor would produce: edit(), write(),
read() and close(), each firing the matching trigger.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional, Sequence

from op_securenotes.host.protocols import DocumentId, TriggerEvent, TriggerHandler, WriteMode
from op_securenotes.types import DocumentHostError

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """State of one in-memory document."""

    id: DocumentId
    title: str
    content_type: str
    write_mode: WriteMode
    lines: list[str] = field(default_factory=lambda: [""])
    modified: bool = False
    triggers: dict[TriggerEvent, list[TriggerHandler]] = field(
        default_factory=lambda: defaultdict(list)
    )


class InMemoryDocumentHost:
    """DocumentHost keeping documents in a dict.

    Document ids start at 1 and are never reused.

    Example:
        >>> host = InMemoryDocumentHost()
        >>> doc = host.allocate("markdown", WriteMode.INTERCEPTED, "Notes", ["hello"])
        >>> host.edit(doc, ["hello", "world"])   # fires CONTENT_CHANGED
        >>> host.write(doc)                      # fires WRITE_REQUESTED
    """

    def __init__(self, max_documents: Optional[int] = None) -> None:
        self._documents: dict[DocumentId, Document] = {}
        self._next_id = 1
        self._max_documents = max_documents

    def _get(self, document_id: DocumentId) -> Document:
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentHostError(f"Unknown document {document_id}") from None

    # ========================================================================
    # DocumentHost protocol
    # ========================================================================

    def allocate(
        self,
        content_type: str,
        write_mode: WriteMode,
        title: str,
        initial_lines: Sequence[str],
    ) -> DocumentId:
        if self._max_documents is not None and len(self._documents) >= self._max_documents:
            raise DocumentHostError(f"Cannot open more than {self._max_documents} documents")
        document_id = self._next_id
        self._next_id += 1
        self._documents[document_id] = Document(
            id=document_id,
            title=title,
            content_type=content_type,
            write_mode=write_mode,
            lines=list(initial_lines) or [""],
        )
        logger.debug(f"Allocated document {document_id} ({title!r})")
        return document_id

    def replace_lines(self, document_id: DocumentId, lines: Sequence[str]) -> None:
        self._get(document_id).lines = list(lines) or [""]

    def get_lines(self, document_id: DocumentId) -> list[str]:
        return list(self._get(document_id).lines)

    def set_modified(self, document_id: DocumentId, modified: bool) -> None:
        self._get(document_id).modified = modified

    def is_modified(self, document_id: DocumentId) -> bool:
        return self._get(document_id).modified

    def set_content_type(self, document_id: DocumentId, content_type: str) -> None:
        self._get(document_id).content_type = content_type

    def register_trigger(
        self,
        document_id: DocumentId,
        event: TriggerEvent,
        handler: TriggerHandler,
    ) -> None:
        self._get(document_id).triggers[event].append(handler)

    # ========================================================================
    # User-side actions
    # ========================================================================

    def document(self, document_id: DocumentId) -> Document:
        return self._get(document_id)

    @property
    def documents(self) -> list[DocumentId]:
        return list(self._documents)

    def fire(self, document_id: DocumentId, event: TriggerEvent) -> None:
        for handler in list(self._get(document_id).triggers[event]):
            handler(document_id)

    def edit(self, document_id: DocumentId, lines: Sequence[str]) -> None:
        """Replace content as a user edit would."""
        self.replace_lines(document_id, lines)
        self.fire(document_id, TriggerEvent.CONTENT_CHANGED)

    def write(self, document_id: DocumentId) -> None:
        doc = self._get(document_id)
        if doc.write_mode is WriteMode.INTERCEPTED:
            self.fire(document_id, TriggerEvent.WRITE_REQUESTED)
        else:
            doc.modified = False

    def read(self, document_id: DocumentId) -> None:
        self.fire(document_id, TriggerEvent.READ_REQUESTED)

    def close(self, document_id: DocumentId) -> None:
        self.fire(document_id, TriggerEvent.CLOSED)
        del self._documents[document_id]
        logger.debug(f"Closed document {document_id}")


__all__ = ["Document", "InMemoryDocumentHost"]
