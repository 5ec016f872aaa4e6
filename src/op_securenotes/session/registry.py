"""Session Registry.

Maps open documents to the remote items they edit. One registry is
constructed at startup, handed to the engine, and closed at shutdown.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from op_securenotes.host.protocols import DocumentId
from op_securenotes.session.state import SyncState
from op_securenotes.types import Item, RegistryClosedError

logger = logging.getLogger(__name__)


@dataclass
class EditingSession:
    """Binding between one open document and one remote item.

    Attributes:
        document_id: Host document id (unique per open document)
        item_id: Remote item UUID
        vault_id: Vault UUID holding the item
        title: Item title at the time the document was opened
        state: Current sync state (see session.state)
        opened_at: Creation time (epoch seconds)
    """

    document_id: DocumentId
    item_id: str
    vault_id: str
    title: str = ""
    state: SyncState = SyncState.IDLE
    opened_at: float = field(default_factory=time.time)

    @property
    def is_idle(self) -> bool:
        return self.state is SyncState.IDLE


class SessionRegistry:
    """In-memory table of editing sessions keyed by document id.

    Nothing here blocks; the registry is only touched from the event loop
    thread.
    """

    def __init__(self) -> None:
        self._sessions: dict[DocumentId, EditingSession] = {}
        self._closed = False

    def create(self, document_id: DocumentId, item: Item) -> EditingSession:
        """Bind a document to an item, replacing any previous session for it.

        Raises:
            RegistryClosedError: If close() was called
        """
        if self._closed:
            raise RegistryClosedError()
        if document_id in self._sessions:
            logger.debug(f"Replacing session for document {document_id}")
        session = EditingSession(
            document_id=document_id,
            item_id=item.id,
            vault_id=item.vault_id,
            title=item.title,
        )
        self._sessions[document_id] = session
        logger.debug(f"Session created: document {document_id} -> item {item.id}")
        return session

    def get(self, document_id: DocumentId) -> Optional[EditingSession]:
        return self._sessions.get(document_id)

    def destroy(self, document_id: DocumentId) -> bool:
        """Drop the session for a document.

        Returns:
            True if a session existed
        """
        session = self._sessions.pop(document_id, None)
        if session is None:
            return False
        logger.debug(f"Session closed: document {document_id}")
        return True

    def sessions_for_item(self, item_id: str) -> list[EditingSession]:
        """All sessions editing the given item (one per open document)."""
        return [s for s in self._sessions.values() if s.item_id == item_id]

    def close(self) -> None:
        """Shut the registry down, destroying remaining sessions one by one."""
        for document_id in list(self._sessions):
            self.destroy(document_id)
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["EditingSession", "SessionRegistry"]
