"""Sync Engine for Secure Note documents.

Binds host documents to remote items and keeps them in step:

    - open_document(): allocate a document for an item and wire its triggers
    - save(): push document lines into the item's note body
    - reload(): pull the note body into the document, resolving a conflict
      with unsaved local edits through a three-way prompt
    - load() / create_note(): fetch or create an item, then open it

State lives on each EditingSession (see session.state). A session accepts
one sync operation at a time; a second save or reload while one is running
is rejected with a warning.

Every public operation reports at most one message through the notifier
and returns a SyncOutcome. Errors never escape as exceptions, except
unexpected ones, which the RequestTracker logs.
"""

from __future__ import annotations

import logging
from typing import Optional

from op_securenotes.config import SecureNotesConfig
from op_securenotes.gateway import OpGateway, RequestTracker
from op_securenotes.host.protocols import (
    DocumentHost,
    DocumentId,
    Notifier,
    Prompter,
    TriggerEvent,
    WriteMode,
)
from op_securenotes.session import (
    CHOICE_EVENTS,
    ConflictChoice,
    EditingSession,
    SessionRegistry,
    SyncEvent,
    SyncOutcome,
    transition,
)
from op_securenotes.sync.content import to_field_value, to_lines
from op_securenotes.types import (
    NOTE_FIELD_ID,
    DocumentHostError,
    GatewayError,
    Item,
    NoActiveSessionError,
    SecureNotesError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class SyncEngine:
    """Save/reload protocols and document wiring.

    Example:
        >>> engine = SyncEngine(registry, gateway, host, prompter, notifier)
        >>> document_id = await engine.load(item_id, vault_id)
        >>> host.edit(document_id, ["new text"])
        >>> await engine.save(document_id)
        <SyncOutcome.SAVED: 'saved'>
    """

    CONFLICT_PROMPT = "Unsaved changes in your Secure Note:"

    def __init__(
        self,
        registry: SessionRegistry,
        gateway: OpGateway,
        host: DocumentHost,
        prompter: Prompter,
        notifier: Notifier,
        config: Optional[SecureNotesConfig] = None,
        requests: Optional[RequestTracker] = None,
    ):
        """Initialize engine.

        Args:
            registry: Session registry shared with the caller
            gateway: op CLI gateway
            host: Document host
            prompter: Interactive prompts (conflict choice)
            notifier: User notifications
            config: Configuration (defaults to the gateway's)
            requests: Tracker for trigger-submitted operations
        """
        self._registry = registry
        self._gateway = gateway
        self._host = host
        self._prompter = prompter
        self._notifier = notifier
        self._config = config or gateway.config
        self.requests = requests or RequestTracker()

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    # ========================================================================
    # Document lifecycle
    # ========================================================================

    def open_document(self, item: Item) -> Optional[DocumentId]:
        """Allocate a document for an item and start an editing session.

        Returns:
            The new document id, or None if the host could not create one
        """
        try:
            document_id = self._host.allocate(
                content_type=self._config.filetype,
                write_mode=WriteMode.INTERCEPTED,
                title=self._config.format_title(item.title),
                initial_lines=to_lines(item),
            )
        except DocumentHostError as e:
            self._report(DocumentHostError(f"Failed to create document for Secure Notes: {e}"))
            return None

        try:
            self._registry.create(document_id, item)
        except SecureNotesError as e:
            self._report(e)
            return None

        handlers = {
            TriggerEvent.CONTENT_CHANGED: self._on_content_changed,
            TriggerEvent.WRITE_REQUESTED: self._on_write_requested,
            TriggerEvent.READ_REQUESTED: self._on_read_requested,
            TriggerEvent.CLOSED: self._on_closed,
        }
        for event, handler in handlers.items():
            self._host.register_trigger(document_id, event, handler)

        self._host.set_modified(document_id, False)
        logger.info(f"Opened Secure Note {item.id} in document {document_id}")
        return document_id

    def detach(self, document_id: DocumentId) -> bool:
        """End the editing session of a closed document."""
        return self._registry.destroy(document_id)

    def _on_content_changed(self, document_id: DocumentId) -> None:
        self._host.set_modified(document_id, True)

    def _on_write_requested(self, document_id: DocumentId) -> None:
        self.requests.submit(self.save(document_id))

    def _on_read_requested(self, document_id: DocumentId) -> None:
        self.requests.submit(self.reload(document_id))

    def _on_closed(self, document_id: DocumentId) -> None:
        self.detach(document_id)

    # ========================================================================
    # Save protocol
    # ========================================================================

    async def save(self, document_id: DocumentId) -> SyncOutcome:
        """Push the document's lines into the item's note body.

        The modified flag is cleared only when op reports success; on
        failure the local edits stay in place and marked modified.
        """
        session = self._lookup(document_id)
        if session is None:
            return SyncOutcome.FAILED
        if not self._begin(session, SyncEvent.SAVE_REQUESTED):
            return SyncOutcome.BUSY

        try:
            return await self._push(session)
        except SecureNotesError as e:
            self._report(e)
            return SyncOutcome.FAILED
        finally:
            self._settle(session)

    async def _push(self, session: EditingSession) -> SyncOutcome:
        if not self._is_current(session):
            return self._disregard(session, "save")

        lines = self._host.get_lines(session.document_id)
        result = await self._gateway.edit_item(
            session.item_id,
            session.vault_id,
            {NOTE_FIELD_ID: to_field_value(lines)},
        )

        if not self._is_current(session):
            return self._disregard(session, "save")
        if not result.ok:
            raise GatewayError(result.first_error, result.error_lines)
        if result.is_empty:
            logger.debug(f"Save of document {session.document_id} returned no output")
            return SyncOutcome.NOOP

        self._host.set_modified(session.document_id, False)
        self._notifier.success("1Password Secure Note updated.")
        logger.info(f"Saved document {session.document_id} to item {session.item_id}")
        return SyncOutcome.SAVED

    # ========================================================================
    # Reload protocol
    # ========================================================================

    async def reload(self, document_id: DocumentId) -> SyncOutcome:
        """Replace the document's lines with the item's current note body.

        With unsaved local edits the user chooses first: Overwrite runs the
        save protocol instead, Discard reloads, Cancel (or dismissing the
        prompt) leaves everything as it is.
        """
        session = self._lookup(document_id)
        if session is None:
            return SyncOutcome.FAILED
        try:
            dirty = self._host.is_modified(document_id)
        except DocumentHostError as e:
            self._report(e)
            return SyncOutcome.FAILED

        event = SyncEvent.RELOAD_DIRTY if dirty else SyncEvent.RELOAD_CLEAN
        if not self._begin(session, event):
            return SyncOutcome.BUSY

        try:
            if dirty:
                choice = await self._ask_conflict_choice()
                session.state = transition(session.state, CHOICE_EVENTS[choice])
                if choice is ConflictChoice.CANCEL:
                    logger.debug(f"Reload of document {document_id} cancelled")
                    return SyncOutcome.CANCELLED
                # the document may have been closed while the prompt was open
                if not self._is_current(session):
                    raise NoActiveSessionError(document_id)
                if choice is ConflictChoice.OVERWRITE:
                    return await self._push(session)
            return await self._fetch(session)
        except SecureNotesError as e:
            self._report(e)
            return SyncOutcome.FAILED
        finally:
            self._settle(session)

    async def _ask_conflict_choice(self) -> ConflictChoice:
        choices = list(ConflictChoice)
        index = await self._prompter.confirm(self.CONFLICT_PROMPT, [c.value for c in choices])
        if index is None or not 0 <= index < len(choices):
            return ConflictChoice.CANCEL
        return choices[index]

    async def _fetch(self, session: EditingSession) -> SyncOutcome:
        result = await self._gateway.get_item(session.item_id, session.vault_id)

        if not self._is_current(session):
            return self._disregard(session, "reload")
        if not result.ok:
            raise GatewayError(result.first_error, result.error_lines)
        if result.is_empty:
            logger.debug(f"Reload of document {session.document_id} returned no output")
            return SyncOutcome.NOOP

        item = Item.from_result(result)
        document_id = session.document_id
        self._host.replace_lines(document_id, to_lines(item))
        self._host.set_modified(document_id, False)
        # replacing every line drops highlighting in some hosts
        self._host.set_content_type(document_id, self._config.filetype)
        self._notifier.success("1Password Secure Note reloaded.")
        logger.info(f"Reloaded document {document_id} from item {session.item_id}")
        return SyncOutcome.RELOADED

    # ========================================================================
    # Load / create protocols
    # ========================================================================

    async def load(self, item_id: str, vault_id: Optional[str] = None) -> Optional[DocumentId]:
        """Fetch an item and open it in a new document."""
        try:
            result = await self._gateway.get_item(item_id, vault_id)
            if not result.ok:
                raise GatewayError(result.first_error, result.error_lines)
            if result.is_empty:
                return None
            item = Item.from_result(result)
        except SecureNotesError as e:
            self._report(e)
            return None
        return self.open_document(item)

    async def create_note(self, title: str, vault_id: str) -> Optional[DocumentId]:
        """Create an empty Secure Note and open it in a new document.

        Nothing is created remotely when the title is empty.
        """
        try:
            if not title or not title.strip():
                raise ValidationError("Secure Note title is required.")
            result = await self._gateway.create_item(title, vault_id, self._config.note_category)
            if not result.ok:
                raise GatewayError(result.first_error, result.error_lines)
            if result.is_empty:
                return None
            item = Item.from_result(result, "item create")
        except SecureNotesError as e:
            self._report(e)
            return None

        document_id = self.open_document(item)
        if document_id is not None:
            self._notifier.success(f"Created Secure Note '{title}'")
        return document_id

    # ========================================================================
    # Helpers
    # ========================================================================

    def _lookup(self, document_id: DocumentId) -> Optional[EditingSession]:
        session = self._registry.get(document_id)
        if session is None:
            self._report(NoActiveSessionError(document_id))
        return session

    def _begin(self, session: EditingSession, event: SyncEvent) -> bool:
        if not session.is_idle:
            logger.warning(
                f"Rejected {event.value} for document {session.document_id}: "
                f"session is {session.state.value}"
            )
            self._notifier.warning(
                f"Secure Note '{session.title}' is already syncing; try again when it finishes."
            )
            return False
        session.state = transition(session.state, event)
        return True

    def _settle(self, session: EditingSession) -> None:
        session.state = transition(session.state, SyncEvent.FINISHED)

    def _is_current(self, session: EditingSession) -> bool:
        return self._registry.get(session.document_id) is session

    def _disregard(self, session: EditingSession, operation: str) -> SyncOutcome:
        logger.warning(
            f"Document {session.document_id} closed during {operation}; result disregarded"
        )
        return SyncOutcome.DISREGARDED

    def _report(self, error: SecureNotesError) -> None:
        logger.warning(f"{type(error).__name__}: {error}")
        self._notifier.error(str(error))


__all__ = ["SyncEngine"]
