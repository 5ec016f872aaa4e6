"""High-level Secure Notes client.

Wires the gateway, session registry, sync engine and wizard to a host and
exposes the user-facing commands.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from op_securenotes.config import SecureNotesConfig, load_config
from op_securenotes.core.utils import is_ambiguous_match, parse_match_candidates
from op_securenotes.gateway import OpGateway
from op_securenotes.host import DocumentHost, DocumentId, LoggingNotifier, Notifier, Prompter
from op_securenotes.session import SessionRegistry
from op_securenotes.sync import SyncEngine
from op_securenotes.types import GatewayError, Item, ParseError, SecureNotesError
from op_securenotes.wizard import FieldSelectionWizard, select_vault

logger = logging.getLogger(__name__)


class SecureNotes:
    """Secure Notes client with async context manager support.

    Basic Usage:
        >>> host = InMemoryDocumentHost()
        >>> async with SecureNotes(host, prompter) as notes:
        ...     document_id = await notes.open_secure_note()
        ...     host.edit(document_id, ["new", "text"])
        ...     host.write(document_id)   # saved through the engine

    Leaving the context waits for pending saves/reloads and closes the
    session registry.
    """

    NOTES_PROMPT = "1Password Secure Notes"
    TITLE_PROMPT = "Secure Note Title"
    MATCH_PROMPT = "More than one item matches, select one"

    def __init__(
        self,
        host: DocumentHost,
        prompter: Prompter,
        notifier: Optional[Notifier] = None,
        config: Optional[SecureNotesConfig] = None,
        gateway: Optional[OpGateway] = None,
        verify_cli: bool = True,
    ):
        """Initialize client.

        Args:
            host: Document host
            prompter: Interactive prompts
            notifier: User notifications (defaults to LoggingNotifier)
            config: Configuration (defaults to the gateway's, else load_config())
            gateway: op gateway (built from config if None)
            verify_cli: Whether a newly built gateway verifies the op CLI

        Raises:
            CliNotFoundError: If verify_cli=True and op is not installed
        """
        if config is None:
            config = gateway.config if gateway is not None else load_config()
        self._config = config
        self._gateway = gateway or OpGateway(config, verify_cli=verify_cli)
        self._prompter = prompter
        self._notifier = notifier or LoggingNotifier()
        self._registry = SessionRegistry()
        self._engine = SyncEngine(
            self._registry,
            self._gateway,
            host,
            prompter,
            self._notifier,
            config,
        )
        self._wizard = FieldSelectionWizard(self._gateway, prompter, self._notifier)

    async def __aenter__(self) -> "SecureNotes":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Wait for pending requests, then close the session registry."""
        await self._engine.requests.drain()
        self._registry.close()

    @property
    def config(self) -> SecureNotesConfig:
        return self._config

    @property
    def engine(self) -> SyncEngine:
        return self._engine

    @property
    def gateway(self) -> OpGateway:
        return self._gateway

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    # ========================================================================
    # Commands
    # ========================================================================

    async def open_secure_note(self) -> Optional[DocumentId]:
        """Pick a Secure Note from a list and open it."""
        result = self._gateway.list_items_sync(category=self._config.note_category)
        try:
            if not result.ok:
                raise GatewayError(result.first_error, result.error_lines)
            if result.is_empty:
                return None
            data = result.json("item list")
            if not isinstance(data, list):
                raise ParseError("item list", "expected a JSON array")
            if not all(isinstance(entry, dict) for entry in data):
                raise ParseError("item list", "expected an array of objects")
            notes = [Item.from_dict(entry) for entry in data]
        except SecureNotesError as e:
            self._report(e)
            return None
        except KeyError as e:
            self._report(ParseError("item list", f"missing key {e}"))
            return None

        if not notes:
            self._notifier.info("No Secure Notes found.")
            return None

        selected = await self._prompter.select(notes, self.NOTES_PROMPT, labeler=lambda n: n.title)
        if selected is None:
            return None
        return await self.load_secure_note(selected.id, selected.vault_id)

    async def load_secure_note(self, item_id: str, vault_id: str) -> Optional[DocumentId]:
        """Open a known Secure Note."""
        return await self._engine.load(item_id, vault_id)

    async def new_secure_note(self) -> Optional[DocumentId]:
        """Ask for a vault and a title, create the note and open it."""
        try:
            vault = await select_vault(self._gateway, self._prompter)
        except SecureNotesError as e:
            self._report(e)
            return None

        title = await self._prompter.input(self.TITLE_PROMPT)
        if title is None:
            logger.debug("Secure Note title prompt dismissed")
            return None
        return await self._engine.create_note(title, vault.id)

    async def open_by_name(self, name: str) -> Optional[DocumentId]:
        """Open an item by name, asking which one when several match."""
        result = await self._gateway.get_item(name)
        if result.ok:
            if result.is_empty:
                return None
            try:
                item = Item.from_result(result)
            except SecureNotesError as e:
                self._report(e)
                return None
            return self._engine.open_document(item)

        candidates = parse_match_candidates(result.error_lines)
        if not is_ambiguous_match(result.error_lines) or not candidates:
            self._report(GatewayError(result.first_error, result.error_lines))
            return None

        selected = await self._prompter.select(
            candidates,
            self.MATCH_PROMPT,
            labeler=lambda c: f"'{c.title}' in vault '{c.vault}' (UUID: {c.id})",
        )
        if selected is None:
            return None
        return await self._engine.load(selected.id)

    async def create_item_from_text(self, candidates: Iterable[str]) -> Optional[Item]:
        """Build an item from text snippets through the field-selection wizard.

        Returns:
            The created item, or None if cancelled or failed
        """
        draft = await self._wizard.run(candidates)
        if draft is None:
            return None

        result = await self._gateway.create_item(
            draft.title,
            draft.vault.id,
            self._config.item_category,
            draft.assignments(),
        )
        try:
            if not result.ok:
                raise GatewayError(result.first_error, result.error_lines)
            if result.is_empty:
                return None
            item = Item.from_result(result, "item create")
        except SecureNotesError as e:
            self._report(e)
            return None

        self._notifier.success(f"Created 1Password item '{draft.title}'")
        logger.info(f"Created item {item.id} with {len(draft.fields)} field(s)")
        return item

    def _report(self, error: SecureNotesError) -> None:
        logger.warning(f"{type(error).__name__}: {error}")
        self._notifier.error(str(error))


__all__ = ["SecureNotes"]
