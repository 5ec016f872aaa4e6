"""Field-selection wizard.

Builds a generic item from free-form text candidates, one field per round:

    1. pick a value from the remaining candidates (dismiss to finish)
    2. name it; the value's shape suggests a default name
    3. repeat until the pool is empty, the picker is dismissed or a name
       is left empty

Then the collected fields are validated as a whole, and the item title and
vault are asked for.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from op_securenotes.core.utils import dedup_list, escape_assignment_name
from op_securenotes.gateway import OpGateway
from op_securenotes.host.protocols import Notifier, Prompter
from op_securenotes.types import (
    FieldType,
    SecureNotesError,
    ValidationError,
    Vault,
    detect_field_type,
    op_type_for,
    suggested_field_name,
)
from op_securenotes.wizard.inputs import select_vault

logger = logging.getLogger(__name__)


@dataclass
class FieldDraft:
    """A field collected by the wizard.

    A draft with an empty name stands for a candidate the user picked but
    did not name.
    """

    name: str = ""
    value: str = ""
    field_type: Optional[FieldType] = None

    @property
    def is_valid(self) -> bool:
        return bool(self.name) and bool(self.value)

    def to_assignment(self) -> str:
        """op assignment statement, e.g. ``email[email]=me@example.com``."""
        return f"{escape_assignment_name(self.name)}[{op_type_for(self.field_type)}]={self.value}"


@dataclass
class ItemDraft:
    """Everything needed to create an item."""

    title: str
    vault: Vault
    fields: list[FieldDraft] = field(default_factory=list)

    def assignments(self) -> list[str]:
        return [f.to_assignment() for f in self.fields]


class FieldSelectionWizard:
    """Interactive collection of named fields.

    Each round removes exactly one candidate from the pool, so N distinct
    candidates take at most N rounds.
    """

    SELECT_PROMPT = "Select field value, or close this dialog to finish selecting fields"
    NAME_PROMPT = "What do you want to call this field?"
    TITLE_PROMPT = "What do you want to call the 1Password item?"

    def __init__(self, gateway: OpGateway, prompter: Prompter, notifier: Notifier):
        self._gateway = gateway
        self._prompter = prompter
        self._notifier = notifier

    async def collect_fields(self, candidates: Iterable[str]) -> list[FieldDraft]:
        """Run the selection rounds.

        Args:
            candidates: Free-form strings; blanks and duplicates are dropped

        Returns:
            Collected drafts in selection order; may end with an unnamed
            placeholder
        """
        pool = [c for c in dedup_list(candidates) if c and c.strip()]
        fields: list[FieldDraft] = []

        while pool:
            selected = await self._prompter.select(list(pool), self.SELECT_PROMPT, labeler=str)
            if selected is None:
                break
            pool.remove(selected)

            field_type = detect_field_type(selected)
            name = await self._prompter.input(
                self.NAME_PROMPT, default=suggested_field_name(field_type)
            )
            if name is None:
                logger.debug("Field name prompt dismissed; finishing")
                break
            if not name.strip():
                fields.append(FieldDraft(value=selected, field_type=field_type))
                break
            fields.append(FieldDraft(name=name.strip(), value=selected, field_type=field_type))

        logger.debug(f"Collected {len(fields)} field(s)")
        return fields

    @staticmethod
    def validate(fields: list[FieldDraft]) -> None:
        """Reject the whole set if any field lacks a name or a value.

        Raises:
            ValidationError: One consolidated error for all invalid fields
        """
        if any(not f.is_valid for f in fields):
            raise ValidationError(
                "One or more fields is missing a name or value, cannot create item."
            )

    async def run(self, candidates: Iterable[str]) -> Optional[ItemDraft]:
        """Collect fields, title and vault.

        Returns:
            ItemDraft, or None when the user cancelled or input was invalid
            (already reported through the notifier)
        """
        fields = await self.collect_fields(candidates)
        if not fields:
            self._notifier.info("Item creation cancelled.")
            return None

        try:
            self.validate(fields)
            title = await self._prompter.input(self.TITLE_PROMPT)
            if not title or not title.strip():
                raise ValidationError("Item title is required.")
            vault = await select_vault(self._gateway, self._prompter)
        except SecureNotesError as e:
            logger.warning(f"{type(e).__name__}: {e}")
            self._notifier.error(str(e))
            return None

        return ItemDraft(title=title.strip(), vault=vault, fields=fields)


__all__ = ["FieldDraft", "FieldSelectionWizard", "ItemDraft"]
