"""Interactive flows used when creating items."""

from op_securenotes.wizard.fields import FieldDraft, FieldSelectionWizard, ItemDraft
from op_securenotes.wizard.inputs import VAULT_PROMPT, select_vault

__all__ = [
    "FieldDraft",
    "FieldSelectionWizard",
    "ItemDraft",
    "VAULT_PROMPT",
    "select_vault",
]
