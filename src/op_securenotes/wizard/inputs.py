"""Single-step prompts shared by the creation flows."""

from __future__ import annotations

import logging

from op_securenotes.gateway import OpGateway
from op_securenotes.host.protocols import Prompter
from op_securenotes.types import GatewayError, ParseError, ValidationError, Vault

logger = logging.getLogger(__name__)

VAULT_PROMPT = "What vault do you want to store the 1Password item in?"


async def select_vault(
    gateway: OpGateway,
    prompter: Prompter,
    prompt: str = VAULT_PROMPT,
) -> Vault:
    """Let the user pick one of the account's vaults.

    Lists vaults with a blocking call; the list is short and the user is
    about to be prompted anyway.

    Raises:
        GatewayError: If op cannot list vaults
        ValidationError: If there is no vault or the prompt is dismissed
    """
    result = gateway.list_vaults_sync()
    if not result.ok:
        raise GatewayError(result.first_error, result.error_lines)

    data = result.json("vault list") if result.stdout_lines else []
    if not isinstance(data, list):
        raise ParseError("vault list", "expected a JSON array")
    vaults = [Vault.from_dict(v) for v in data]
    if not vaults:
        raise ValidationError("No vaults available.")

    selected = await prompter.select(vaults, prompt, labeler=lambda vault: vault.name)
    if selected is None:
        raise ValidationError("Vault is required.")
    logger.debug(f"Selected vault {selected.id}")
    return selected


__all__ = ["VAULT_PROMPT", "select_vault"]
