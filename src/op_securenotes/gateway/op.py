"""1Password CLI Gateway.

Wraps the ``op`` CLI (v2) item and vault commands.

CLI Usage:
    op item get <id> --vault <vault> --format json
    op item edit <id> --vault <vault> --format json notesPlain=<text>
    op item create --category "Secure Note" --title <t> --vault <v> --format json
    op item list --categories "Secure Note" --format json
    op vault list --format json

Every command exists as a coroutine. The list commands also have blocking
variants for short pick-from-a-list flows.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from op_securenotes.gateway.base import BaseGateway
from op_securenotes.types import CommandResult

logger = logging.getLogger(__name__)


class OpGateway(BaseGateway):
    """Gateway to the 1Password CLI.

    Example:
        >>> gateway = OpGateway(SecureNotesConfig(account="my.1password.com"))
        >>> result = await gateway.get_item("4xz2jvw3tq2lrkysyaw6nkm3ua", "Private")
        >>> if result.ok:
        ...     item = Item.from_result(result)
    """

    def _build_base_args(self) -> list[str]:
        args = [self.cli_executable]
        if self.config.account:
            args.extend(["--account", self.config.account])
        return args

    # ========================================================================
    # Argument builders
    # ========================================================================

    def _get_args(self, item: str, vault: Optional[str] = None) -> list[str]:
        args = self._build_base_args() + ["item", "get", item]
        if vault:
            args.extend(["--vault", vault])
        args.extend(["--format", "json"])
        return args

    def _edit_args(
        self,
        item_id: str,
        vault_id: str,
        assignments: Mapping[str, str],
    ) -> list[str]:
        args = self._build_base_args() + [
            "item",
            "edit",
            item_id,
            "--vault",
            vault_id,
            "--format",
            "json",
        ]
        args.extend(f"{name}={value}" for name, value in assignments.items())
        return args

    def _create_args(
        self,
        title: str,
        vault_id: str,
        category: str,
        assignments: Sequence[str] = (),
    ) -> list[str]:
        args = self._build_base_args() + [
            "item",
            "create",
            "--category",
            category,
            "--title",
            title,
            "--vault",
            vault_id,
            "--format",
            "json",
        ]
        args.extend(assignments)
        return args

    def _list_args(self, category: Optional[str] = None, vault: Optional[str] = None) -> list[str]:
        args = self._build_base_args() + ["item", "list"]
        if category:
            args.extend(["--categories", category])
        if vault:
            args.extend(["--vault", vault])
        args.extend(["--format", "json"])
        return args

    def _vault_list_args(self) -> list[str]:
        return self._build_base_args() + ["vault", "list", "--format", "json"]

    # ========================================================================
    # Asynchronous commands
    # ========================================================================

    async def get_item(self, item: str, vault: Optional[str] = None) -> CommandResult:
        """Fetch one item by id (or by name when vault is omitted)."""
        return await self.execute(self._get_args(item, vault))

    async def edit_item(
        self,
        item_id: str,
        vault_id: str,
        assignments: Mapping[str, str],
    ) -> CommandResult:
        """Assign field values on an existing item.

        Args:
            item_id: Item UUID
            vault_id: Vault UUID
            assignments: Field name to new value
        """
        return await self.execute(self._edit_args(item_id, vault_id, assignments))

    async def create_item(
        self,
        title: str,
        vault_id: str,
        category: str,
        assignments: Sequence[str] = (),
    ) -> CommandResult:
        """Create an item.

        Args:
            title: Item title
            vault_id: Target vault id or name
            category: op category, e.g. "Secure Note"
            assignments: Preformatted ``name[type]=value`` statements
        """
        return await self.execute(self._create_args(title, vault_id, category, assignments))

    async def list_items(
        self,
        category: Optional[str] = None,
        vault: Optional[str] = None,
    ) -> CommandResult:
        return await self.execute(self._list_args(category, vault))

    async def list_vaults(self) -> CommandResult:
        return await self.execute(self._vault_list_args())

    # ========================================================================
    # Blocking commands
    # ========================================================================

    def list_items_sync(
        self,
        category: Optional[str] = None,
        vault: Optional[str] = None,
    ) -> CommandResult:
        return self.execute_sync(self._list_args(category, vault))

    def list_vaults_sync(self) -> CommandResult:
        return self.execute_sync(self._vault_list_args())


__all__ = ["OpGateway"]
