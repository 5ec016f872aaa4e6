"""Tests for the SecureNotes client."""

from unittest.mock import patch

import pytest

from conftest import error_result, item_json, ok_result
from op_securenotes import SecureNotes
from op_securenotes.config import SecureNotesConfig
from op_securenotes.host import LoggingNotifier

AMBIGUOUS = [
    '[ERROR] 2024/01/01 00:00:00 More than one item matches "GitHub". '
    "Try again and specify the item by its ID:",
    '\t* for the item "GitHub" in vault Private: aaaa',
    '\t* for the item "GitHub" in vault Work: bbbb',
]


@pytest.fixture
def notes(host, prompter, notifier, config, gateway):
    return SecureNotes(host, prompter, notifier=notifier, config=config, gateway=gateway)


class TestSecureNotesInit:
    """Test client construction."""

    def test_uses_gateway_config(self, host, prompter, gateway):
        client = SecureNotes(host, prompter, gateway=gateway)
        assert client.config is gateway.config
        assert isinstance(client._notifier, LoggingNotifier)

    def test_builds_gateway_from_config(self, host, prompter):
        config = SecureNotesConfig(cli_path="/opt/op")
        client = SecureNotes(host, prompter, config=config)
        assert client.gateway.cli_executable == "/opt/op"

    def test_loads_config_when_missing(self, host, prompter):
        config = SecureNotesConfig(cli_path="/opt/op", account="home")
        with patch("op_securenotes.client.load_config", return_value=config):
            client = SecureNotes(host, prompter)
        assert client.config.account == "home"

    @pytest.mark.asyncio
    async def test_context_manager_closes_registry(self, notes, host, gateway):
        async with notes:
            document_id = await notes.load_secure_note("item-1", "vault-1")
            host.write(document_id)

        gateway.edit_item.assert_awaited_once()
        assert notes.registry.closed
        assert len(notes.registry) == 0


class TestOpenSecureNote:
    """Test picking a note from the list."""

    @pytest.mark.asyncio
    async def test_pick_and_open(self, notes, host, gateway, prompter):
        gateway.list_items_sync.return_value = ok_result(
            [
                {"id": "item-1", "title": "Recovery codes", "vault": {"id": "vault-1"}},
                {"id": "item-2", "title": "Wifi", "vault": {"id": "vault-2"}},
            ]
        )
        gateway.get_item.return_value = ok_result(item_json(item_id="item-2", title="Wifi"))
        prompter.queue(1)

        document_id = await notes.open_secure_note()

        gateway.list_items_sync.assert_called_once_with(category="Secure Note")
        assert prompter.options == [["Recovery codes", "Wifi"]]
        gateway.get_item.assert_awaited_once_with("item-2", "vault-2")
        assert host.document(document_id).title == "1Password: Wifi"

    @pytest.mark.asyncio
    async def test_no_notes(self, notes, prompter, notifier):
        assert await notes.open_secure_note() is None
        assert prompter.calls == []
        assert notifier.messages == [("info", "No Secure Notes found.")]

    @pytest.mark.asyncio
    async def test_list_error(self, notes, gateway, notifier):
        gateway.list_items_sync.return_value = error_result("not signed in")

        assert await notes.open_secure_note() is None
        assert notifier.messages == [("error", "not signed in")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "entries, detail",
        [
            ([{"id": "item-1", "title": "A"}, "stray"], "expected an array of objects"),
            ([{"title": "no id"}], "missing key 'id'"),
        ],
    )
    async def test_malformed_list_entries(self, notes, gateway, prompter, notifier, entries, detail):
        gateway.list_items_sync.return_value = ok_result(entries)

        assert await notes.open_secure_note() is None
        assert prompter.calls == []
        assert notifier.messages == [
            ("error", f"Failed to parse output of 'op item list': {detail}")
        ]

    @pytest.mark.asyncio
    async def test_selection_dismissed(self, notes, gateway, prompter):
        gateway.list_items_sync.return_value = ok_result(
            [{"id": "item-1", "title": "Recovery codes", "vault": {"id": "vault-1"}}]
        )
        prompter.queue(None)

        assert await notes.open_secure_note() is None
        gateway.get_item.assert_not_awaited()


class TestNewSecureNote:
    """Test creating a note interactively."""

    @pytest.mark.asyncio
    async def test_create(self, notes, gateway, prompter, notifier):
        gateway.create_item.return_value = ok_result(
            item_json(item_id="new-1", title="Shopping", notes=None)
        )
        prompter.queue(0, "Shopping")

        document_id = await notes.new_secure_note()

        assert document_id is not None
        gateway.create_item.assert_awaited_once_with("Shopping", "vault-1", "Secure Note")
        assert notifier.messages == [("success", "Created Secure Note 'Shopping'")]

    @pytest.mark.asyncio
    async def test_title_dismissed(self, notes, gateway, prompter, notifier):
        prompter.queue(0, None)

        assert await notes.new_secure_note() is None
        gateway.create_item.assert_not_awaited()
        assert notifier.messages == []

    @pytest.mark.asyncio
    async def test_empty_title(self, notes, gateway, prompter, notifier):
        prompter.queue(0, "")

        assert await notes.new_secure_note() is None
        gateway.create_item.assert_not_awaited()
        assert notifier.messages == [("error", "Secure Note title is required.")]

    @pytest.mark.asyncio
    async def test_vault_dismissed(self, notes, gateway, prompter, notifier):
        prompter.queue(None)

        assert await notes.new_secure_note() is None
        assert notifier.messages == [("error", "Vault is required.")]


class TestOpenByName:
    """Test opening an item by name."""

    @pytest.mark.asyncio
    async def test_unique_match(self, notes, host, gateway):
        document_id = await notes.open_by_name("Recovery codes")

        gateway.get_item.assert_awaited_once_with("Recovery codes")
        assert host.get_lines(document_id) == ["line one", "line two"]

    @pytest.mark.asyncio
    async def test_ambiguous_match_asks(self, notes, gateway, prompter):
        gateway.get_item.side_effect = [
            error_result(*AMBIGUOUS),
            ok_result(item_json(item_id="bbbb", title="GitHub")),
        ]
        prompter.queue(1)

        document_id = await notes.open_by_name("GitHub")

        assert prompter.options == [
            ["'GitHub' in vault 'Private' (UUID: aaaa)", "'GitHub' in vault 'Work' (UUID: bbbb)"]
        ]
        assert gateway.get_item.await_args_list[1].args == ("bbbb", None)
        assert notes.registry.get(document_id).item_id == "bbbb"

    @pytest.mark.asyncio
    async def test_ambiguous_match_dismissed(self, notes, gateway, prompter, host):
        gateway.get_item.return_value = error_result(*AMBIGUOUS)
        prompter.queue(None)

        assert await notes.open_by_name("GitHub") is None
        assert gateway.get_item.await_count == 1
        assert host.documents == []

    @pytest.mark.asyncio
    async def test_other_error(self, notes, gateway, prompter, notifier):
        gateway.get_item.return_value = error_result('[ERROR] "nope" isn\'t an item.')

        assert await notes.open_by_name("nope") is None
        assert prompter.calls == []
        assert notifier.messages == [("error", '[ERROR] "nope" isn\'t an item.')]


class TestCreateItemFromText:
    """Test item creation through the field-selection wizard."""

    @pytest.mark.asyncio
    async def test_create(self, notes, gateway, prompter, notifier):
        gateway.create_item.return_value = ok_result(item_json(item_id="login-1", title="GitHub"))
        prompter.queue(0, "username", 0, "email", "GitHub", 0)

        item = await notes.create_item_from_text(["octocat", "me@example.com"])

        assert item.id == "login-1"
        gateway.create_item.assert_awaited_once_with(
            "GitHub",
            "vault-1",
            "Login",
            ["username[text]=octocat", "email[email]=me@example.com"],
        )
        assert notifier.messages == [("success", "Created 1Password item 'GitHub'")]

    @pytest.mark.asyncio
    async def test_cancelled(self, notes, gateway, prompter):
        prompter.queue(None)

        assert await notes.create_item_from_text(["octocat"]) is None
        gateway.create_item.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_gateway_error(self, notes, gateway, prompter, notifier):
        gateway.create_item.return_value = error_result("invalid field")
        prompter.queue(0, "username", "GitHub", 0)

        assert await notes.create_item_from_text(["octocat"]) is None
        assert notifier.messages == [("error", "invalid field")]
