"""Tests for the item <-> document line transform."""

from conftest import item_json
from op_securenotes.sync import note_body_field, to_field_value, to_lines
from op_securenotes.types import Item


class TestToLines:
    """Test note body to lines."""

    def test_splits_on_newlines(self):
        item = Item.from_dict(item_json(notes="a\nb\n\nc"))
        assert to_lines(item) == ["a", "b", "", "c"]

    def test_normalizes_crlf(self):
        item = Item.from_dict(item_json(notes="a\r\nb\r\nc"))
        assert to_lines(item) == ["a", "b", "c"]

    def test_trailing_crlf_gives_trailing_empty_line(self):
        item = Item.from_dict(item_json(notes="a\r\nb\r\n"))
        assert to_lines(item) == ["a", "b", ""]

    def test_missing_body_is_one_empty_line(self):
        item = Item.from_dict(item_json(notes=None))
        assert to_lines(item) == [""]

    def test_empty_body_is_one_empty_line(self):
        item = Item.from_dict(item_json(notes=""))
        assert to_lines(item) == [""]

    def test_other_fields_are_ignored(self):
        data = item_json(
            notes="body",
            extra_fields=[
                {"id": "password", "type": "CONCEALED", "purpose": "PASSWORD", "value": "x"},
                {"id": "notesPlain2", "type": "STRING", "purpose": "NOTES", "value": "nope"},
            ],
        )
        assert to_lines(Item.from_dict(data)) == ["body"]

    def test_body_needs_notes_purpose(self):
        data = item_json(notes=None, extra_fields=[{"id": "notesPlain", "value": "no purpose"}])
        item = Item.from_dict(data)
        assert note_body_field(item) is None
        assert to_lines(item) == [""]


class TestToFieldValue:
    """Test lines to note body."""

    def test_joins_with_newlines(self):
        assert to_field_value(["a", "", "b"]) == "a\n\nb"

    def test_single_empty_line(self):
        assert to_field_value([""]) == ""

    def test_lines_survive_a_round_trip(self):
        lines = ["# Title", "", "- item", "trailing "]
        item = Item.from_dict(item_json(notes=to_field_value(lines)))
        assert to_lines(item) == lines
