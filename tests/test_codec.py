"""Tests for the persisted entry codec."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from daybook.codec import decode_entries, encode_entries
from daybook.core.entry import Entry
from daybook.errors import DeserializationError


@pytest.fixture
def entries():
    base = datetime(2025, 1, 15, 9, 30, 0, 123456, tzinfo=timezone.utc)
    first = Entry.new("c", "Third", "Latest thoughts", base + timedelta(seconds=2))
    second = Entry.new("b", "Second", "", base + timedelta(seconds=1, microseconds=7))
    third = Entry.new("a", "First", "Café ☕ notes", base).edited(
        "First (edited)", "Café ☕ notes", base + timedelta(days=1, microseconds=1)
    )
    return [first, second, third]


class TestEncode:
    def test_produces_json_array_of_tagged_objects(self, entries):
        data = json.loads(encode_entries(entries).decode("utf-8"))

        assert isinstance(data, list)
        assert [item["id"] for item in data] == ["c", "b", "a"]
        assert set(data[0]) == {"id", "title", "content", "createdAt", "updatedAt"}

    def test_empty_collection(self):
        assert json.loads(encode_entries([])) == []


class TestRoundTrip:
    def test_preserves_all_fields_and_order(self, entries):
        """Decoding the encoded blob gives back equal entries."""
        assert decode_entries(encode_entries(entries)) == entries

    def test_preserves_microseconds(self, entries):
        decoded = decode_entries(encode_entries(entries))
        assert decoded[1].created_at.microsecond == 123463
        assert decoded[2].updated_at.microsecond == 123457

    def test_empty_collection(self):
        assert decode_entries(encode_entries([])) == []


class TestDecodeErrors:
    @pytest.mark.parametrize(
        "blob",
        [
            b"not json",
            b"\xff\xfe\x00",
            b'{"id": "a"}',
            b'["a string"]',
            b'[{"id": "a"}]',
            b'[{"id": "a", "title": 1, "content": "", "createdAt": "2025-01-15T00:00:00", "updatedAt": "2025-01-15T00:00:00"}]',
            b'[{"id": "a", "title": "t", "content": "", "createdAt": "yesterday", "updatedAt": "2025-01-15T00:00:00"}]',
        ],
    )
    def test_malformed_blobs_raise(self, blob):
        with pytest.raises(DeserializationError):
            decode_entries(blob)

    def test_missing_field_names_the_field(self):
        with pytest.raises(DeserializationError, match="missing field 'title'"):
            decode_entries(b'[{"id": "a"}]')


class TestDuplicateIds:
    def test_repeated_id_raises(self, entries):
        """Ids must be unique within the persisted collection."""
        duplicated = entries + [Entry.new("c", "Copy", "", entries[0].created_at)]
        with pytest.raises(DeserializationError, match="repeats id 'c'"):
            decode_entries(encode_entries(duplicated))
