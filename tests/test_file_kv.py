"""Tests for file-based key-value storage."""

import os
from unittest.mock import patch

import pytest

from daybook.adapters.file_kv import FileKeyValueStore, is_valid_key
from daybook.adapters.memory_kv import MemoryKeyValueStore


class TestFileKeyValueStore:
    def test_missing_key_returns_none(self, tmp_path):
        kv = FileKeyValueStore(tmp_path)
        assert kv.get("journal_entries") is None

    def test_set_then_get(self, tmp_path):
        kv = FileKeyValueStore(tmp_path)
        kv.set("journal_entries", b"[1, 2]")
        assert kv.get("journal_entries") == b"[1, 2]"
        assert (tmp_path / "journal_entries.json").read_bytes() == b"[1, 2]"

    def test_overwrite(self, tmp_path):
        kv = FileKeyValueStore(tmp_path)
        kv.set("k", b"old")
        kv.set("k", b"new")
        assert kv.get("k") == b"new"

    def test_creates_data_dir_on_write(self, tmp_path):
        data_dir = tmp_path / "nested" / "data"
        kv = FileKeyValueStore(data_dir)
        kv.set("k", b"v")
        assert data_dir.is_dir()

    def test_no_temp_files_left_behind(self, tmp_path):
        kv = FileKeyValueStore(tmp_path)
        kv.set("k", b"v")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    def test_failed_replace_keeps_old_value(self, tmp_path):
        """A write that fails midway leaves the previous bytes in place."""
        kv = FileKeyValueStore(tmp_path)
        kv.set("k", b"old")

        with patch("daybook.adapters.file_kv.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                kv.set("k", b"new")

        assert kv.get("k") == b"old"
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    @pytest.mark.parametrize("key", ["", "..", "a/b", "../escape"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        kv = FileKeyValueStore(tmp_path)
        with pytest.raises(ValueError):
            kv.get(key)

    def test_expands_user_path(self):
        kv = FileKeyValueStore("~/some/data")
        assert "~" not in str(kv.data_dir)


class TestMemoryKeyValueStore:
    def test_set_then_get(self):
        kv = MemoryKeyValueStore()
        assert kv.get("k") is None
        kv.set("k", b"v")
        assert kv.get("k") == b"v"

    def test_initial_values_are_copied(self):
        initial = {"k": b"v"}
        kv = MemoryKeyValueStore(initial)
        kv.set("k", b"other")
        assert initial == {"k": b"v"}


class TestIsValidKey:
    @pytest.mark.parametrize("key", ["journal_entries", "notes.v1", "a-b"])
    def test_accepts_file_safe_keys(self, key):
        assert is_valid_key(key)

    @pytest.mark.parametrize("key", ["", ".", "..", "my notes", "a/b"])
    def test_rejects_other_keys(self, key):
        assert not is_valid_key(key)
