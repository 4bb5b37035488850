"""Tests for browser/storage.py."""

import json

from browser.storage import JSONFileStorage, MemoryStorage


class TestMemoryStorage:
    def test_set_get_remove(self):
        """Items can be stored, read and removed."""
        storage = MemoryStorage()
        storage.set_item("token", "abc")
        assert storage.get_item("token") == "abc"
        storage.remove_item("token")
        assert storage.get_item("token") is None

    def test_remove_missing_is_noop(self):
        """Removing an unknown key does nothing."""
        storage = MemoryStorage({"a": "1"})
        storage.remove_item("b")
        assert len(storage) == 1


class TestJSONFileStorage:
    def test_persists_between_instances(self, tmp_path):
        """Values written by one instance are read by the next."""
        path = tmp_path / "session.json"
        JSONFileStorage(path).set_item("token", "abc")
        assert JSONFileStorage(path).get_item("token") == "abc"
        assert json.loads(path.read_text()) == {"token": "abc"}

    def test_remove_rewrites_file(self, tmp_path):
        """Removed keys disappear from disk."""
        path = tmp_path / "session.json"
        storage = JSONFileStorage(path)
        storage.set_item("token", "abc")
        storage.set_item("userType", "guest")
        storage.remove_item("token")
        assert json.loads(path.read_text()) == {"userType": "guest"}

    def test_missing_file_starts_empty(self, tmp_path):
        """A file that does not exist yet is an empty store."""
        storage = JSONFileStorage(tmp_path / "nested" / "session.json")
        assert storage.get_item("token") is None

    def test_corrupt_file_starts_empty(self, tmp_path):
        """Unreadable content is ignored."""
        path = tmp_path / "session.json"
        path.write_text("{not json")
        assert JSONFileStorage(path).get_item("token") is None

    def test_non_object_file_starts_empty(self, tmp_path):
        """A JSON value that is not an object is ignored."""
        path = tmp_path / "session.json"
        path.write_text("[1, 2]")
        assert JSONFileStorage(path).get_item("token") is None
