"""
Tests for the key-value persistence media.
"""

import json

from job_tracker.services.application_service import ApplicationStore
from job_tracker.storage import JsonFileStorage, MemoryStorage


class TestMemoryStorage:
    def test_get_set_remove(self):
        storage = MemoryStorage()
        assert storage.get_item("k") is None
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_initial_items_are_copied(self):
        items = {"k": "v"}
        storage = MemoryStorage(items)
        storage.set_item("k", "w")
        assert items == {"k": "v"}


class TestJsonFileStorage:
    def test_missing_file_reads_as_empty(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "storage.json")
        assert storage.get_item("jobApplications") is None

    def test_set_creates_directory_and_file(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        storage = JsonFileStorage(path)
        storage.set_item("jobApplications", "[]")
        assert json.loads(path.read_text()) == {"jobApplications": "[]"}

    def test_keys_are_independent(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "storage.json")
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        storage.remove_item("a")
        assert storage.get_item("a") is None
        assert storage.get_item("b") == "2"

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("not json at all")
        assert JsonFileStorage(path).get_item("jobApplications") is None

    def test_invalid_utf8_reads_as_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_bytes(b'{"jobApplications": "\xff\xfe"}')

        store = ApplicationStore(JsonFileStorage(path), key="jobApplications")

        assert store.load() == []

    def test_no_temp_files_left_behind(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "storage.json")
        storage.set_item("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]

    def test_store_survives_restart(self, tmp_path):
        path = tmp_path / "storage.json"
        store = ApplicationStore(JsonFileStorage(path), key="jobApplications")
        store.load()
        created = store.create({
            "companyName": "Acme", "jobTitle": "Dev",
            "applicationDate": "2024-01-01", "status": "Interview",
        })

        restarted = ApplicationStore(JsonFileStorage(path), key="jobApplications")
        assert restarted.load() == [created]
