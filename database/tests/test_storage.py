"""
Integration tests for the storage adapters against real files in tmp_path.
"""

import sqlite3

import pytest

from database.exceptions import PersistenceWriteError
from database.storage import JsonFileStorage, MemoryStorage, SQLiteStorage


class TestMemoryStorage:
    def test_read_write(self):
        storage = MemoryStorage()

        assert storage.read("appointments") is None
        storage.write("appointments", "[]")
        assert storage.read("appointments") == "[]"
        assert "appointments" in storage

    def test_initial_blobs_are_copied(self):
        initial = {"k": "v"}
        storage = MemoryStorage(initial)
        storage.write("k", "changed")

        assert initial == {"k": "v"}


@pytest.mark.integration
class TestJsonFileStorage:
    def test_round_trip_creates_directory(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "data")

        storage.write("appointments", '[{"title": "x"}]')

        assert (tmp_path / "data" / "appointments.json").read_text(encoding="utf-8") == (
            '[{"title": "x"}]'
        )
        assert storage.read("appointments") == '[{"title": "x"}]'

    def test_missing_file_reads_none(self, tmp_path):
        assert JsonFileStorage(tmp_path).read("appointments") is None

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.write("appointments", "[1]")
        storage.write("appointments", "[2]")

        assert storage.read("appointments") == "[2]"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["appointments.json"]

    def test_key_is_sanitized(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.write("../escape", "[]")

        assert (tmp_path / ".._escape.json").exists()
        assert not (tmp_path.parent / "escape.json").exists()

    def test_unwritable_directory_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        storage = JsonFileStorage(blocker / "data")

        with pytest.raises(PersistenceWriteError) as exc:
            storage.write("appointments", "[]")
        assert exc.value.key == "appointments"

    def test_unencodable_blob_raises_and_keeps_previous(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.write("appointments", "[1]")

        with pytest.raises(PersistenceWriteError):
            storage.write("appointments", '["Dentist \ud800"]')

        assert storage.read("appointments") == "[1]"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["appointments.json"]

    def test_undecodable_file_reads_none(self, tmp_path):
        (tmp_path / "appointments.json").write_bytes(b"\xff\xfe\x00bad")

        assert JsonFileStorage(tmp_path).read("appointments") is None


@pytest.mark.integration
class TestSQLiteStorage:
    def test_round_trip_and_overwrite(self, tmp_path):
        storage = SQLiteStorage(tmp_path / "calendar.db")

        assert storage.read("appointments") is None
        storage.write("appointments", "[1]")
        storage.write("appointments", "[2]")

        assert storage.read("appointments") == "[2]"
        with sqlite3.connect(str(tmp_path / "calendar.db")) as conn:
            (count,) = conn.execute("SELECT COUNT(*) FROM kv_store").fetchone()
        assert count == 1

    def test_unencodable_blob_raises_and_keeps_previous(self, tmp_path):
        storage = SQLiteStorage(tmp_path / "calendar.db")
        storage.write("appointments", "[1]")

        with pytest.raises(PersistenceWriteError):
            storage.write("appointments", '["Dentist \ud800"]')

        assert storage.read("appointments") == "[1]"

    def test_creates_missing_folder(self, tmp_path):
        storage = SQLiteStorage(tmp_path / "nested" / "calendar.db")

        storage.write("appointments", "[]")

        assert (tmp_path / "nested" / "calendar.db").exists()

    def test_damaged_file_is_backed_up(self, tmp_path):
        db_path = tmp_path / "calendar.db"
        db_path.write_bytes(b"this is definitely not sqlite" * 100)
        storage = SQLiteStorage(db_path)

        assert storage.read("appointments") is None
        storage.write("appointments", "[]")

        assert storage.read("appointments") == "[]"
        backups = list((tmp_path / "backups").iterdir())
        assert len(backups) == 1
        assert backups[0].name.startswith("calendar_corrupted_")
