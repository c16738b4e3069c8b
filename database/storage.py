#!/usr/bin/env python3
"""
Appointment Storage Adapters
Key-value persistence boundaries for the serialized appointment blob.

Each adapter stores one text blob per key and overwrites it wholesale on every
write, the way browser local storage does.
"""

import os
import shutil
import sqlite3
import tempfile
from datetime import datetime
from pathlib import Path

from utils.logger import Logger

from .exceptions import PersistenceWriteError


class MemoryStorage:
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._blobs: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob

    def __contains__(self, key: str) -> bool:
        return key in self._blobs


class JsonFileStorage:
    """Stores each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)
        self.logger = Logger()

    def _path_for(self, key: str) -> Path:
        safe_key = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return self.directory / f"{safe_key}.json"

    def read(self, key: str) -> str | None:
        """Read the blob for key; unreadable files are treated as absent"""
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Failed to read {path}: {e}")
            return None

    def write(self, key: str, blob: str) -> None:
        """Write the blob atomically so a failed write keeps the previous state"""
        path = self._path_for(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.directory), prefix=f".{path.stem}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, UnicodeError) as e:
            raise PersistenceWriteError(key, str(e)) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)


def _init_kv_schema(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """
    )
    conn.commit()


class SQLiteStorage:
    """Stores blobs in a single-table SQLite key-value database."""

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self.logger = Logger()

    def connect(self) -> sqlite3.Connection:
        """Connect to the DB, recovering from a missing folder or a damaged file."""
        try:
            return self._attempt_connection()
        except sqlite3.OperationalError as e:
            if "unable to open database file" in str(e):
                self.logger.info(f"Creating database folder {self.db_path.parent}")
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                return self._attempt_connection()
            raise
        except sqlite3.DatabaseError as e:
            if "file is not a database" in str(e) or "database disk image is malformed" in str(e):
                self.logger.warning(
                    f"Found a damaged database file at {self.db_path}; backing it up and starting fresh"
                )
                self._backup_corrupted_db()
                return self._attempt_connection()
            raise

    def _attempt_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute("SELECT 1")
            _init_kv_schema(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def _backup_corrupted_db(self) -> None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_dir = self.db_path.parent / "backups"
        backup_dir.mkdir(exist_ok=True)
        backup_path = backup_dir / f"{self.db_path.stem}_corrupted_{timestamp}.db"
        try:
            shutil.move(str(self.db_path), str(backup_path))
            self.logger.info(f"Backup saved to: {backup_path}")
        except OSError:
            # If we can't move it, just delete it
            self.db_path.unlink(missing_ok=True)
            self.logger.warning("Removed damaged database file.")

    def read(self, key: str) -> str | None:
        try:
            conn = self.connect()
        except (sqlite3.Error, OSError) as e:
            self.logger.error(f"Failed to open {self.db_path}: {e}")
            return None
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        except sqlite3.Error as e:
            self.logger.error(f"Failed to read {key!r}: {e}")
            return None
        finally:
            conn.close()

    def write(self, key: str, blob: str) -> None:
        try:
            conn = self.connect()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceWriteError(key, str(e)) from e
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                """,
                    (key, blob, datetime.now().isoformat(timespec="seconds")),
                )
        except (sqlite3.Error, UnicodeError) as e:
            raise PersistenceWriteError(key, str(e)) from e
        finally:
            conn.close()
