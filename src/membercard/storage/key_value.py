"""Key-value storage implementations."""

import json
import os
import sqlite3
import tempfile
import threading
from collections.abc import Iterator
from contextlib import closing
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol
from typing import runtime_checkable

from membercard.config.types import StorageConfig
from membercard.exceptions import ConfigError
from membercard.exceptions import StorageError
from membercard.utils.logging_utils import LoggerMixin


@runtime_checkable
class KeyValueStore(Protocol):
    """Durable string key-value storage."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Dict backed store for tests and ephemeral hosts."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, values: dict[str, str]) -> None:
        self._data.update(values)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def as_dict(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileKeyValueStore(LoggerMixin):
    """Store persisted as a single JSON object file."""
    
    def __init__(self, path: str | Path):
        """Initialize store.
        
        Args:
            path: Path to the JSON file, created on first write
        """
        super().__init__()
        self.path = Path(path)
        self._lock = threading.Lock()
    
    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.warning("Ignoring unreadable session file", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            self.warning("Ignoring session file without a JSON object", path=str(self.path))
            return {}
        return data
    
    def _write(self, data: dict[str, str]) -> None:
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix='.tmp')
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Failed to write session file {self.path}", {"error": str(e)}) from e
    
    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._read().get(key)
        return None if value is None else str(value)
    
    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)
    
    def set_many(self, values: dict[str, str]) -> None:
        """Write several keys in one atomic file replace."""
        with self._lock:
            data = self._read()
            data.update(values)
            self._write(data)


class SQLiteKeyValueStore(LoggerMixin):
    """Store persisted in a SQLite table."""
    
    def __init__(self, db_path: str | Path, table: str = 'member_session'):
        """Initialize store.
        
        Args:
            db_path: Path to SQLite database file
            table: Table name holding the key-value pairs
        """
        super().__init__()
        if not table.isidentifier():
            raise ConfigError(f"Invalid table name {table}")
        self.db_path = str(db_path)
        self.table = table
        self._init_db()
    
    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and is always closed."""
        with closing(sqlite3.connect(self.db_path)) as conn:
            with conn:
                yield conn
    
    def _init_db(self) -> None:
        """Initialize database table."""
        try:
            with self._connect() as conn:
                conn.execute(f"""
                    CREATE TABLE IF NOT EXISTS {self.table} (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """)
        except sqlite3.Error as e:
            self.error("Failed to initialize session database", exc_info=e, db_path=self.db_path)
            raise StorageError(f"Failed to initialize {self.db_path}", {"error": str(e)}) from e
    
    def get(self, key: str) -> str | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"SELECT value FROM {self.table} WHERE key = ?",
                    (key,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read {key}", {"error": str(e)}) from e
        return row[0] if row else None
    
    def set(self, key: str, value: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    f"INSERT OR REPLACE INTO {self.table} (key, value) VALUES (?, ?)",
                    (key, value)
                )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write {key}", {"error": str(e)}) from e
    
    def set_many(self, values: dict[str, str]) -> None:
        """Write several keys in one transaction."""
        try:
            with self._connect() as conn:
                conn.executemany(
                    f"INSERT OR REPLACE INTO {self.table} (key, value) VALUES (?, ?)",
                    list(values.items())
                )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write {sorted(values)}", {"error": str(e)}) from e


def create_store(config: StorageConfig) -> KeyValueStore:
    """Create the storage backend named in configuration.

    Raises:
        ConfigError: If the backend is unknown or lacks a path
    """
    if config.backend == 'memory':
        return InMemoryKeyValueStore()
    
    if config.backend not in ('json', 'sqlite'):
        raise ConfigError(f"Unknown storage backend {config.backend}")
    
    if not config.path:
        raise ConfigError(f"Storage backend {config.backend} requires a path")
    
    if config.backend == 'json':
        return JsonFileKeyValueStore(config.path)
    return SQLiteKeyValueStore(config.path)
