"""Key-value storage backends for the saved member session."""

from .key_value import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
    create_store,
)

__all__ = [
    'InMemoryKeyValueStore',
    'JsonFileKeyValueStore',
    'KeyValueStore',
    'SQLiteKeyValueStore',
    'create_store',
]
