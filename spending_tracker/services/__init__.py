"""Services package."""

from spending_tracker.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
    create_storage,
)

__all__ = [
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "KeyValueStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "create_storage",
]
