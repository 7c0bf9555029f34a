"""
Storage Services Package

Provides the key-value storage port and its implementations.
The backend is chosen from configuration by create_storage().
"""

from typing import Optional

from spending_tracker.config import StorageSettings
from spending_tracker.services.storage.interface import (
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from spending_tracker.services.storage.json_file import JsonFileKeyValueStorage
from spending_tracker.services.storage.memory import InMemoryKeyValueStorage


def create_storage(settings: Optional[StorageSettings] = None) -> KeyValueStorage:
    """Build the storage backend named in the storage settings."""
    settings = settings or StorageSettings()
    if settings.backend == "memory":
        return InMemoryKeyValueStorage()
    return JsonFileKeyValueStorage(settings.resolved_path)


__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "create_storage",
]
