"""
Abstract Storage Interface

DESIGN DECISION: The core only needs a synchronous string key-value store
(the same contract as browser local storage). Keeping the port this small
lets us:
1. Use an in-memory map for tests and throwaway sessions
2. Use a JSON file on disk for a persistent local session
3. Keep the record store decoupled from where bytes end up

Serialization (JSON) is the record store's job, not the port's.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Synchronous get/set interface over string values.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: String to store

        Raises:
            StorageWriteError: If the value could not be stored
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data could not be read or decoded."""
    pass


class StorageWriteError(StorageError):
    """A value could not be written to storage."""
    pass
