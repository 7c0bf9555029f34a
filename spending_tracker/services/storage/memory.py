"""In-memory key-value storage, used by tests and ephemeral sessions."""

from typing import Optional

from spending_tracker.services.storage.interface import KeyValueStorage


class InMemoryKeyValueStorage(KeyValueStorage):
    """Dict-backed storage. Contents are lost when the object goes away."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def snapshot(self) -> dict[str, str]:
        """Copy of everything stored, for inspection."""
        return dict(self._data)
