"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object on disk maps each key to its string
value, the same shape browser local storage has. Every write rewrites the
whole file through a temporary file, so a crash mid-write leaves the
previous contents in place.

TRADEOFFS:
- The whole file is rewritten on every write (fine at personal scale)
- No locking; one session owns the file at a time
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from spending_tracker.services.storage.interface import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)


class JsonFileKeyValueStorage(KeyValueStorage):
    """
    File-backed key-value storage.

    A missing file reads as empty storage. Writing over an unreadable file
    first moves it aside to <name>.corrupt.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()
        self._logger = structlog.get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        """Read and decode the whole file."""
        if not self._path.exists():
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}")

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageReadError(f"Corrupt storage file {self._path}: {e}")

        if not isinstance(data, dict):
            raise StorageReadError(
                f"Storage file {self._path} must contain a JSON object, "
                f"got {type(data).__name__}"
            )
        return data

    def read(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageReadError(
                f"Value under '{key}' is {type(value).__name__}, expected a string"
            )
        return value

    def _set_aside_unreadable(self) -> Optional[Path]:
        """
        Move an unreadable storage file to <name>.corrupt so replacing it
        keeps the old bytes around for manual recovery.
        """
        if not self._path.is_file():
            return None

        backup = self._path.with_name(f"{self._path.name}.corrupt")
        try:
            os.replace(self._path, backup)
        except OSError as e:
            raise StorageWriteError(
                f"Failed to move unreadable {self._path} aside: {e}"
            )
        return backup

    def write(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except StorageReadError as e:
            # The store has already fallen back to empty collections for
            # unreadable data, so the next write starts a fresh file.
            data = {}
            backup = self._set_aside_unreadable()
            self._logger.warning(
                "storage_file_replaced",
                path=str(self._path),
                backup=str(backup) if backup else None,
                error=str(e),
            )

        data[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write '{key}' to {self._path}: {e}")
