"""
Record Store

Holds the authoritative in-memory list of spending records and custom
categories for one session, and keeps storage in sync.

DESIGN DECISIONS:
- Append-only: there is no edit or delete path.
- Write-through: every successful mutation writes the full collection
  under its key before the in-memory state is swapped. A failed write
  leaves memory untouched and propagates.
- Fail-soft loading: unreadable data, or data that is not a JSON array,
  becomes an empty collection (logged), never an exception. Inside an
  array each entry is decoded on its own; entries that are not valid
  records are skipped in memory but written back untouched on the next
  append, so one bad entry never costs the rest of the history.
"""

import json
from datetime import date, datetime
from typing import Any, Callable, Optional, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from spending_tracker.activity import ActivityLogger
from spending_tracker.models.category import (
    CategoryChoice,
    CategorySet,
    choice_from_selection,
)
from spending_tracker.models.record import SpendingRecord
from spending_tracker.services.storage import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)
from spending_tracker.validation import (
    RecordValidator,
    ValidationError,
    resolve_category_choice,
)


DEFAULT_RECORDS_KEY = "spendingData"
DEFAULT_CATEGORIES_KEY = "customCategories"

_CATEGORY_ADAPTER = TypeAdapter(str)


class RecordStore:
    """
    Append-only store of spending records plus the custom category list.

    Usage:
        store = RecordStore(storage, predefined_categories=["Food", "Fuel"])
        store.load()
        store.add_record("2024-03-15", "Food", 12.5)
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        predefined_categories: Optional[list[str]] = None,
        records_key: str = DEFAULT_RECORDS_KEY,
        categories_key: str = DEFAULT_CATEGORIES_KEY,
        others_label: str = "Others",
        validator: Optional[RecordValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._storage = storage
        self._records_key = records_key
        self._categories_key = categories_key
        self._others_label = others_label
        self._validator = validator or RecordValidator()
        self._activity = activity_logger or ActivityLogger()

        self._records: list[SpendingRecord] = []
        self._stored_entries: list[Any] = []
        self._categories = CategorySet(
            predefined=list(dict.fromkeys(predefined_categories or []))
        )

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @property
    def records(self) -> list[SpendingRecord]:
        """Copy of the records in insertion order."""
        return list(self._records)

    @property
    def custom_categories(self) -> list[str]:
        return list(self._categories.custom)

    @property
    def predefined_categories(self) -> list[str]:
        return list(self._categories.predefined)

    @property
    def categories(self) -> list[str]:
        """Predefined then custom categories, as offered in the category picker."""
        return self._categories.all

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _read_array(self, key: str) -> list:
        """Read one collection as a JSON array, falling back to empty."""
        try:
            raw = self._storage.read(key)
        except StorageReadError as e:
            self._activity.log_storage_recovered(key, str(e))
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            self._activity.log_storage_recovered(key, str(e))
            return []

        if not isinstance(data, list):
            self._activity.log_storage_recovered(
                key, f"Expected a JSON array, got {type(data).__name__}"
            )
            return []
        return data

    def _decode_entries(
        self,
        key: str,
        entries: list,
        decode: Callable[[Any], Any],
    ) -> list:
        """Decode each entry on its own, skipping the ones that do not fit."""
        decoded = []
        for index, entry in enumerate(entries):
            try:
                decoded.append(decode(entry))
            except PydanticValidationError as e:
                self._activity.log_storage_recovered(key, f"Entry {index} skipped: {e}")
        return decoded

    def load(self) -> tuple[list[SpendingRecord], list[str]]:
        """
        Restore records and custom categories from storage.

        Replaces the in-memory state, so loading twice yields the same
        result. Never raises for missing or malformed data.

        Returns:
            (records, custom_categories)
        """
        entries = self._read_array(self._records_key)
        records = self._decode_entries(self._records_key, entries, SpendingRecord.model_validate)
        custom = list(dict.fromkeys(self._decode_entries(
            self._categories_key,
            self._read_array(self._categories_key),
            _CATEGORY_ADAPTER.validate_python,
        )))

        self._records = records
        self._stored_entries = entries
        self._categories = CategorySet(
            predefined=self._categories.predefined,
            custom=custom,
        )

        self._activity.log_session_loaded(len(records), len(custom))
        return self.records, self.custom_categories

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _write(self, key: str, payload: Any) -> None:
        try:
            self._storage.write(key, json.dumps(payload, ensure_ascii=False))
        except StorageWriteError as e:
            self._activity.log_storage_write_failed(key, str(e))
            raise

    def _build_record(
        self,
        record_date: Union[str, date, datetime, None],
        category: Optional[str],
        amount: Any,
    ) -> SpendingRecord:
        try:
            return self._validator.build_record(record_date, category, amount)
        except ValidationError as e:
            self._activity.log_validation_failed(e.issues)
            raise

    def _append(self, record: SpendingRecord) -> list[SpendingRecord]:
        updated = [*self._records, record]
        entries = [*self._stored_entries, record.to_storage_dict()]
        self._write(self._records_key, entries)
        self._records = updated
        self._stored_entries = entries
        self._activity.log_record_added(record, total_records=len(updated))
        return self.records

    def add_record(
        self,
        record_date: Union[str, date, datetime, None],
        category: Optional[str],
        amount: Any,
    ) -> list[SpendingRecord]:
        """
        Validate and append a spending record, then persist all records.

        Args:
            record_date: ISO date string or date
            category: Effective (already resolved) category name
            amount: Positive number, or numeric string from a form

        Returns:
            The updated record list

        Raises:
            ValidationError: If any field is missing/invalid (nothing changes)
            StorageWriteError: If the records could not be persisted
        """
        record = self._build_record(record_date, category, amount)
        return self._append(record)

    def add_custom_category(self, name: str) -> bool:
        """
        Register a custom category unless it is already known.

        Returns:
            True if the category was added, False if it already existed

        Raises:
            StorageWriteError: If the category list could not be persisted
        """
        if self._categories.contains(name):
            return False

        updated = self._categories.with_custom(name)
        self._write(self._categories_key, updated.custom)
        self._categories = updated
        self._activity.log_custom_category_added(name)
        return True

    def resolve_category(self, selected: str, other_text: str = "") -> str:
        """
        Effective category for the form's selection.

        Raises:
            ValidationError: If "Others" was selected with blank text
        """
        choice = choice_from_selection(selected, other_text, self._others_label)
        try:
            return resolve_category_choice(choice)
        except ValidationError as e:
            self._activity.log_validation_failed(e.issues)
            raise

    def record_spending(
        self,
        record_date: Union[str, date, datetime, None],
        choice: CategoryChoice,
        amount: Any,
    ) -> SpendingRecord:
        """
        Resolve a category choice, register it if new, and append the record.

        The whole entry is validated before anything is written.

        Raises:
            ValidationError: If the category or any record field is invalid
            StorageWriteError: If persisting fails (a category registered
                for this entry is rolled back)
        """
        try:
            category = resolve_category_choice(choice)
        except ValidationError as e:
            self._activity.log_validation_failed(e.issues)
            raise

        record = self._build_record(record_date, category, amount)

        previous = self._categories
        registered = self.add_custom_category(category)
        try:
            self._append(record)
        except StorageWriteError:
            if registered:
                self._restore_categories(previous)
            raise
        return record

    def _restore_categories(self, previous: CategorySet) -> None:
        """Undo a category registration whose record could not be persisted."""
        self._categories = previous
        try:
            self._write(self._categories_key, previous.custom)
        except StorageWriteError:
            # Logged by _write; the records failure is what propagates.
            pass
