"""Record store package."""

from spending_tracker.store.record_store import (
    DEFAULT_CATEGORIES_KEY,
    DEFAULT_RECORDS_KEY,
    RecordStore,
)

__all__ = ["DEFAULT_CATEGORIES_KEY", "DEFAULT_RECORDS_KEY", "RecordStore"]
