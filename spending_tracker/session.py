"""
Spending Session

This module ties the components together for one user session:
1. Journal flow (form input → category resolution → validate → append → persist)
2. Dashboard flow (records + granularity + reference date → summary)

DESIGN DECISION: The session is the single owner of mutable state.
The store and engine are handed in explicitly; there are no module-level
globals. After any mutation or view-state change the session notifies its
subscribers, and they are responsible for re-reading what they display.
"""

from collections.abc import Callable
from datetime import date
from typing import Any, Optional, Union

from spending_tracker.aggregation import (
    AggregationEngine,
    coerce_granularity,
    to_local_date,
)
from spending_tracker.aggregation.engine import ReferenceInstant
from spending_tracker.config import Settings, get_settings
from spending_tracker.models.aggregation import DashboardSummary, Granularity
from spending_tracker.models.category import (
    choice_from_selection,
    load_predefined_categories,
)
from spending_tracker.models.record import SpendingRecord
from spending_tracker.services.storage import KeyValueStorage, create_storage
from spending_tracker.store import RecordStore


Subscriber = Callable[["SpendingSession"], None]


class SpendingSession:
    """
    One user's session over the spending journal.

    Usage:
        session = create_session()
        unsubscribe = session.subscribe(lambda s: redraw(s.dashboard()))
        session.add_spending("2024-03-15", "Others", "12.50", other_text="Gifts")
    """

    def __init__(
        self,
        store: RecordStore,
        engine: Optional[AggregationEngine] = None,
        granularity: Union[Granularity, str] = Granularity.MONTHLY,
        reference_date: Optional[ReferenceInstant] = None,
        others_label: str = "Others",
    ):
        self._store = store
        self._engine = engine or AggregationEngine()
        self._granularity = coerce_granularity(granularity)
        self._reference_date = to_local_date(reference_date) or date.today()
        self._others_label = others_label
        self._subscribers: list[Subscriber] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def engine(self) -> AggregationEngine:
        return self._engine

    @property
    def records(self) -> list[SpendingRecord]:
        return self._store.records

    @property
    def categories(self) -> list[str]:
        return self._store.categories

    @property
    def others_label(self) -> str:
        return self._others_label

    @property
    def granularity(self) -> Granularity:
        return self._granularity

    @property
    def reference_date(self) -> date:
        return self._reference_date

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback run after every mutation or view change.

        Returns:
            A function that removes the callback
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    # ------------------------------------------------------------------
    # Journal
    # ------------------------------------------------------------------

    def add_spending(
        self,
        record_date: Union[str, date, None],
        selected: str,
        amount: Any,
        other_text: str = "",
    ) -> SpendingRecord:
        """
        Add a spending entry from the journal form.

        Raises:
            ValidationError: If any field is missing/invalid (nothing changes)
            StorageWriteError: If persisting fails
        """
        choice = choice_from_selection(selected, other_text, self._others_label)
        record = self._store.record_spending(record_date, choice, amount)
        self._notify()
        return record

    def reload(self) -> None:
        """Re-read everything from storage."""
        self._store.load()
        self._notify()

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def set_granularity(self, value: Union[Granularity, str]) -> None:
        """
        Raises:
            ConfigurationError: If the value is not a known granularity
        """
        self._granularity = coerce_granularity(value)
        self._notify()

    def set_reference_date(self, value: ReferenceInstant) -> None:
        day = to_local_date(value)
        if day is None:
            raise ValueError("A reference date is required")
        self._reference_date = day
        self._notify()

    def filtered_records(self) -> list[SpendingRecord]:
        return self._engine.filter_records(
            self._store.records, self._granularity, self._reference_date
        )

    def dashboard(self) -> DashboardSummary:
        return self._engine.summarize(
            self._store.records, self._granularity, self._reference_date
        )


def create_session(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
) -> SpendingSession:
    """
    Create a loaded session from configuration.

    Args:
        settings: Settings to use (cached application settings if None)
        storage: Storage backend override (built from settings if None)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    store = RecordStore(
        storage=storage or create_storage(storage_settings),
        predefined_categories=load_predefined_categories(
            app_settings.predefined_categories_path
        ),
        records_key=storage_settings.records_key,
        categories_key=storage_settings.categories_key,
        others_label=app_settings.others_label,
    )
    store.load()

    return SpendingSession(
        store=store,
        engine=AggregationEngine(week_start_day=app_settings.week_start_day),
        granularity=app_settings.default_granularity,
        others_label=app_settings.others_label,
    )
