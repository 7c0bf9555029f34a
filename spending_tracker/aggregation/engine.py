"""
Aggregation Engine

DESIGN DECISION: Aggregation is a pure function of
(records, granularity, reference date). No I/O, no mutation, no caching.
The caller re-runs it after every store mutation.

Windows are calendar-date ranges compared in local-date terms:
- Daily: the reference day
- Weekly: the configured week-start day on/before the reference, plus 6 days
- Monthly: the calendar month containing the reference

Time series deliberately differ by granularity: the weekly axis always has
7 slots (zero-filled), the monthly axis only has days with spending.
"""

import calendar
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Optional, Union

from spending_tracker.config import ConfigurationError
from spending_tracker.models.aggregation import (
    ActiveWindow,
    CategoryBreakdown,
    DashboardSummary,
    Granularity,
    TimeSeries,
)
from spending_tracker.models.record import SpendingRecord


SUNDAY = 6

ReferenceInstant = Union[date, datetime]


def coerce_granularity(value: Union[Granularity, str]) -> Granularity:
    """
    Convert a raw granularity value into the enum.

    Raises:
        ConfigurationError: If the value is not Daily, Weekly or Monthly
    """
    if isinstance(value, Granularity):
        return value
    try:
        return Granularity(value)
    except (ValueError, TypeError):
        raise ConfigurationError(
            f"Unsupported granularity: {value!r}. "
            f"Allowed: {', '.join(g.value for g in Granularity)}"
        )


def to_local_date(reference: Optional[ReferenceInstant]) -> Optional[date]:
    """Reduce a reference instant to its local calendar date."""
    if reference is None:
        return None
    if isinstance(reference, datetime):
        if reference.tzinfo is not None:
            reference = reference.astimezone()
        return reference.date()
    return reference


class AggregationEngine:
    """
    Filters and aggregates spending records for the dashboard.

    Args:
        week_start_day: First day of the week, 0=Monday ... 6=Sunday
    """

    def __init__(self, week_start_day: int = SUNDAY):
        if not 0 <= week_start_day <= 6:
            raise ConfigurationError(
                f"week_start_day must be between 0 and 6, got {week_start_day}"
            )
        self._week_start_day = week_start_day

    @property
    def week_start_day(self) -> int:
        return self._week_start_day

    # ------------------------------------------------------------------
    # Windows
    # ------------------------------------------------------------------

    def active_window(
        self,
        granularity: Union[Granularity, str],
        reference: ReferenceInstant,
    ) -> ActiveWindow:
        """Inclusive date range for a granularity around the reference date."""
        granularity = coerce_granularity(granularity)
        day = to_local_date(reference)
        if day is None:
            raise ValueError("A reference date is required")

        if granularity == Granularity.DAILY:
            return ActiveWindow(start=day, end=day)

        if granularity == Granularity.WEEKLY:
            offset = (day.weekday() - self._week_start_day) % 7
            start = day - timedelta(days=offset)
            return ActiveWindow(start=start, end=start + timedelta(days=6))

        last_day = calendar.monthrange(day.year, day.month)[1]
        return ActiveWindow(start=day.replace(day=1), end=day.replace(day=last_day))

    def describe_window(
        self,
        granularity: Union[Granularity, str],
        reference: Optional[ReferenceInstant],
    ) -> str:
        """Human-readable label for the active window."""
        granularity = coerce_granularity(granularity)
        day = to_local_date(reference)
        if day is None:
            return ""

        if granularity == Granularity.DAILY:
            return _long_date(day)
        if granularity == Granularity.WEEKLY:
            window = self.active_window(granularity, day)
            return f"{_short_date(window.start)} - {_short_date(window.end)}"
        return day.strftime("%B %Y")

    # ------------------------------------------------------------------
    # Filtering and grouping
    # ------------------------------------------------------------------

    def filter_records(
        self,
        records: Iterable[SpendingRecord],
        granularity: Union[Granularity, str],
        reference: Optional[ReferenceInstant],
    ) -> list[SpendingRecord]:
        """
        Records whose date falls inside the active window.

        Records with a missing or unparseable date are left out.
        Input order is preserved.
        """
        granularity = coerce_granularity(granularity)
        if to_local_date(reference) is None:
            return []

        window = self.active_window(granularity, reference)
        matching = []
        for record in records:
            day = record.parsed_date
            if day is not None and window.contains(day):
                matching.append(record)
        return matching

    def group_by_category(self, records: Iterable[SpendingRecord]) -> dict[str, float]:
        """Sum of amounts per category, in first-seen order."""
        groups: dict[str, float] = {}
        for record in records:
            groups[record.category] = groups.get(record.category, 0) + record.amount
        return groups

    def category_breakdown(self, records: Iterable[SpendingRecord]) -> CategoryBreakdown:
        """Chart-ready category names with aligned amounts."""
        grouped = self.group_by_category(records)
        return CategoryBreakdown(labels=list(grouped), amounts=list(grouped.values()))

    def total(self, records: Iterable[SpendingRecord]) -> float:
        """Sum of amounts; 0 for no records."""
        return sum((record.amount for record in records), 0.0)

    # ------------------------------------------------------------------
    # Time series
    # ------------------------------------------------------------------

    def time_series(
        self,
        filtered: Iterable[SpendingRecord],
        granularity: Union[Granularity, str],
        reference: Optional[ReferenceInstant],
    ) -> TimeSeries:
        """
        Date labels with aligned totals for the line chart.

        Daily gives one bucket for the reference day, Weekly gives all 7 days
        of the window (0 where nothing was spent), Monthly gives only the days
        that have records, ascending.
        """
        granularity = coerce_granularity(granularity)
        day = to_local_date(reference)
        if day is None:
            return TimeSeries()

        sums_by_date: dict[str, float] = {}
        for record in filtered:
            parsed = record.parsed_date
            if parsed is None:
                continue
            key = parsed.isoformat()
            sums_by_date[key] = sums_by_date.get(key, 0) + record.amount

        if granularity == Granularity.DAILY:
            labels = [day.isoformat()]
        elif granularity == Granularity.WEEKLY:
            start = self.active_window(granularity, day).start
            labels = [(start + timedelta(days=i)).isoformat() for i in range(7)]
        else:
            labels = sorted(sums_by_date)

        return TimeSeries(
            labels=labels,
            totals=[sums_by_date.get(label, 0.0) for label in labels],
        )

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def summarize(
        self,
        records: Iterable[SpendingRecord],
        granularity: Union[Granularity, str],
        reference: ReferenceInstant,
    ) -> DashboardSummary:
        """Everything the dashboard shows for one granularity + reference date."""
        granularity = coerce_granularity(granularity)
        day = to_local_date(reference)
        if day is None:
            raise ValueError("A reference date is required")

        all_records = list(records)
        filtered = self.filter_records(all_records, granularity, day)

        return DashboardSummary(
            granularity=granularity,
            reference_date=day,
            window=self.active_window(granularity, day),
            window_label=self.describe_window(granularity, day),
            total_all_time=self.total(all_records),
            total_filtered=self.total(filtered),
            record_count=len(filtered),
            breakdown=self.category_breakdown(filtered),
            series=self.time_series(filtered, granularity, day),
        )


def _long_date(day: date) -> str:
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def _short_date(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}, {day.year}"
