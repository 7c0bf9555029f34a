"""Tests for the aggregation engine."""

from datetime import date, datetime

import pytest

from spending_tracker.aggregation import AggregationEngine, coerce_granularity
from spending_tracker.config import ConfigurationError
from spending_tracker.models.aggregation import Granularity
from spending_tracker.models.record import SpendingRecord


# 2024-03-15 is a Friday; its Sunday-start week runs 2024-03-10 .. 2024-03-16.
REFERENCE = date(2024, 3, 15)


def rec(day: str, category: str = "Food", amount: float = 10) -> SpendingRecord:
    return SpendingRecord(date=day, category=category, amount=amount)


@pytest.fixture
def engine():
    return AggregationEngine()


class TestGranularity:
    """Tests for granularity handling."""

    def test_coerce_string(self):
        assert coerce_granularity("Weekly") == Granularity.WEEKLY

    @pytest.mark.parametrize("value", ["Yearly", "daily", "", None, 3])
    def test_unknown_granularity(self, value):
        with pytest.raises(ConfigurationError):
            coerce_granularity(value)

    def test_engine_rejects_unknown_granularity(self, engine):
        with pytest.raises(ConfigurationError):
            engine.filter_records([rec("2024-03-15")], "Quarterly", REFERENCE)
        with pytest.raises(ConfigurationError):
            engine.time_series([], "Quarterly", REFERENCE)

    def test_invalid_week_start(self):
        with pytest.raises(ConfigurationError):
            AggregationEngine(week_start_day=7)


class TestActiveWindow:
    """Tests for window computation."""

    def test_daily(self, engine):
        window = engine.active_window(Granularity.DAILY, REFERENCE)
        assert (window.start, window.end) == (REFERENCE, REFERENCE)

    def test_weekly_sunday_start(self, engine):
        window = engine.active_window(Granularity.WEEKLY, REFERENCE)
        assert (window.start, window.end) == (date(2024, 3, 10), date(2024, 3, 16))

    def test_weekly_on_the_start_day(self, engine):
        window = engine.active_window(Granularity.WEEKLY, date(2024, 3, 10))
        assert window.start == date(2024, 3, 10)

    def test_weekly_spanning_months(self, engine):
        window = engine.active_window(Granularity.WEEKLY, date(2024, 3, 1))
        assert (window.start, window.end) == (date(2024, 2, 25), date(2024, 3, 2))

    def test_weekly_monday_start(self):
        window = AggregationEngine(week_start_day=0).active_window("Weekly", REFERENCE)
        assert (window.start, window.end) == (date(2024, 3, 11), date(2024, 3, 17))

    def test_monthly_leap_february(self, engine):
        window = engine.active_window(Granularity.MONTHLY, date(2024, 2, 10))
        assert (window.start, window.end) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_datetime_reference(self, engine):
        """Test that a datetime reference is reduced to its calendar date."""
        window = engine.active_window("Daily", datetime(2024, 3, 15, 23, 59))
        assert window.start == REFERENCE


class TestFilterRecords:
    """Tests for filter_records."""

    def test_daily(self, engine):
        """Test local-date equality for the Daily window."""
        records = [rec("2024-03-14"), rec("2024-03-15")]
        assert engine.filter_records(records, "Daily", REFERENCE) == [rec("2024-03-15")]

    def test_weekly_bounds_inclusive(self, engine):
        records = [
            rec("2024-03-09"),
            rec("2024-03-10"),
            rec("2024-03-16"),
            rec("2024-03-17"),
        ]
        filtered = engine.filter_records(records, "Weekly", REFERENCE)
        assert [r.date for r in filtered] == ["2024-03-10", "2024-03-16"]

    def test_monthly(self, engine):
        records = [rec("2024-02-29"), rec("2024-03-01"), rec("2024-03-31"), rec("2023-03-15")]
        filtered = engine.filter_records(records, "Monthly", REFERENCE)
        assert [r.date for r in filtered] == ["2024-03-01", "2024-03-31"]

    def test_order_preserved(self, engine):
        records = [rec("2024-03-20", "B"), rec("2024-03-02", "A"), rec("2024-03-11", "C")]
        filtered = engine.filter_records(records, "Monthly", REFERENCE)
        assert [r.category for r in filtered] == ["B", "A", "C"]

    def test_unparseable_dates_excluded(self, engine):
        """Test that bad dates are skipped rather than raising."""
        records = [rec("garbage"), rec("2024-03-15")]
        assert engine.filter_records(records, "Monthly", REFERENCE) == [rec("2024-03-15")]

    def test_datetime_strings_use_date_part(self, engine):
        records = [rec("2024-03-15T22:00:00")]
        assert len(engine.filter_records(records, "Daily", REFERENCE)) == 1

    def test_no_reference(self, engine):
        assert engine.filter_records([rec("2024-03-15")], "Daily", None) == []


class TestGroupingAndTotals:
    """Tests for group_by_category and total."""

    def test_group_by_category(self, engine):
        records = [rec("2024-03-15", "Food", 10), rec("2024-03-15", "Food", 5), rec("2024-03-16", "Fuel", 20)]
        assert engine.group_by_category(records) == {"Food": 15, "Fuel": 20}

    def test_group_keeps_first_seen_order(self, engine):
        records = [rec("2024-03-15", "Fuel"), rec("2024-03-15", "Food"), rec("2024-03-15", "Fuel")]
        assert list(engine.group_by_category(records)) == ["Fuel", "Food"]

    def test_group_empty(self, engine):
        assert engine.group_by_category([]) == {}

    def test_category_breakdown(self, engine):
        records = [rec("2024-03-15", "Food", 10), rec("2024-03-16", "Fuel", 20)]
        breakdown = engine.category_breakdown(records)
        assert breakdown.labels == ["Food", "Fuel"]
        assert breakdown.amounts == [10, 20]

    def test_total_empty(self, engine):
        assert engine.total([]) == 0

    def test_total_over_concatenation(self, engine):
        """Test total(A ++ B) == total(A) + total(B)."""
        a = [rec("2024-03-01", amount=1.1), rec("2024-03-02", amount=2.2)]
        b = [rec("2024-03-03", amount=3.3)]
        assert engine.total(a + b) == pytest.approx(engine.total(a) + engine.total(b))
        assert engine.total(b + a) == pytest.approx(engine.total(a + b))


class TestTimeSeries:
    """Tests for time_series."""

    def test_daily_single_bucket(self, engine):
        filtered = [rec("2024-03-15", amount=4), rec("2024-03-15", amount=6)]
        series = engine.time_series(filtered, "Daily", REFERENCE)
        assert series.labels == ["2024-03-15"]
        assert series.totals == [10]

    def test_daily_empty(self, engine):
        series = engine.time_series([], "Daily", REFERENCE)
        assert series.labels == ["2024-03-15"]
        assert series.totals == [0]

    def test_weekly_zero_filled(self, engine):
        """Test that the weekly axis always has 7 slots."""
        filtered = [rec("2024-03-12", amount=5), rec("2024-03-12", amount=5), rec("2024-03-16", amount=1)]
        series = engine.time_series(filtered, "Weekly", REFERENCE)
        assert series.labels == [
            "2024-03-10", "2024-03-11", "2024-03-12", "2024-03-13",
            "2024-03-14", "2024-03-15", "2024-03-16",
        ]
        assert series.totals == [0, 0, 10, 0, 0, 0, 1]

    def test_weekly_all_zero(self, engine):
        series = engine.time_series([], "Weekly", REFERENCE)
        assert len(series.labels) == 7
        assert series.totals == [0] * 7

    def test_monthly_only_days_with_data(self, engine):
        """Test that monthly buckets are the distinct dates, ascending."""
        filtered = [rec("2024-03-17", amount=2), rec("2024-03-03", amount=1), rec("2024-03-17", amount=3)]
        series = engine.time_series(filtered, "Monthly", REFERENCE)
        assert series.labels == ["2024-03-03", "2024-03-17"]
        assert series.totals == [1, 5]

    def test_monthly_empty(self, engine):
        series = engine.time_series([], "Monthly", REFERENCE)
        assert series.labels == []


class TestDescribeWindow:
    """Tests for window labels."""

    def test_daily(self, engine):
        assert engine.describe_window("Daily", REFERENCE) == "March 15, 2024"

    def test_weekly(self, engine):
        assert engine.describe_window("Weekly", REFERENCE) == "Mar 10, 2024 - Mar 16, 2024"

    def test_monthly(self, engine):
        assert engine.describe_window("Monthly", REFERENCE) == "March 2024"

    def test_no_reference(self, engine):
        assert engine.describe_window("Monthly", None) == ""


class TestSummarize:
    """Tests for the dashboard summary."""

    def test_summary(self, engine):
        records = [
            rec("2024-03-10", "Food", 10),
            rec("2024-03-15", "Fuel", 20),
            rec("2024-03-15", "Food", 5),
            rec("2024-02-01", "Rent", 100),
        ]
        summary = engine.summarize(records, "Weekly", REFERENCE)

        assert summary.granularity == Granularity.WEEKLY
        assert summary.total_all_time == 135
        assert summary.total_filtered == 35
        assert summary.record_count == 3
        assert summary.has_data
        assert summary.breakdown.as_dict() == {"Food": 15, "Fuel": 20}
        assert len(summary.series.labels) == 7
        assert summary.window_label == "Mar 10, 2024 - Mar 16, 2024"

    def test_summary_without_matches(self, engine):
        summary = engine.summarize([rec("2024-02-01")], "Daily", REFERENCE)
        assert not summary.has_data
        assert summary.total_filtered == 0
        assert summary.total_all_time == 10


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
