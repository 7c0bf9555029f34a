"""Aggregation package."""

from spending_tracker.aggregation.engine import (
    AggregationEngine,
    coerce_granularity,
    to_local_date,
)

__all__ = ["AggregationEngine", "coerce_granularity", "to_local_date"]
