"""
Data Models Package

This package contains all Pydantic models used in the Spending Tracker.
All data flowing through the system must conform to these schemas.
"""

from spending_tracker.models.record import (
    SpendingRecord,
    ValidationIssue,
    parse_record_date,
)
from spending_tracker.models.category import (
    CategoryChoice,
    CategorySet,
    CustomCategoryRequest,
    PredefinedCategory,
    PredefinedCategoryEntry,
    choice_from_selection,
    load_predefined_categories,
)
from spending_tracker.models.aggregation import (
    ActiveWindow,
    CategoryBreakdown,
    DashboardSummary,
    Granularity,
    TimeSeries,
)
from spending_tracker.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Record models
    "SpendingRecord",
    "ValidationIssue",
    "parse_record_date",
    # Category models
    "CategoryChoice",
    "CategorySet",
    "CustomCategoryRequest",
    "PredefinedCategory",
    "PredefinedCategoryEntry",
    "choice_from_selection",
    "load_predefined_categories",
    # Aggregation models
    "ActiveWindow",
    "CategoryBreakdown",
    "DashboardSummary",
    "Granularity",
    "TimeSeries",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
