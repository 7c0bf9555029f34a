"""
Core Data Models for Spending Tracker

These models define the schemas for data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Serialize to exactly the persisted layout ({date, category, amount})

DESIGN DECISION: Records are frozen. The store is append-only and nothing
downstream may edit a record once it has been created.
"""

import datetime as dt
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def parse_record_date(value: Union[str, dt.date, None]) -> Optional[dt.date]:
    """
    Parse a stored record date into a calendar date.

    Accepts ``YYYY-MM-DD`` strings and full ISO datetimes (the date part is
    kept). Returns None for anything missing or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(text).date()
    except ValueError:
        return None


# =============================================================================
# CORE RECORD MODEL
# =============================================================================

class SpendingRecord(BaseModel):
    """
    A single spending entry.

    Records created through the store always carry an ISO date. Records
    restored from storage keep whatever date string was persisted (empty
    when it was missing); such records are ignored by the aggregation
    windows.
    """
    model_config = ConfigDict(frozen=True)

    date: str = Field(
        default="",
        description="Calendar date of the spending (YYYY-MM-DD)"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category name (predefined or custom)"
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Amount spent"
    )

    @field_validator("date", mode="before")
    @classmethod
    def missing_date_as_empty(cls, v):
        return "" if v is None else v

    @property
    def parsed_date(self) -> Optional[dt.date]:
        """The record date as a calendar date, or None if unparseable."""
        return parse_record_date(self.date)

    def to_storage_dict(self) -> dict:
        """Convert to the persisted {date, category, amount} layout."""
        return {
            "date": self.date,
            "category": self.category,
            "amount": self.amount,
        }


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )
