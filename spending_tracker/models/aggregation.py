"""
Aggregation Models

Shapes produced by the aggregation engine. The chart renderer consumes the
aligned label/value lists directly; nothing here knows about rendering.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Granularity(str, Enum):
    """Aggregation window kind."""
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"


class ActiveWindow(BaseModel):
    """Inclusive calendar date range selected by a granularity + reference date."""
    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode='after')
    def validate_bounds(self) -> 'ActiveWindow':
        if self.end < self.start:
            raise ValueError("Window end cannot be before start")
        return self

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class TimeSeries(BaseModel):
    """Ordered ISO date labels with aligned totals."""

    labels: list[str] = Field(default_factory=list)
    totals: list[float] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_alignment(self) -> 'TimeSeries':
        if len(self.labels) != len(self.totals):
            raise ValueError("Labels and totals must have the same length")
        return self


class CategoryBreakdown(BaseModel):
    """Ordered category names with aligned amounts."""

    labels: list[str] = Field(default_factory=list)
    amounts: list[float] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_alignment(self) -> 'CategoryBreakdown':
        if len(self.labels) != len(self.amounts):
            raise ValueError("Labels and amounts must have the same length")
        return self

    def as_dict(self) -> dict[str, float]:
        return dict(zip(self.labels, self.amounts))


class DashboardSummary(BaseModel):
    """Everything the dashboard view shows for one granularity + reference date."""

    granularity: Granularity
    reference_date: date
    window: ActiveWindow
    window_label: str
    total_all_time: float = 0.0
    total_filtered: float = 0.0
    record_count: int = Field(default=0, ge=0)
    breakdown: CategoryBreakdown = Field(default_factory=CategoryBreakdown)
    series: TimeSeries = Field(default_factory=TimeSeries)

    @property
    def has_data(self) -> bool:
        """Were any records found in the active window?"""
        return self.record_count > 0
