"""
Activity Models for Spending Tracker

Significant actions (records added, categories registered, storage
recovery) are described by an ActivityEvent and written to the structured
log. Events are not persisted; there is no audit history.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events we log."""
    SESSION_LOADED = "session_loaded"
    RECORD_ADDED = "record_added"
    CUSTOM_CATEGORY_ADDED = "custom_category_added"
    VALIDATION_FAILED = "validation_failed"
    STORAGE_RECOVERED = "storage_recovered"
    STORAGE_WRITE_FAILED = "storage_write_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single activity event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO
    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.record_added("2024-03-15", "Food", 12.5, 4)
    """

    @staticmethod
    def session_loaded(record_count: int, custom_category_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SESSION_LOADED,
            description=f"Loaded {record_count} records",
            details={
                "record_count": record_count,
                "custom_category_count": custom_category_count,
            },
        )

    @staticmethod
    def record_added(
        record_date: str,
        category: str,
        amount: float,
        total_records: int,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_ADDED,
            description=f"Record added: {category} - {amount:.2f}",
            details={
                "date": record_date,
                "category": category,
                "amount": amount,
                "total_records": total_records,
            },
        )

    @staticmethod
    def custom_category_added(name: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.CUSTOM_CATEGORY_ADDED,
            description=f"Custom category added: {name}",
            details={"category": name},
        )

    @staticmethod
    def validation_failed(issues: list[dict]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.VALIDATION_FAILED,
            severity=ActivitySeverity.WARNING,
            description=f"Validation failed with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def storage_recovered(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_RECOVERED,
            severity=ActivitySeverity.WARNING,
            description=f"Unreadable data under '{key}' replaced with an empty collection",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def storage_write_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_WRITE_FAILED,
            severity=ActivitySeverity.ERROR,
            description=f"Failed to write '{key}'",
            details={"key": key},
            error_message=error_message,
        )
