"""
Activity Logger

Every mutation of the spending journal and every storage recovery is
written to a structured log. This provides:
1. Debugging information when persisted data turns out to be unreadable
2. A trace of what the user added during a session

Events go to the log only. Nothing here is persisted.
"""

import structlog

from spending_tracker.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)
from spending_tracker.models.record import SpendingRecord, ValidationIssue


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class ActivityLogger:
    """Writes activity events to the structured log."""

    def __init__(self, name: str = "spending_tracker"):
        self._logger = structlog.get_logger(name)

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == ActivitySeverity.ERROR:
            self._logger.error("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.WARNING:
            self._logger.warning("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.DEBUG:
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def log_session_loaded(self, record_count: int, custom_category_count: int) -> None:
        self.log(ActivityEventBuilder.session_loaded(
            record_count=record_count,
            custom_category_count=custom_category_count,
        ))

    def log_record_added(self, record: SpendingRecord, total_records: int) -> None:
        self.log(ActivityEventBuilder.record_added(
            record_date=record.date,
            category=record.category,
            amount=record.amount,
            total_records=total_records,
        ))

    def log_custom_category_added(self, name: str) -> None:
        self.log(ActivityEventBuilder.custom_category_added(name))

    def log_validation_failed(self, issues: list[ValidationIssue]) -> None:
        self.log(ActivityEventBuilder.validation_failed(
            [issue.model_dump() for issue in issues]
        ))

    def log_storage_recovered(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.storage_recovered(key, error_message))

    def log_storage_write_failed(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.storage_write_failed(key, error_message))
