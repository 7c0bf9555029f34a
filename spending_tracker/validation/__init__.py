"""Validation package."""

from spending_tracker.validation.validator import (
    RecordValidator,
    ValidationError,
    resolve_category_choice,
)

__all__ = ["RecordValidator", "ValidationError", "resolve_category_choice"]
