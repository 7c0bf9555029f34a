"""
Spending Record Validation

DESIGN DECISION: Validation collects every problem with an entry before
reporting, so the user sees all missing/invalid fields at once.
Nothing is mutated until validation has passed.

IMPORTANT: Validation NEVER silently fixes issues. The only normalization
is writing a valid date in ISO form and trimming a custom category name.
"""

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from spending_tracker.models.category import (
    CategoryChoice,
    CustomCategoryRequest,
    PredefinedCategory,
)
from spending_tracker.models.record import (
    SpendingRecord,
    ValidationIssue,
    parse_record_date,
)


class ValidationError(Exception):
    """A spending entry is missing or has invalid required fields."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        super().__init__(
            "Invalid spending entry: "
            + "; ".join(f"{issue.field}: {issue.message}" for issue in self.issues)
        )

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in report order."""
        return list(dict.fromkeys(issue.field for issue in self.issues))


def resolve_category_choice(choice: CategoryChoice) -> str:
    """
    Turn a category choice into the effective category name.

    A predefined choice is returned unchanged. A custom request is trimmed of
    surrounding whitespace and must not be empty.

    Raises:
        ValidationError: If the custom category text is blank
    """
    if isinstance(choice, CustomCategoryRequest):
        name = choice.raw_text.strip()
        if not name:
            raise ValidationError([ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please enter a category name for Others",
                suggested_fix="Type a name for the new category",
            )])
        return name
    if isinstance(choice, PredefinedCategory):
        return choice.name
    raise TypeError(f"Unsupported category choice: {type(choice).__name__}")


class RecordValidator:
    """Validates the fields of a new spending record."""

    def _check_date(
        self,
        value: Union[str, date, None],
    ) -> tuple[Optional[str], list[ValidationIssue]]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None, [ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
                suggested_fix="Pick the day the money was spent",
            )]

        parsed = parse_record_date(value)
        if parsed is None:
            return None, [ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"'{value}' is not a valid date",
                suggested_fix="Use the YYYY-MM-DD format",
            )]
        return parsed.isoformat(), []

    def _check_category(self, value: Optional[str]) -> list[ValidationIssue]:
        if not isinstance(value, str) or not value.strip():
            return [ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
                suggested_fix="Select a category or choose Others",
            )]
        return []

    def _check_amount(self, value: Any) -> tuple[Optional[float], list[ValidationIssue]]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
            )]

        amount: Optional[float] = None
        if isinstance(value, bool):
            amount = None
        elif isinstance(value, (int, float)):
            amount = float(value)
        elif isinstance(value, Decimal):
            amount = float(value) if value.is_finite() else math.nan
        elif isinstance(value, str):
            try:
                amount = float(Decimal(value.strip()))
            except InvalidOperation:
                amount = None

        if amount is None:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"'{value}' is not a number",
            )]
        if not math.isfinite(amount):
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be a finite number",
            )]
        if amount <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                suggested_fix="Enter at least 0.01",
            )]
        return amount, []

    def build_record(
        self,
        record_date: Union[str, date, datetime, None],
        category: Optional[str],
        amount: Any,
    ) -> SpendingRecord:
        """
        Validate fields and build the record.

        Raises:
            ValidationError: Naming every missing/invalid field
        """
        iso_date, issues = self._check_date(record_date)
        issues.extend(self._check_category(category))
        value, amount_issues = self._check_amount(amount)
        issues.extend(amount_issues)

        if issues:
            raise ValidationError(issues)

        return SpendingRecord(date=iso_date, category=category, amount=value)
