"""Tests for spending record validation."""

import math
from datetime import date
from decimal import Decimal

import pytest

from spending_tracker.models.category import CustomCategoryRequest, PredefinedCategory
from spending_tracker.validation import (
    RecordValidator,
    ValidationError,
    resolve_category_choice,
)


@pytest.fixture
def validator():
    return RecordValidator()


class TestBuildRecord:
    """Tests for RecordValidator.build_record."""

    def test_valid_record(self, validator):
        """Test a fully valid entry."""
        record = validator.build_record("2024-03-15", "Food", 12.5)
        assert record.date == "2024-03-15"
        assert record.category == "Food"
        assert record.amount == 12.5

    def test_date_object_is_normalized(self, validator):
        """Test that date objects are stored in ISO form."""
        record = validator.build_record(date(2024, 3, 5), "Food", 1)
        assert record.date == "2024-03-05"

    def test_numeric_string_amount(self, validator):
        """Test that form strings are parsed like numbers."""
        record = validator.build_record("2024-03-15", "Food", " 12.50 ")
        assert record.amount == 12.5

    def test_decimal_amount(self, validator):
        record = validator.build_record("2024-03-15", "Food", Decimal("7.25"))
        assert record.amount == 7.25

    @pytest.mark.parametrize("amount", [0, -1, "0", "-2.5"])
    def test_non_positive_amount(self, validator, amount):
        """Test that amounts must be greater than zero."""
        with pytest.raises(ValidationError) as exc_info:
            validator.build_record("2024-03-15", "Food", amount)
        assert exc_info.value.fields == ["amount"]
        assert exc_info.value.issues[0].issue_type == "invalid_value"

    @pytest.mark.parametrize("amount", ["abc", True, [1]])
    def test_non_numeric_amount(self, validator, amount):
        with pytest.raises(ValidationError) as exc_info:
            validator.build_record("2024-03-15", "Food", amount)
        assert exc_info.value.issues[0].issue_type == "invalid_format"

    @pytest.mark.parametrize("amount", [math.inf, math.nan, "nan", "1e400"])
    def test_non_finite_amount(self, validator, amount):
        with pytest.raises(ValidationError) as exc_info:
            validator.build_record("2024-03-15", "Food", amount)
        assert exc_info.value.fields == ["amount"]

    @pytest.mark.parametrize("amount", [None, "", "   "])
    def test_missing_amount(self, validator, amount):
        with pytest.raises(ValidationError) as exc_info:
            validator.build_record("2024-03-15", "Food", amount)
        assert exc_info.value.issues[0].issue_type == "missing"

    def test_invalid_date(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.build_record("15/03/2024", "Food", 1)
        assert exc_info.value.fields == ["date"]
        assert exc_info.value.issues[0].issue_type == "invalid_format"

    def test_blank_category(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.build_record("2024-03-15", "   ", 1)
        assert exc_info.value.fields == ["category"]

    def test_all_issues_reported_together(self, validator):
        """Test that every invalid field is named at once."""
        with pytest.raises(ValidationError) as exc_info:
            validator.build_record("", "", 0)
        assert exc_info.value.fields == ["date", "category", "amount"]
        assert "date" in str(exc_info.value)


class TestResolveCategoryChoice:
    """Tests for resolve_category_choice."""

    def test_custom_text_is_trimmed(self):
        assert resolve_category_choice(CustomCategoryRequest(raw_text="  Gifts  ")) == "Gifts"

    def test_blank_custom_text_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve_category_choice(CustomCategoryRequest(raw_text="   "))
        assert exc_info.value.fields == ["category"]

    def test_predefined_is_unchanged(self):
        assert resolve_category_choice(PredefinedCategory(name="Food")) == "Food"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
