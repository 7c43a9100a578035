"""Tests for spendview.domain.expenses pure functions."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from spendview.domain.expenses import (
    create_expense,
    format_amount,
    format_currency,
    parse_amount,
    parse_category,
    update_expense,
    validate_expense,
)
from spendview.domain.models import Category, Money


class TestValidateExpense:
    """Tests for validate_expense."""

    def test_valid_input(self) -> None:
        """Should return None for valid input."""
        assert validate_expense("12.50", "Food", "Lunch") is None

    @pytest.mark.parametrize("amount", ["", "abc", "0", "-5", "nan"])
    def test_rejects_bad_amounts(self, amount: str) -> None:
        """Should require a positive number."""
        assert validate_expense(amount, "Food", "Lunch") == "Please enter a valid amount greater than 0"

    def test_rejects_unknown_category(self) -> None:
        """Should require one of the fixed categories."""
        assert validate_expense("5", "Travel", "Lunch") == "Please select a category"
        assert validate_expense("5", "", "Lunch") == "Please select a category"

    def test_rejects_blank_description(self) -> None:
        """Should require a description."""
        assert validate_expense("5", "Food", "   ") == "Please enter a description"

    def test_rejects_short_description(self) -> None:
        """Should require three characters after trimming."""
        assert validate_expense("5", "Food", "  ab  ") == "Description must be at least 3 characters"
        assert validate_expense("5", "Food", "abc") is None


class TestParsing:
    """Tests for parse_amount and parse_category."""

    def test_parse_amount_strips_currency(self) -> None:
        """Should accept a dollar sign and thousands separators."""
        assert parse_amount("$1,234.50") == Decimal("1234.50")

    def test_parse_amount_invalid(self) -> None:
        """Should return None for non-numbers."""
        assert parse_amount("twelve") is None
        assert parse_amount("inf") is None

    def test_parse_category_ignores_case(self) -> None:
        """Should match category names case-insensitively."""
        assert parse_category("  bills ") == Category.BILLS
        assert parse_category("Travel") is None


class TestFormatting:
    """Tests for amount formatting."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [("12.50", "12.5"), ("20.00", "20"), ("0.99", "0.99"), ("1200", "1200"), ("100.10", "100.1")],
    )
    def test_format_amount(self, amount: str, expected: str) -> None:
        """Should render a plain decimal string without trailing zeros."""
        assert format_amount(Decimal(amount)) == expected

    def test_format_currency(self) -> None:
        """Should render dollars with separators and two decimals."""
        assert format_currency(Decimal("1234.5")) == "$1,234.50"


class TestCreateAndUpdate:
    """Tests for create_expense and update_expense."""

    def test_create_stamps_times(self) -> None:
        """Should set created_at and updated_at to now and trim the description."""
        now = datetime(2025, 1, 15, 9, 0)
        expense = create_expense(date(2025, 1, 14), Money(Decimal("3.5")), Category.FOOD, " Coffee ", now)
        assert expense.created_at == now
        assert expense.updated_at == now
        assert expense.description == "Coffee"
        assert expense.id

    def test_create_generates_unique_ids(self) -> None:
        """Should give each record its own id."""
        now = datetime(2025, 1, 15)
        a = create_expense(date(2025, 1, 1), Money(Decimal(1)), Category.FOOD, "One", now)
        b = create_expense(date(2025, 1, 1), Money(Decimal(1)), Category.FOOD, "One", now)
        assert a.id != b.id

    def test_update_returns_new_record(self, make_expense) -> None:
        """Should leave the original untouched and bump updated_at."""
        original = make_expense(amount=10)
        later = datetime(2025, 2, 1, 8, 0)
        updated = update_expense(original, later, amount=Money(Decimal(15)))

        assert original.amount == Decimal(10)
        assert updated.amount == Decimal(15)
        assert updated.id == original.id
        assert updated.created_at == original.created_at
        assert updated.updated_at == later

    def test_update_rejects_identity_fields(self, make_expense) -> None:
        """Should not allow changing id or timestamps."""
        with pytest.raises(ValueError):
            update_expense(make_expense(), datetime(2025, 2, 1), id="other")
