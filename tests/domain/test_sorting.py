"""Tests for spendview.domain.sorting pure functions."""

from datetime import date

from spendview.domain.models import Category, SortDirection, SortField, SortSpec
from spendview.domain.sorting import sort_expenses

ASC = SortDirection.ASC
DESC = SortDirection.DESC


class TestSortExpenses:
    """Tests for sort_expenses."""

    def test_amount_ascending(self, make_expense) -> None:
        """Should order amounts from smallest to largest."""
        expenses = [make_expense(amount=a) for a in (30, 10, 20)]
        result = sort_expenses(expenses, SortSpec(SortField.AMOUNT, ASC))
        assert [int(e.amount) for e in result] == [10, 20, 30]

    def test_amount_descending(self, make_expense) -> None:
        """Should order amounts from largest to smallest."""
        expenses = [make_expense(amount=a) for a in (30, 10, 20)]
        result = sort_expenses(expenses, SortSpec(SortField.AMOUNT, DESC))
        assert [int(e.amount) for e in result] == [30, 20, 10]

    def test_amount_is_numeric_not_textual(self, make_expense) -> None:
        """Should compare 9 below 10."""
        expenses = [make_expense(amount=10), make_expense(amount=9)]
        result = sort_expenses(expenses, SortSpec(SortField.AMOUNT, ASC))
        assert [int(e.amount) for e in result] == [9, 10]

    def test_date_chronological(self, make_expense) -> None:
        """Should order by calendar date."""
        expenses = [
            make_expense(expense_date=date(2025, 3, 1)),
            make_expense(expense_date=date(2024, 12, 31)),
            make_expense(expense_date=date(2025, 1, 15)),
        ]
        result = sort_expenses(expenses, SortSpec(SortField.DATE, ASC))
        assert [e.date for e in result] == [date(2024, 12, 31), date(2025, 1, 15), date(2025, 3, 1)]

    def test_description_ignores_case(self, make_expense) -> None:
        """Should sort text without separating upper and lower case."""
        expenses = [make_expense(description=d) for d in ("banana", "Cherry", "apple")]
        result = sort_expenses(expenses, SortSpec(SortField.DESCRIPTION, ASC))
        assert [e.description for e in result] == ["apple", "banana", "Cherry"]

    def test_category(self, make_expense) -> None:
        """Should sort by category name."""
        expenses = [make_expense(category=c) for c in (Category.SHOPPING, Category.BILLS, Category.FOOD)]
        result = sort_expenses(expenses, SortSpec(SortField.CATEGORY, ASC))
        assert [e.category for e in result] == [Category.BILLS, Category.FOOD, Category.SHOPPING]

    def test_does_not_mutate_input(self, make_expense) -> None:
        """Should return a new list."""
        expenses = [make_expense(amount=a) for a in (3, 1, 2)]
        original = list(expenses)
        sort_expenses(expenses, SortSpec(SortField.AMOUNT, ASC))
        assert expenses == original

    def test_stable_ascending(self, make_expense) -> None:
        """Should keep input order among equal keys."""
        first = make_expense(amount=10, description="first")
        second = make_expense(amount=10, description="second")
        small = make_expense(amount=5)
        result = sort_expenses([first, small, second], SortSpec(SortField.AMOUNT, ASC))
        assert result == [small, first, second]

    def test_stable_descending(self, make_expense) -> None:
        """Should keep input order among equal keys when descending too."""
        first = make_expense(amount=10, description="first")
        second = make_expense(amount=10, description="second")
        big = make_expense(amount=50)
        result = sort_expenses([first, big, second], SortSpec(SortField.AMOUNT, DESC))
        assert result == [big, first, second]

    def test_direction_toggled_twice_is_stable(self, make_expense) -> None:
        """Should reproduce the same order after sorting desc then asc."""
        expenses = [make_expense(amount=a, description=f"e{i}") for i, a in enumerate((5, 10, 5, 10, 5))]
        asc = sort_expenses(expenses, SortSpec(SortField.AMOUNT, ASC))
        desc = sort_expenses(expenses, SortSpec(SortField.AMOUNT, DESC))
        toggled = sort_expenses(desc, SortSpec(SortField.AMOUNT, ASC))
        assert [e.description for e in asc] == ["e0", "e2", "e4", "e1", "e3"]
        assert toggled == asc

    def test_accented_description_sorts_with_base_letter(self, make_expense) -> None:
        """Should place accented words next to their unaccented letter, not after z."""
        expenses = [make_expense(description=d) for d in ("zebra", "éclair", "apple")]
        result = sort_expenses(expenses, SortSpec(SortField.DESCRIPTION, ASC))
        assert [e.description for e in result] == ["apple", "éclair", "zebra"]

    def test_accented_description_descending(self, make_expense) -> None:
        """Should reverse the collated order."""
        expenses = [make_expense(description=d) for d in ("Émile", "dentist", "Fuel")]
        result = sort_expenses(expenses, SortSpec(SortField.DESCRIPTION, DESC))
        assert [e.description for e in result] == ["Fuel", "Émile", "dentist"]
