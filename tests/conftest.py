"""Shared fixtures for spendview tests."""

from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal

import pytest

from spendview.domain.models import Category, Expense, Money

# Wednesday, 2025-01-15 14:30
NOW = datetime(2025, 1, 15, 14, 30)

ExpenseFactory = Callable[..., Expense]


@pytest.fixture()
def now() -> datetime:
    """Fixed current instant."""
    return NOW


@pytest.fixture()
def make_expense() -> ExpenseFactory:
    """Factory for expense records with sensible defaults and sequential ids."""
    counter = 0

    def _make(
        amount: str | int = "10",
        category: Category = Category.FOOD,
        description: str = "Lunch",
        expense_date: date = date(2025, 1, 10),
        expense_id: str | None = None,
    ) -> Expense:
        nonlocal counter
        counter += 1
        return Expense(
            id=expense_id or f"exp-{counter}",
            date=expense_date,
            amount=Money(Decimal(str(amount))),
            category=category,
            description=description,
            created_at=NOW,
            updated_at=NOW,
        )

    return _make
