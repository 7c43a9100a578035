"""Pure functions for summary statistics over expense records.

Every figure is recomputed from the snapshot passed in; nothing is cached.
"""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from spendview import dates
from spendview.domain.models import (
    Category,
    Expense,
    Money,
    SortDirection,
    SortField,
    SortSpec,
    SummaryView,
    TopCategory,
)
from spendview.domain.sorting import sort_expenses

ZERO = Money(Decimal(0))


def total_amount(expenses: Sequence[Expense]) -> Money:
    """Sum of all amounts."""
    return Money(sum((e.amount for e in expenses), Decimal(0)))


def calculate_monthly_total(expenses: Sequence[Expense], now: datetime) -> Money:
    """Sum of amounts dated within the calendar month containing now."""
    month_start = dates.start_of_month(now)
    month_end = dates.end_of_month(now)
    return total_amount(
        [e for e in expenses if dates.is_within_interval(dates.start_of_day(e.date), month_start, month_end)]
    )


def calculate_category_totals(expenses: Sequence[Expense]) -> dict[Category, Money]:
    """Per-category sums; every category is present, zero if unused."""
    totals: dict[Category, Money] = {category: ZERO for category in Category}
    for expense in expenses:
        totals[expense.category] = Money(totals[expense.category] + expense.amount)
    return totals


def find_top_category(category_totals: dict[Category, Money], expense_count: int) -> TopCategory | None:
    """Category with the largest total.

    Categories are visited in enumeration order and the best is replaced only
    on a strictly greater total, so earlier categories win ties.

    Args:
        category_totals: Totals keyed by category.
        expense_count: Number of records the totals were built from.

    Returns:
        TopCategory, or None when there are no records.
    """
    if expense_count == 0:
        return None

    best: TopCategory | None = None
    for category in Category:
        amount = category_totals.get(category, ZERO)
        if best is None or amount > best.amount:
            best = TopCategory(category=category, amount=amount)
    return best


def calculate_average_daily(expenses: Sequence[Expense], total: Money, now: datetime) -> Decimal:
    """Total divided by the days from the oldest record through today, inclusive."""
    if not expenses:
        return Decimal(0)
    oldest = min(e.date for e in expenses)
    days = (now.date() - oldest).days + 1
    if days <= 0:
        return Decimal(0)
    return total / days


def calculate_average_monthly(expenses: Sequence[Expense], total: Money) -> Decimal:
    """Total divided by the number of distinct calendar months with records."""
    months = {dates.month_key(e.date) for e in expenses}
    if not months:
        return Decimal(0)
    return total / len(months)


def calculate_summary(expenses: Sequence[Expense], now: datetime) -> SummaryView:
    """Compute summary statistics.

    Args:
        expenses: Snapshot of records (usually unfiltered).
        now: Current instant, anchors the monthly total and daily average.

    Returns:
        SummaryView. An empty snapshot gives zero sums and None extrema.
    """
    count = len(expenses)
    total = total_amount(expenses)
    category_totals = calculate_category_totals(expenses)

    # Stable ascending sort: ties keep input order at both ends
    by_amount = sort_expenses(expenses, SortSpec(field=SortField.AMOUNT, direction=SortDirection.ASC))

    return SummaryView(
        total_expenses=total,
        monthly_total=calculate_monthly_total(expenses, now),
        category_totals=category_totals,
        top_category=find_top_category(category_totals, count),
        average_expense=total / count if count else Decimal(0),
        average_daily=calculate_average_daily(expenses, total, now),
        average_monthly=calculate_average_monthly(expenses, total),
        highest_expense=by_amount[-1] if by_amount else None,
        lowest_expense=by_amount[0] if by_amount else None,
        expense_count=count,
    )
