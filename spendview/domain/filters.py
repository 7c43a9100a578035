"""Pure functions for filtering expense records.

A record passes when it satisfies every present constraint of the FilterSpec.
Input order is preserved and the input list is never modified.
"""

from collections.abc import Iterable
from datetime import datetime

from spendview import dates
from spendview.domain.expenses import format_amount
from spendview.domain.models import Expense, FilterSpec
from spendview.domain.presets import resolve_date_preset


def resolve_date_bounds(spec: FilterSpec, now: datetime) -> tuple[datetime | None, datetime | None]:
    """Compute the effective inclusive date bounds of a filter.

    Explicit start/end dates win over the preset. A missing side is None.

    Args:
        spec: Filter specification.
        now: Current instant, used to resolve presets.

    Returns:
        Tuple of (start, end); either may be None.
    """
    if spec.start_date or spec.end_date:
        start = dates.start_of_day(spec.start_date) if spec.start_date else None
        end = dates.end_of_day(spec.end_date) if spec.end_date else None
        return start, end

    resolved = resolve_date_preset(spec.date_preset, now)
    if resolved is None:
        return None, None
    return resolved.start, resolved.end


def matches_search(expense: Expense, query: str) -> bool:
    """Case-insensitive substring match on description, category or amount."""
    needle = query.lower()
    return (
        needle in expense.description.lower()
        or needle in expense.category.value.lower()
        or needle in format_amount(expense.amount).lower()
    )


def matches_filter(
    expense: Expense,
    spec: FilterSpec,
    start: datetime | None = None,
    end: datetime | None = None,
) -> bool:
    """Check a single record against a filter.

    Args:
        expense: Record to check.
        spec: Filter specification.
        start: Resolved inclusive lower date bound.
        end: Resolved inclusive upper date bound.

    Returns:
        True if the record passes every present constraint.
    """
    if spec.categories and expense.category not in spec.categories:
        return False

    if start is not None or end is not None:
        # Records carry no time of day; they sit at midnight
        expense_time = dates.start_of_day(expense.date)
        if start is not None and expense_time < start:
            return False
        if end is not None and expense_time > end:
            return False

    if spec.min_amount is not None and expense.amount < spec.min_amount:
        return False
    if spec.max_amount is not None and expense.amount > spec.max_amount:
        return False

    if spec.search_query and not matches_search(expense, spec.search_query):
        return False

    return True


def filter_expenses(expenses: Iterable[Expense], spec: FilterSpec, now: datetime) -> list[Expense]:
    """Filter records by spec.

    Args:
        expenses: Snapshot of records.
        spec: Filter specification.
        now: Current instant, used to resolve date presets.

    Returns:
        New list of passing records, in input order.
    """
    if spec.is_empty:
        return list(expenses)

    start, end = resolve_date_bounds(spec, now)
    return [expense for expense in expenses if matches_filter(expense, spec, start, end)]
