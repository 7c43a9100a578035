"""Pure functions for bucketing an ordered sequence of expense records."""

from collections.abc import Callable, Iterable
from decimal import Decimal

from spendview import dates
from spendview.domain.models import AMOUNT_RANGES, Expense, GroupKey

ALL_EXPENSES_LABEL = "All Expenses"


def amount_range_label(amount: Decimal) -> str:
    """Label of the fixed amount bucket containing amount."""
    for bucket in AMOUNT_RANGES:
        if bucket.contains(amount):
            return bucket.label
    # Only reachable for negative amounts, which never pass entry validation
    return AMOUNT_RANGES[0].label


def week_label(expense: Expense) -> str:
    return f"Week of {dates.format_date_label(dates.week_start_date(expense.date))}"


GROUP_LABELS: dict[GroupKey, Callable[[Expense], str]] = {
    GroupKey.NONE: lambda e: ALL_EXPENSES_LABEL,
    GroupKey.CATEGORY: lambda e: e.category.value,
    GroupKey.DAY: lambda e: dates.format_date_label(e.date),
    GroupKey.WEEK: week_label,
    GroupKey.MONTH: lambda e: dates.format_month_label(e.date),
    GroupKey.YEAR: lambda e: str(e.date.year),
    GroupKey.AMOUNT_RANGE: lambda e: amount_range_label(e.amount),
}


def group_label(expense: Expense, group_by: GroupKey) -> str:
    """Label of the group a record belongs to."""
    return GROUP_LABELS[group_by](expense)


def group_expenses(expenses: Iterable[Expense], group_by: GroupKey) -> dict[str, list[Expense]]:
    """Partition records into labelled groups.

    Args:
        expenses: Records, already filtered and sorted.
        group_by: Grouping strategy.

    Returns:
        Mapping of label to records. Groups appear in the order their first
        record is encountered; records keep their input order within a group.
        Empty input gives an empty mapping.
    """
    groups: dict[str, list[Expense]] = {}
    for expense in expenses:
        groups.setdefault(group_label(expense, group_by), []).append(expense)
    return groups
