"""Pure functions for ordering expense records.

Sorting is stable in both directions: records with equal keys keep their
relative input order.
"""

from collections.abc import Callable, Iterable
from typing import Any

from pyuca import Collator

from spendview.domain.models import Expense, SortDirection, SortField, SortSpec

_collator = Collator()


def collation_key(text: str) -> tuple[int, ...]:
    """Case-insensitive Unicode collation key; accented letters sort with their base letter."""
    return _collator.sort_key(text.casefold())


SORT_KEYS: dict[SortField, Callable[[Expense], Any]] = {
    SortField.DATE: lambda e: e.date,
    SortField.AMOUNT: lambda e: e.amount,
    SortField.CATEGORY: lambda e: collation_key(e.category.value),
    SortField.DESCRIPTION: lambda e: collation_key(e.description),
}


def sort_expenses(expenses: Iterable[Expense], spec: SortSpec) -> list[Expense]:
    """Sort records by a field and direction.

    Args:
        expenses: Records to sort.
        spec: Field and direction.

    Returns:
        New sorted list; the input is not modified.
    """
    # sorted() keeps equal elements in input order even with reverse=True
    return sorted(
        expenses,
        key=SORT_KEYS[spec.field],
        reverse=spec.direction == SortDirection.DESC,
    )
