"""Domain models and the expense query engine for spendview.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- "now" is always passed in, never read from the wall clock
- Business logic separated from infrastructure
"""

from spendview.domain.models import (
    Category,
    Expense,
    FilterSpec,
    GroupKey,
    Money,
    SortSpec,
    SummaryView,
)

__all__ = ["Category", "Expense", "FilterSpec", "GroupKey", "Money", "SortSpec", "SummaryView"]
