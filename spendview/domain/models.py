"""Domain type definitions for spendview.

- Money: Decimal amount in major currency units (always positive for expenses)
- Category: the closed set of expense categories
- Expense: immutable expense record
- FilterSpec / SortSpec / GroupKey: query parameters for the engine
- SummaryView: aggregate statistics, always recomputed
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import NewType

# Money amounts are Decimals to avoid floating point errors
Money = NewType("Money", Decimal)


class Category(str, Enum):
    """Expense categories, in their fixed enumeration order."""

    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"


# Single lookup table for per-category display data; add new categories here
CATEGORY_COLORS: dict[Category, str] = {
    Category.FOOD: "#ef4444",
    Category.TRANSPORTATION: "#3b82f6",
    Category.ENTERTAINMENT: "#a855f7",
    Category.SHOPPING: "#ec4899",
    Category.BILLS: "#f59e0b",
    Category.OTHER: "#6b7280",
}


class DatePreset(str, Enum):
    """Symbolic date ranges."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "thisWeek"
    LAST_WEEK = "lastWeek"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    LAST_3_MONTHS = "last3Months"
    LAST_6_MONTHS = "last6Months"
    THIS_YEAR = "thisYear"
    LAST_YEAR = "lastYear"
    CUSTOM = "custom"


class SortField(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    CATEGORY = "category"
    DESCRIPTION = "description"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class GroupKey(str, Enum):
    """Bucketing strategies for the expense list."""

    NONE = "none"
    CATEGORY = "category"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    AMOUNT_RANGE = "amountRange"


class ViewMode(str, Enum):
    LIST = "list"
    COMPACT = "compact"
    DETAILED = "detailed"


@dataclass(frozen=True)
class AmountRange:
    """Half-open amount bucket [lower, upper); upper None means unbounded."""

    label: str
    lower: Decimal
    upper: Decimal | None

    def contains(self, amount: Decimal) -> bool:
        if amount < self.lower:
            return False
        return self.upper is None or amount < self.upper


AMOUNT_RANGES: tuple[AmountRange, ...] = (
    AmountRange("$0 - $25", Decimal(0), Decimal(25)),
    AmountRange("$25 - $50", Decimal(25), Decimal(50)),
    AmountRange("$50 - $100", Decimal(50), Decimal(100)),
    AmountRange("$100 - $250", Decimal(100), Decimal(250)),
    AmountRange("$250 - $500", Decimal(250), Decimal(500)),
    AmountRange("$500+", Decimal(500), None),
)


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    id: str
    date: date
    amount: Money
    category: Category
    description: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] interval."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class FilterSpec:
    """Constraints applied to a record set; None means "not restricted"."""

    categories: frozenset[Category] | None = None
    start_date: date | None = None
    end_date: date | None = None
    date_preset: DatePreset | None = None
    search_query: str | None = None
    min_amount: Money | None = None
    max_amount: Money | None = None

    @property
    def is_empty(self) -> bool:
        return not (
            self.categories
            or self.start_date
            or self.end_date
            or (self.date_preset and self.date_preset != DatePreset.CUSTOM)
            or self.search_query
            or self.min_amount is not None
            or self.max_amount is not None
        )


@dataclass(frozen=True)
class SortSpec:
    field: SortField = SortField.DATE
    direction: SortDirection = SortDirection.DESC


@dataclass(frozen=True)
class TopCategory:
    category: Category
    amount: Money


@dataclass(frozen=True)
class SummaryView:
    """Immutable aggregate statistics over a record set."""

    total_expenses: Money
    monthly_total: Money
    category_totals: dict[Category, Money]
    top_category: TopCategory | None
    average_expense: Decimal
    average_daily: Decimal
    average_monthly: Decimal
    highest_expense: Expense | None
    lowest_expense: Expense | None
    expense_count: int


@dataclass(frozen=True)
class FilterPreset:
    """A named, stored FilterSpec."""

    id: str
    name: str
    filters: FilterSpec
    created_at: datetime


@dataclass(frozen=True)
class DisplaySettings:
    """Defaults for how the expense list is shown."""

    view_mode: ViewMode = ViewMode.LIST
    group_by: GroupKey = GroupKey.NONE
    sort: SortSpec = field(default_factory=SortSpec)
    items_per_page: int = 50
