"""Pure functions for creating, updating and validating expense records.

Records are immutable: an edit produces a new Expense with a fresh
updated_at, keeping id and created_at.
"""

import dataclasses
import uuid
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from spendview.domain.models import Category, Expense, Money

MIN_DESCRIPTION_LENGTH = 3


def parse_amount(text: str) -> Money | None:
    """Parse a user-entered amount.

    Args:
        text: Amount string (e.g., "12.50", "$1,200").

    Returns:
        Money value, or None if text is not a finite number.
    """
    cleaned = text.strip().replace("$", "").replace(",", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return Money(value)


def parse_category(text: str) -> Category | None:
    """Match a category by name, ignoring case."""
    for category in Category:
        if category.value.lower() == text.strip().lower():
            return category
    return None


def format_amount(amount: Decimal) -> str:
    """Format amount as a plain decimal string without trailing zeros.

    Args:
        amount: Amount to format.

    Returns:
        Machine-readable string (e.g., "12.5", "20", "0.99").
    """
    normalized = amount.normalize()
    # normalize() turns 20 into 2E+1; "f" formatting expands it back
    return format(normalized, "f")


def format_currency(amount: Decimal) -> str:
    """Format amount for display (e.g., "$1,234.50")."""
    return f"${amount:,.2f}"


def validate_expense(amount: str, category: str, description: str) -> str | None:
    """Validate raw expense input.

    Args:
        amount: Amount as entered.
        category: Category name as entered.
        description: Description as entered.

    Returns:
        Error message, or None if the input is valid.
    """
    value = parse_amount(amount)
    if value is None or value <= 0:
        return "Please enter a valid amount greater than 0"

    if not category or parse_category(category) is None:
        return "Please select a category"

    if not description.strip():
        return "Please enter a description"

    if len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        return f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"

    return None


def generate_id() -> str:
    """Generate a unique expense identifier."""
    return uuid.uuid4().hex


def create_expense(
    expense_date: date,
    amount: Money,
    category: Category,
    description: str,
    now: datetime,
) -> Expense:
    """Create a new expense record stamped with now."""
    return Expense(
        id=generate_id(),
        date=expense_date,
        amount=amount,
        category=category,
        description=description.strip(),
        created_at=now,
        updated_at=now,
    )


def update_expense(expense: Expense, now: datetime, **changes: Any) -> Expense:
    """Return a copy of expense with changes applied.

    Args:
        expense: Existing record.
        now: Modification instant, becomes updated_at.
        **changes: New values for date, amount, category or description.

    Returns:
        New Expense; the input is left untouched.

    Raises:
        ValueError: If changes name a field that cannot be edited.
    """
    editable = {"date", "amount", "category", "description"}
    unknown = set(changes) - editable
    if unknown:
        raise ValueError(f"Cannot change field(s): {', '.join(sorted(unknown))}")

    if "description" in changes:
        changes["description"] = changes["description"].strip()

    return dataclasses.replace(expense, updated_at=now, **changes)
