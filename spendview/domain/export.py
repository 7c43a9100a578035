"""Pure functions for CSV export and re-import of expense records.

Exported files have the header Date,Amount,Category,Description. Every data
field is double-quoted and embedded quotes are doubled, so any description
survives a round trip.
"""

import csv
import io
from collections.abc import Iterable
from datetime import date, datetime
from typing import TypedDict

from spendview import dates
from spendview.domain.expenses import format_amount, parse_amount, parse_category
from spendview.domain.models import Category, Expense, Money

CSV_HEADERS = ["Date", "Amount", "Category", "Description"]


class ParsedExpense(TypedDict):
    """Expense data read back from an exported CSV."""

    date: date
    amount: Money
    category: Category
    description: str


def expense_to_row(expense: Expense) -> list[str]:
    """CSV fields for one record."""
    return [
        dates.format_date_label(expense.date),
        format_amount(expense.amount),
        expense.category.value,
        expense.description,
    ]


def export_to_csv(expenses: Iterable[Expense]) -> str:
    """Serialize records to quoted CSV text.

    Args:
        expenses: Records, in the order they should appear.

    Returns:
        CSV text, rows separated by newlines, no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, doublequote=True, lineterminator="\n")
    for expense in expenses:
        writer.writerow(expense_to_row(expense))

    body = buffer.getvalue()
    if not body:
        return ",".join(CSV_HEADERS)
    return ",".join(CSV_HEADERS) + "\n" + body[: -len("\n")]


def export_filename(now: datetime) -> str:
    """Default export file name (e.g., "expenses-2025-01-31.csv")."""
    return f"expenses-{now.strftime('%Y-%m-%d')}.csv"


def parse_csv_row(row: dict[str, str]) -> ParsedExpense | None:
    """Parse one exported CSV row.

    Args:
        row: CSV row as dictionary keyed by header.

    Returns:
        ParsedExpense if valid, None if the row should be skipped.
    """
    raw_date = (row.get("Date") or "").strip()
    if not raw_date:
        return None
    try:
        expense_date = dates.parse_date_label(raw_date)
    except ValueError:
        try:
            expense_date = date.fromisoformat(raw_date[:10])
        except ValueError:
            return None

    amount = parse_amount(row.get("Amount") or "")
    if amount is None or amount <= 0:
        return None

    category = parse_category(row.get("Category") or "")
    if category is None:
        return None

    description = row.get("Description") or ""

    return ParsedExpense(date=expense_date, amount=amount, category=category, description=description)


def parse_expenses_csv(text: str) -> list[ParsedExpense]:
    """Parse CSV text produced by export_to_csv.

    Args:
        text: Full CSV content including the header row.

    Returns:
        Parsed rows in file order; invalid rows are skipped.
    """
    reader = csv.DictReader(io.StringIO(text))
    parsed = []
    for row in reader:
        expense = parse_csv_row(row)
        if expense is not None:
            parsed.append(expense)
    return parsed
