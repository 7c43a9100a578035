"""Expense management commands (add, edit, delete)."""

import logging
import sqlite3
import sys
from datetime import date

import pandas as pd
from rich.console import Console
from rich.markup import escape

from spendview.dates import system_clock
from spendview.domain.expenses import (
    create_expense,
    format_currency,
    parse_amount,
    parse_category,
    update_expense,
    validate_expense,
)
from spendview.domain.models import Expense
from spendview.store.queries import delete_expense, get_expense, insert_expense, update_expense_record
from spendview.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)


def normalize_date(value: str) -> date:
    """Parse a user-entered date.

    Args:
        value: Date as YYYY-MM-DD, DD/MM/YYYY or other common formats.

    Returns:
        Calendar date.

    Raises:
        ValueError: If value cannot be parsed as a date.
    """
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        pass
    try:
        parsed = pd.to_datetime(value, dayfirst=True)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid date '{value}'") from e
    if pd.isna(parsed):
        raise ValueError(f"Invalid date '{value}'")
    return parsed.date()


def print_expense(expense: Expense) -> None:
    """Print the fields of a single expense."""
    console.print(f"  ID: [dim]{expense.id}[/dim]")
    console.print(f"  Date: {expense.date.isoformat()}")
    console.print(f"  Description: {escape(expense.description)}")
    console.print(f"  Amount: {format_currency(expense.amount)}")
    console.print(f"  Category: {expense.category.value}")


def add_command(expense_date: str | None, description: str, amount: str, category: str) -> None:
    """Add an expense.

    Args:
        expense_date: Date of the expense; today if None.
        description: What the money was spent on.
        amount: Amount as entered (e.g., "12.50").
        category: Category name.
    """
    db_path = get_db_path()
    now = system_clock()

    error = validate_expense(amount, category, description)
    parsed_amount = parse_amount(amount)
    parsed_category = parse_category(category)
    if error or parsed_amount is None or parsed_category is None:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    try:
        parsed_date = normalize_date(expense_date) if expense_date else now.date()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    expense = create_expense(parsed_date, parsed_amount, parsed_category, description, now)

    try:
        insert_expense(expense, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    logger.info("Added expense %s", expense.id)
    console.print("[green]✓[/green] Expense added:")
    print_expense(expense)


def edit_command(
    expense_id: str,
    expense_date: str | None = None,
    description: str | None = None,
    amount: str | None = None,
    category: str | None = None,
) -> None:
    """Edit fields of an existing expense.

    Args:
        expense_id: Id (or unique id prefix) of the expense.
        expense_date: New date, if changing.
        description: New description, if changing.
        amount: New amount, if changing.
        category: New category, if changing.
    """
    db_path = get_db_path()

    try:
        existing = get_expense(expense_id, db_path)
        if existing is None:
            console.print(f"[red]Expense {expense_id} not found[/red]")
            sys.exit(1)

        error = validate_expense(
            amount if amount is not None else str(existing.amount),
            category if category is not None else existing.category.value,
            description if description is not None else existing.description,
        )
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)

        changes: dict[str, object] = {}
        if expense_date is not None:
            changes["date"] = normalize_date(expense_date)
        if description is not None:
            changes["description"] = description
        if amount is not None:
            changes["amount"] = parse_amount(amount)
        if category is not None:
            changes["category"] = parse_category(category)

        if not changes:
            console.print("[yellow]Nothing to change[/yellow]")
            return

        updated = update_expense(existing, system_clock(), **changes)
        update_expense_record(updated, db_path)

    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Expense updated:")
    print_expense(updated)


def delete_command(expense_id: str) -> None:
    """Delete an expense.

    Args:
        expense_id: Id (or unique id prefix) of the expense.
    """
    db_path = get_db_path()

    try:
        existing = get_expense(expense_id, db_path)
        if existing is None:
            console.print(f"[red]Expense {expense_id} not found[/red]")
            sys.exit(1)

        delete_expense(existing.id, db_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted: {escape(existing.description)} ({format_currency(existing.amount)})")
