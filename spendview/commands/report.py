"""List and summary commands for viewing expense data."""

import logging
import sqlite3
import sys
import tomllib
from dataclasses import replace
from decimal import Decimal
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spendview.commands.expenses import normalize_date
from spendview.config import load_display_settings
from spendview.dates import system_clock
from spendview.domain.expenses import format_currency, parse_amount
from spendview.domain.filters import filter_expenses
from spendview.domain.grouping import group_expenses
from spendview.domain.models import (
    CATEGORY_COLORS,
    Category,
    DatePreset,
    Expense,
    FilterSpec,
    GroupKey,
    Money,
    SortDirection,
    SortField,
    SortSpec,
    SummaryView,
    ViewMode,
)
from spendview.domain.sorting import sort_expenses
from spendview.domain.summary import calculate_summary, total_amount
from spendview.store.queries import get_all_expenses, get_filter_preset_by_name
from spendview.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)


def build_filter_spec(
    categories: list[Category] | None = None,
    since: str | None = None,
    until: str | None = None,
    date_preset: DatePreset | None = None,
    search: str | None = None,
    min_amount: str | None = None,
    max_amount: str | None = None,
) -> FilterSpec:
    """Build a FilterSpec from raw command-line options.

    Raises:
        ValueError: If a date or amount cannot be parsed.
    """

    def _money(value: str | None, name: str) -> Money | None:
        if value is None:
            return None
        parsed = parse_amount(value)
        if parsed is None:
            raise ValueError(f"Invalid {name} amount '{value}'")
        return parsed

    return FilterSpec(
        categories=frozenset(categories) if categories else None,
        start_date=normalize_date(since) if since else None,
        end_date=normalize_date(until) if until else None,
        date_preset=date_preset,
        search_query=search or None,
        min_amount=_money(min_amount, "minimum"),
        max_amount=_money(max_amount, "maximum"),
    )


def filter_spec_or_exit(**options: Any) -> FilterSpec:
    """build_filter_spec for command handlers: report bad input and exit."""
    try:
        return build_filter_spec(**options)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def merge_filters(saved: FilterSpec, overrides: FilterSpec) -> FilterSpec:
    """Apply explicitly given options on top of a saved preset's filters."""
    changes = {
        name: getattr(overrides, name)
        for name in (
            "categories",
            "start_date",
            "end_date",
            "date_preset",
            "search_query",
            "min_amount",
            "max_amount",
        )
        if getattr(overrides, name) is not None
    }
    return replace(saved, **changes)


def resolve_filters(spec: FilterSpec, saved_name: str | None) -> FilterSpec:
    """Combine command-line filters with a saved preset, if one is named.

    Raises:
        ValueError: If the named preset does not exist or cannot be parsed.
        sqlite3.Error: If database operation fails.
    """
    if not saved_name:
        return spec
    preset = get_filter_preset_by_name(saved_name, get_db_path())
    if preset is None:
        raise ValueError(f"No saved filter named '{saved_name}'")
    logger.debug("Applying saved filter %r", saved_name)
    return merge_filters(preset.filters, spec)


def category_markup(category: Category) -> str:
    """Category name coloured with its display colour."""
    return f"[{CATEGORY_COLORS[category]}]{category.value}[/]"


def render_group_table(label: str, expenses: list[Expense], view_mode: ViewMode) -> None:
    """Render one group of expenses as a table.

    Args:
        label: Group label used as the table title.
        expenses: Records in display order.
        view_mode: LIST or DETAILED.
    """
    subtotal = format_currency(total_amount(expenses))
    table = Table(title=f"{escape(label)} ({len(expenses)} - {subtotal})")

    if view_mode == ViewMode.DETAILED:
        table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    if view_mode == ViewMode.DETAILED:
        table.add_column("Updated", style="dim")

    for expense in expenses:
        row = [
            expense.date.isoformat(),
            escape(expense.description),
            category_markup(expense.category),
            format_currency(expense.amount),
        ]
        if view_mode == ViewMode.DETAILED:
            row = [expense.id[:8], *row, expense.updated_at.strftime("%Y-%m-%d %H:%M")]
        table.add_row(*row)

    console.print(table)


def render_group_compact(label: str, expenses: list[Expense]) -> None:
    """Render one group of expenses as plain lines."""
    console.print(f"[bold cyan]{escape(label)}[/bold cyan] [dim]({len(expenses)})[/dim]")
    for expense in expenses:
        amount = format_currency(expense.amount)
        console.print(f"  {expense.date.isoformat()}  {escape(expense.description[:30]):30} {amount:>12}")


def list_command(
    spec: FilterSpec,
    saved_name: str | None = None,
    sort_field: SortField | None = None,
    sort_direction: SortDirection | None = None,
    group_by: GroupKey | None = None,
    view_mode: ViewMode | None = None,
    limit: int | None = None,
    show_all: bool = False,
) -> None:
    """Filter, sort, group and display expenses."""
    try:
        db_path = get_db_path()
        settings = load_display_settings()
        spec = resolve_filters(spec, saved_name)
        expenses = get_all_expenses(db_path)
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not expenses:
        console.print("[yellow]No expenses yet[/yellow]")
        return

    sort = SortSpec(
        field=sort_field or settings.sort.field,
        direction=sort_direction or settings.sort.direction,
    )
    mode = view_mode or settings.view_mode

    filtered = filter_expenses(expenses, spec, system_clock())
    ordered = sort_expenses(filtered, sort)

    if not ordered:
        console.print("[yellow]No expenses match the current filters[/yellow]")
        if spec.min_amount is not None and spec.max_amount is not None and spec.min_amount > spec.max_amount:
            console.print("[dim]Minimum amount is greater than maximum amount[/dim]")
        if spec.start_date and spec.end_date and spec.start_date > spec.end_date:
            console.print("[dim]Start date is after end date[/dim]")
        return

    shown = ordered if show_all else ordered[: limit or settings.items_per_page]
    groups = group_expenses(shown, group_by or settings.group_by)

    for label, members in groups.items():
        if mode == ViewMode.COMPACT:
            render_group_compact(label, members)
        else:
            render_group_table(label, members, mode)

    console.print(
        f"\nShowing {len(shown)} of {len(filtered)} matching expenses ({len(expenses)} total) - "
        f"[bold]{format_currency(total_amount(filtered))}[/bold]"
    )


def render_summary(summary: SummaryView) -> None:
    """Render summary statistics."""
    console.print("[bold cyan]Summary[/bold cyan]\n")
    console.print(f"  [bold]Total expenses:[/bold] {format_currency(summary.total_expenses)}")
    console.print(f"  [bold]This month:[/bold] {format_currency(summary.monthly_total)}")
    console.print(f"  [bold]Expense count:[/bold] {summary.expense_count}")
    console.print(f"  [bold]Average expense:[/bold] {format_currency(summary.average_expense)}")
    console.print(f"  [bold]Average per day:[/bold] {format_currency(summary.average_daily)}")
    console.print(f"  [bold]Average per month:[/bold] {format_currency(summary.average_monthly)}")

    if summary.top_category:
        top = summary.top_category
        console.print(
            f"  [bold]Top category:[/bold] {category_markup(top.category)} ({format_currency(top.amount)})"
        )
    if summary.highest_expense:
        highest = summary.highest_expense
        console.print(f"  [bold]Highest:[/bold] {escape(highest.description)} ({format_currency(highest.amount)})")
    if summary.lowest_expense:
        lowest = summary.lowest_expense
        console.print(f"  [bold]Lowest:[/bold] {escape(lowest.description)} ({format_currency(lowest.amount)})")

    table = Table(title="By category")
    table.add_column("Category")
    table.add_column("Total", justify="right")
    table.add_column("Share", justify="right")
    for category, amount in summary.category_totals.items():
        share = amount / summary.total_expenses * 100 if summary.total_expenses else Decimal(0)
        table.add_row(category_markup(category), format_currency(amount), f"{share:.0f}%")
    console.print()
    console.print(table)


def summary_command(saved_name: str | None = None) -> None:
    """Show summary statistics over all expenses, or over a saved filter."""
    db_path = get_db_path()
    now = system_clock()

    try:
        expenses = get_all_expenses(db_path)
        if saved_name:
            spec = resolve_filters(FilterSpec(), saved_name)
            expenses = filter_expenses(expenses, spec, now)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    render_summary(calculate_summary(expenses, now))
