"""CSV export and import commands."""

import logging
import sqlite3
import sys
import tomllib
from pathlib import Path

from rich.console import Console

from spendview.commands.report import resolve_filters
from spendview.config import load_display_settings
from spendview.dates import system_clock
from spendview.domain.expenses import create_expense, format_amount, validate_expense
from spendview.domain.export import export_filename, export_to_csv, parse_expenses_csv
from spendview.domain.filters import filter_expenses
from spendview.domain.models import FilterSpec, SortDirection, SortField, SortSpec
from spendview.domain.sorting import sort_expenses
from spendview.store.queries import get_all_expenses, insert_expense
from spendview.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)


def export_command(
    spec: FilterSpec,
    saved_name: str | None = None,
    output: str | None = None,
    sort_field: SortField | None = None,
    sort_direction: SortDirection | None = None,
) -> None:
    """Export expenses matching the filters to a CSV file."""
    now = system_clock()

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

    filtered = filter_expenses(expenses, spec, now)
    if sort_field or sort_direction:
        sort = SortSpec(field=sort_field or settings.sort.field, direction=sort_direction or settings.sort.direction)
        filtered = sort_expenses(filtered, sort)

    output_path = Path(output).expanduser() if output else Path.cwd() / export_filename(now)

    try:
        output_path.write_text(export_to_csv(filtered), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    logger.info("Wrote %d rows to %s", len(filtered), output_path)
    console.print(f"[green]✓[/green] Exported {len(filtered)} expenses to: {output_path}")


def import_command(csv_path: str) -> None:
    """Import expenses from a CSV file in the export format."""
    db_path = get_db_path()
    path = Path(csv_path).expanduser()

    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        console.print(f"[red]Could not read {path}: {e}[/red]", style="bold")
        sys.exit(1)

    parsed = parse_expenses_csv(text)
    if not parsed:
        console.print("[yellow]No valid expense rows found[/yellow]")
        return

    now = system_clock()
    imported = 0
    skipped = 0

    try:
        for row in parsed:
            error = validate_expense(format_amount(row["amount"]), row["category"].value, row["description"])
            if error:
                logger.warning("Skipping row %r: %s", row["description"], error)
                skipped += 1
                continue
            insert_expense(
                create_expense(row["date"], row["amount"], row["category"], row["description"], now),
                db_path,
            )
            imported += 1
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Imported {imported} expenses from {path}")
    if skipped:
        console.print(f"[yellow]Skipped {skipped} invalid rows[/yellow]")
