"""Saved filter preset commands."""

import sqlite3
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spendview.dates import system_clock
from spendview.domain.expenses import generate_id
from spendview.domain.models import FilterSpec
from spendview.domain.presets import create_filter_preset, filter_spec_to_dict
from spendview.store.queries import delete_filter_preset, get_filter_presets, save_filter_preset
from spendview.store.schema import get_db_path

console = Console()


def describe_filters(spec: FilterSpec) -> str:
    """One-line description of a filter, e.g. "categories=Food; datePreset=thisMonth"."""
    parts = []
    for key, value in filter_spec_to_dict(spec).items():
        if isinstance(value, list):
            value = ",".join(value)
        parts.append(f"{key}={value}")
    return "; ".join(parts) or "(no filters)"


def preset_save_command(name: str, spec: FilterSpec) -> None:
    """Save the given filters under a name."""
    db_path = get_db_path()

    try:
        preset = create_filter_preset(name, spec, generate_id(), system_clock())
        save_filter_preset(preset, db_path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Saved filter '{escape(preset.name)}': {escape(describe_filters(spec))}")


def preset_list_command() -> None:
    """List saved filter presets."""
    db_path = get_db_path()

    try:
        presets = get_filter_presets(db_path)
    except ValueError as e:
        console.print(f"[red]Could not read saved filters: {e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not presets:
        console.print("[dim]No saved filters[/dim]")
        return

    table = Table(title=f"Saved filters ({len(presets)})")
    table.add_column("Name", style="cyan")
    table.add_column("Filters", style="white")
    table.add_column("Created", style="dim")
    for preset in presets:
        table.add_row(
            escape(preset.name),
            escape(describe_filters(preset.filters)),
            preset.created_at.strftime("%Y-%m-%d"),
        )
    console.print(table)


def preset_delete_command(name: str) -> None:
    """Delete a saved filter preset."""
    db_path = get_db_path()

    try:
        deleted = delete_filter_preset(name, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not deleted:
        console.print(f"[red]No saved filter named '{escape(name)}'[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] Deleted saved filter '{escape(name)}'")
