"""Admin commands for initializing the database and configuration."""

import sqlite3
import sys
import tomllib

from rich.console import Console

from spendview.config import create_default_config, get_config_path, load_config
from spendview.store.schema import get_db_path, get_default_db_path, init_database

console = Console()


def ensure_valid_config() -> None:
    """Exit with a readable message when the config file cannot be parsed."""
    try:
        load_config()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file {get_config_path()}: {e}[/red]", style="bold")
        console.print("[yellow]Fix it by hand or run 'spendview init --force' to reset it[/yellow]")
        sys.exit(1)


def init_command(force: bool = False) -> None:
    """Initialize spendview database and configuration."""
    config_path = get_config_path()
    config_exists = config_path.exists()

    try:
        db_path = get_db_path()
    except tomllib.TOMLDecodeError as e:
        if not force:
            console.print(f"[red]Invalid config file {config_path}: {e}[/red]", style="bold")
            console.print("[yellow]Use 'spendview init --force' to reset it to defaults[/yellow]")
            sys.exit(1)
        db_path = get_default_db_path()

    try:
        # The schema uses CREATE IF NOT EXISTS, so re-running never loses data
        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        if config_exists and not force:
            console.print(f"[dim]Keeping existing config: {config_path}[/dim]")
            console.print("[yellow]Use 'spendview init --force' to reset it to defaults[/yellow]")
        else:
            console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
            create_default_config(config_path)
            console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
