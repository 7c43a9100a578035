"""CLI entry point for spendview."""

import logging

import typer
from rich.logging import RichHandler

from spendview.commands.admin import ensure_valid_config, init_command
from spendview.commands.expenses import add_command, delete_command, edit_command
from spendview.commands.export import export_command, import_command
from spendview.commands.presets import preset_delete_command, preset_list_command, preset_save_command
from spendview.commands.report import filter_spec_or_exit, list_command, summary_command
from spendview.domain.models import Category, DatePreset, GroupKey, SortDirection, SortField, ViewMode

app = typer.Typer(
    name="spendview",
    help="Track, filter, summarize and export your expenses",
    add_completion=False,
)

preset_app = typer.Typer(help="Manage saved filters", add_completion=False)
app.add_typer(preset_app, name="preset")

# Filter options shared by list, export and preset save
CATEGORY_OPTION = typer.Option(None, "--category", "-c", case_sensitive=False, help="Category (repeatable)")
SINCE_OPTION = typer.Option(None, "--from", help="Start date, inclusive (YYYY-MM-DD)")
UNTIL_OPTION = typer.Option(None, "--to", help="End date, inclusive (YYYY-MM-DD)")
PERIOD_OPTION = typer.Option(None, "--period", "-p", case_sensitive=False, help="Date preset, e.g. thisMonth")
SEARCH_OPTION = typer.Option(None, "--search", "-s", help="Match description, category or amount")
MIN_OPTION = typer.Option(None, "--min", help="Minimum amount, inclusive")
MAX_OPTION = typer.Option(None, "--max", help="Maximum amount, inclusive")
SAVED_OPTION = typer.Option(None, "--saved", help="Apply a saved filter")
SORT_OPTION = typer.Option(None, "--sort", case_sensitive=False, help="Sort field (default from config)")
DIRECTION_OPTION = typer.Option(None, "--direction", "-d", case_sensitive=False, help="asc or desc")


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Track, filter, summarize and export your expenses."""
    configure_logging(verbose)
    if ctx.invoked_subcommand != "init":
        ensure_valid_config()


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Reset the config file to defaults"),
) -> None:
    """Initialize the spendview database and configuration."""
    init_command(force)


@app.command()
def add(
    description: str,
    amount: str,
    category: str = typer.Option("Other", "--category", "-c", help="Category name"),
    date: str = typer.Option(None, "--date", help="Expense date (default: today)"),
) -> None:
    """Add an expense."""
    add_command(date, description, amount, category)


@app.command()
def edit(
    expense_id: str,
    description: str = typer.Option(None, "--description", help="New description"),
    amount: str = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    date: str = typer.Option(None, "--date", help="New date"),
) -> None:
    """Edit an expense (id or unique id prefix)."""
    edit_command(expense_id, date, description, amount, category)


@app.command()
def delete(expense_id: str) -> None:
    """Delete an expense (id or unique id prefix)."""
    delete_command(expense_id)


@app.command(name="list")
def list_expenses(
    category: list[Category] = CATEGORY_OPTION,
    since: str = SINCE_OPTION,
    until: str = UNTIL_OPTION,
    period: DatePreset = PERIOD_OPTION,
    search: str = SEARCH_OPTION,
    min_amount: str = MIN_OPTION,
    max_amount: str = MAX_OPTION,
    saved: str = SAVED_OPTION,
    sort: SortField = SORT_OPTION,
    direction: SortDirection = DIRECTION_OPTION,
    group: GroupKey = typer.Option(None, "--group", "-g", case_sensitive=False, help="Group expenses"),
    view: ViewMode = typer.Option(None, "--view", case_sensitive=False, help="list, compact or detailed"),
    limit: int = typer.Option(None, "--limit", "-n", help="Maximum expenses to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show every matching expense"),
) -> None:
    """List your expenses, filtered, sorted and grouped."""
    spec = filter_spec_or_exit(
        categories=category,
        since=since,
        until=until,
        date_preset=period,
        search=search,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    list_command(spec, saved, sort, direction, group, view, limit, all)


@app.command()
def summary(
    saved: str = typer.Option(None, "--saved", help="Restrict to a saved filter"),
) -> None:
    """Show totals, averages and extremes of your spending."""
    summary_command(saved)


@app.command()
def export(
    category: list[Category] = CATEGORY_OPTION,
    since: str = SINCE_OPTION,
    until: str = UNTIL_OPTION,
    period: DatePreset = PERIOD_OPTION,
    search: str = SEARCH_OPTION,
    min_amount: str = MIN_OPTION,
    max_amount: str = MAX_OPTION,
    saved: str = SAVED_OPTION,
    sort: SortField = SORT_OPTION,
    direction: SortDirection = DIRECTION_OPTION,
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: expenses-YYYY-MM-DD.csv)"),
) -> None:
    """Export your expenses to CSV."""
    spec = filter_spec_or_exit(
        categories=category,
        since=since,
        until=until,
        date_preset=period,
        search=search,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    export_command(spec, saved, output, sort, direction)


@app.command(name="import")
def import_csv(csv_path: str) -> None:
    """Import expenses from a CSV file written by 'spendview export'."""
    import_command(csv_path)


@preset_app.command(name="save")
def preset_save(
    name: str,
    category: list[Category] = CATEGORY_OPTION,
    since: str = SINCE_OPTION,
    until: str = UNTIL_OPTION,
    period: DatePreset = PERIOD_OPTION,
    search: str = SEARCH_OPTION,
    min_amount: str = MIN_OPTION,
    max_amount: str = MAX_OPTION,
) -> None:
    """Save a set of filters under a name."""
    spec = filter_spec_or_exit(
        categories=category,
        since=since,
        until=until,
        date_preset=period,
        search=search,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    preset_save_command(name, spec)


@preset_app.command(name="list")
def preset_list() -> None:
    """List saved filters."""
    preset_list_command()


@preset_app.command(name="delete")
def preset_delete(name: str) -> None:
    """Delete a saved filter."""
    preset_delete_command(name)


if __name__ == "__main__":
    app()
