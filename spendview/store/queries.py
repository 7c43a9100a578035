"""Database query functions for expenses and filter presets."""

import json
import logging
import sqlite3
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from spendview.domain.models import Category, Expense, FilterPreset, Money
from spendview.domain.presets import filter_spec_from_dict, filter_spec_to_dict
from spendview.store.schema import get_db_path

logger = logging.getLogger(__name__)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_expense(row: sqlite3.Row) -> Expense:
    return Expense(
        id=row["id"],
        date=date.fromisoformat(row["date"]),
        amount=Money(Decimal(row["amount"])),
        category=Category(row["category"]),
        description=row["description"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def _expense_params(expense: Expense) -> tuple[str, str, str, str, str, str, str]:
    return (
        expense.date.isoformat(),
        str(expense.amount),
        expense.category.value,
        expense.description,
        expense.created_at.isoformat(),
        expense.updated_at.isoformat(),
        expense.id,
    )


def insert_expense(expense: Expense, db_path: Path | None = None) -> None:
    """Insert a new expense.

    Args:
        expense: Record to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails (including duplicate id).
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO expenses (date, amount, category, description, created_at, updated_at, id)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                _expense_params(expense),
            )
            conn.commit()
            logger.debug("Inserted expense %s", expense.id)
        except sqlite3.Error:
            conn.rollback()
            raise


def update_expense_record(expense: Expense, db_path: Path | None = None) -> bool:
    """Replace the stored fields of an existing expense.

    Args:
        expense: New version of the record (same id).
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a record was updated, False if the id is unknown.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE expenses
                SET date = ?, amount = ?, category = ?, description = ?, created_at = ?, updated_at = ?
                WHERE id = ?
                """,
                _expense_params(expense),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_expense(expense_id: str, db_path: Path | None = None) -> bool:
    """Delete an expense by id.

    Returns:
        True if a record was deleted, False if the id is unknown.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def get_expense(expense_id: str, db_path: Path | None = None) -> Expense | None:
    """Get a single expense by id, or by unique id prefix.

    Args:
        expense_id: Full id or a prefix matching exactly one record.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Expense or None if no single record matches.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM expenses WHERE id = ?", (expense_id,))
        row = cursor.fetchone()
        if row:
            return _row_to_expense(row)

        cursor.execute(
            "SELECT * FROM expenses WHERE substr(id, 1, length(?)) = ? LIMIT 2",
            (expense_id, expense_id),
        )
        rows = cursor.fetchall()
        if len(rows) == 1:
            return _row_to_expense(rows[0])
        return None


def get_all_expenses(db_path: Path | None = None) -> list[Expense]:
    """Get a snapshot of every expense, most recently created first.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM expenses ORDER BY created_at DESC, rowid DESC")
        return [_row_to_expense(row) for row in cursor.fetchall()]


def _row_to_preset(row: sqlite3.Row) -> FilterPreset:
    try:
        filters = filter_spec_from_dict(json.loads(row["filters"]))
    except json.JSONDecodeError as e:
        raise ValueError(f"Stored preset '{row['name']}' is not valid JSON") from e
    return FilterPreset(
        id=row["id"],
        name=row["name"],
        filters=filters,
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def save_filter_preset(preset: FilterPreset, db_path: Path | None = None) -> None:
    """Save a filter preset, replacing any preset with the same name.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM filter_presets WHERE name = ?", (preset.name,))
            cursor.execute(
                "INSERT INTO filter_presets (id, name, filters, created_at) VALUES (?, ?, ?, ?)",
                (
                    preset.id,
                    preset.name,
                    json.dumps(filter_spec_to_dict(preset.filters)),
                    preset.created_at.isoformat(),
                ),
            )
            conn.commit()
            logger.debug("Saved filter preset %r", preset.name)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_filter_presets(db_path: Path | None = None) -> list[FilterPreset]:
    """Get all filter presets ordered by creation time.

    Raises:
        sqlite3.Error: If database operation fails.
        ValueError: If a stored preset cannot be parsed.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM filter_presets ORDER BY created_at, rowid")
        return [_row_to_preset(row) for row in cursor.fetchall()]


def get_filter_preset_by_name(name: str, db_path: Path | None = None) -> FilterPreset | None:
    """Get a filter preset by name.

    Raises:
        sqlite3.Error: If database operation fails.
        ValueError: If the stored preset cannot be parsed.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM filter_presets WHERE name = ?", (name,))
        row = cursor.fetchone()
        return _row_to_preset(row) if row else None


def delete_filter_preset(name: str, db_path: Path | None = None) -> bool:
    """Delete a filter preset by name.

    Returns:
        True if a preset was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM filter_presets WHERE name = ?", (name,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise
