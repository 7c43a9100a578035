"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from spendview.store.queries import (
    delete_expense,
    delete_filter_preset,
    get_all_expenses,
    get_expense,
    get_filter_preset_by_name,
    get_filter_presets,
    insert_expense,
    save_filter_preset,
    update_expense_record,
)
from spendview.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_expense",
    "delete_filter_preset",
    "get_all_expenses",
    "get_expense",
    "get_filter_preset_by_name",
    "get_filter_presets",
    "insert_expense",
    "save_filter_preset",
    "update_expense_record",
]
