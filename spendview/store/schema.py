"""Database schema initialization."""

import logging
import os
import sqlite3
from pathlib import Path

from spendview.config import load_storage_path

logger = logging.getLogger(__name__)


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_default_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "spendview" / "spendview.db"


def get_db_path() -> Path:
    """Get the database path, honouring [storage] db_path from the config file."""
    return load_storage_path() or get_default_db_path()


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Initializing database at %s", db_path)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        # Amounts are stored as decimal strings to keep exact values
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS expenses (
                id TEXT PRIMARY KEY,
                date TEXT NOT NULL,
                amount TEXT NOT NULL,
                category TEXT NOT NULL,
                description TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS filter_presets (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL UNIQUE,
                filters TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """
        )

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
