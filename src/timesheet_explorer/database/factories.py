"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from timesheet_explorer.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks TIMESHEET_DB_PATH
            environment variable, then defaults to ~/.timesheet_explorer/timesheets.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("TIMESHEET_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".timesheet_explorer"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "timesheets.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
