"""Database layer for timesheet_explorer application."""

from timesheet_explorer.database.base import Database
from timesheet_explorer.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
