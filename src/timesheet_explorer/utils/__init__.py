"""Utility functions for timesheet_explorer."""

from timesheet_explorer.utils.date_parser import parse_date, parse_work_day
from timesheet_explorer.utils.hours_parser import parse_hours

__all__ = ["parse_date", "parse_work_day", "parse_hours"]
