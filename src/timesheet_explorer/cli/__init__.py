"""Command-line interface for timesheet_explorer."""
