"""Work-date bounds for the shared filter options."""

from datetime import date
from typing import Optional

import click

from timesheet_explorer.cli.error_handling import fail
from timesheet_explorer.utils.date_parser import PERIODS, get_date_range, parse_date


def _parse_bound(ctx: click.Context, label: str, value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        fail(ctx, f"Invalid {label} date: {e}")


def resolve_work_date_bounds(
    ctx: click.Context,
    *,
    start_date: Optional[str],
    end_date: Optional[str],
    period_flags: dict[str, bool],
) -> tuple[Optional[str], Optional[str]]:
    """Turn --start-date/--end-date or one period flag into FilterSpec bounds.

    Records are compared on the ``YYYY-MM-DD`` part of their work date, so
    the bounds are returned as ISO date strings; an open side is None.
    """
    selected = [period for period in PERIODS if period_flags.get(period)]

    if len(selected) > 1:
        flags = ", ".join(f"--{period}" for period in selected)
        fail(ctx, f"Only one period option can be used at a time (got {flags}).")

    if selected:
        if start_date or end_date:
            fail(ctx, f"--{selected[0]} cannot be combined with --start-date or --end-date.")
        start, end = get_date_range(selected[0])
    else:
        start = _parse_bound(ctx, "start", start_date)
        end = _parse_bound(ctx, "end", end_date)
        if start and end and start > end:
            fail(ctx, f"Start date {start.isoformat()} is after end date {end.isoformat()}.")

    return (
        start.isoformat() if start else None,
        end.isoformat() if end else None,
    )
