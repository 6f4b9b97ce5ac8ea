"""CLI helpers for loading and saving the stored session."""

import click

from timesheet_explorer.domain.entities import SaveAck
from timesheet_explorer.domain.session import TimesheetSession, load_session, save_session


def load_cli_session(ctx: click.Context) -> TimesheetSession:
    """Load the session from the database attached to the CLI context."""
    return load_session(ctx.obj["db"])


def save_cli_session(ctx: click.Context, session: TimesheetSession) -> SaveAck:
    """Persist the session to the database attached to the CLI context."""
    return save_session(session, ctx.obj["db"])
