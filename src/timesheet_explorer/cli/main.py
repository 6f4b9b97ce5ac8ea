"""Main CLI entry point."""

import click

from timesheet_explorer.cli.log_config import LOG_LEVELS, configure_logging
from timesheet_explorer.database.factories import create_sqlite_database

# Import and register all commands at module level
from timesheet_explorer.cli.commands import (
    catalog,
    data,
    import_cmd,
    person,
    record,
    report,
    servis,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TIMESHEET_DB_PATH environment variable)",
    envvar="TIMESHEET_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="TIMESHEET_LOG_LEVEL",
    help="Diagnostic log level written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Timesheet Explorer - worklog reporting.

    Import timesheet CSV exports, attribute hours to people, teams and
    projects, and summarize them as ranked totals or time series.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
import_cmd.register_commands(cli)
catalog.register_commands(cli)
person.register_commands(cli)
servis.register_commands(cli)
data.register_commands(cli)
record.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
