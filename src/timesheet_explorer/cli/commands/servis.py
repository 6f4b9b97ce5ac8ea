"""Servis label commands."""

import click

from timesheet_explorer.cli.error_handling import fail, handle_domain_error
from timesheet_explorer.cli.session_context import load_cli_session, save_cli_session
from timesheet_explorer.domain.errors import DomainError


@click.group()
def servis_group():
    """Manage display labels for Servis codes."""
    pass


@servis_group.command("list")
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Also list codes seen in the records that have no label",
)
@click.pass_context
def list_servis(ctx, show_all: bool):
    """List Servis codes and their labels."""
    session = load_cli_session(ctx)
    codes = dict(session.servis)
    if show_all:
        for record in session.records:
            if record.servis and record.servis not in codes:
                codes[record.servis] = ""

    if not codes:
        click.echo("No Servis codes found.")
        return

    click.echo(f"\n{'Code':<20} {'Label':<40}")
    click.echo("-" * 61)
    for code in sorted(codes):
        click.echo(f"{code:<20} {codes[code] or '-':<40}")


@servis_group.command("set")
@click.argument("code")
@click.argument("label")
@click.pass_context
def set_servis(ctx, code: str, label: str):
    """Set the label for a Servis code (an empty label removes it)."""
    session = load_cli_session(ctx)
    try:
        session.servis.set(code, label)
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_cli_session(ctx, session)

    if label.strip():
        click.echo(f"Servis '{code.strip()}' is now shown as '{session.servis.display_name(code.strip())}'")
    else:
        click.echo(f"Removed label for Servis '{code.strip()}'")


@servis_group.command("remove")
@click.argument("code")
@click.pass_context
def remove_servis(ctx, code: str):
    """Remove the label for a Servis code."""
    session = load_cli_session(ctx)
    if session.servis.label_for(code) is None:
        fail(ctx, f"No label for Servis '{code}'")
    session.servis.remove(code)
    save_cli_session(ctx, session)
    click.echo(f"Removed label for Servis '{code}'")


def register_commands(cli):
    """Register servis commands with main CLI."""
    cli.add_command(servis_group, name="servis")
