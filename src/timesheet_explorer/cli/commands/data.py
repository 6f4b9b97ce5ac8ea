"""Administrative data interchange commands."""

from pathlib import Path

import click

from timesheet_explorer.cli.error_handling import handle_domain_error
from timesheet_explorer.cli.session_context import load_cli_session, save_cli_session
from timesheet_explorer.domain.admin_data import export_admin_json, import_admin_json
from timesheet_explorer.domain.errors import DomainError


@click.group()
def data_group():
    """Export or import projects, teams, roles and people as JSON."""
    pass


@data_group.command("export-json")
@click.argument("output", type=click.Path())
@click.pass_context
def export_json(ctx, output: str):
    """Write the administrative data to a JSON file."""
    session = load_cli_session(ctx)
    Path(output).write_text(export_admin_json(session), encoding="utf-8")
    click.echo(
        f"Exported {len(session.people)} people, {len(session.projects)} projects, "
        f"{len(session.teams)} teams and {len(session.roles)} roles to {output}"
    )


@data_group.command("import-json")
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_json(ctx, input_file: str, yes: bool):
    """Replace projects, teams, roles and people from a JSON file."""
    if not yes:
        click.confirm(
            "This replaces all projects, teams, roles and people. Continue?", abort=True
        )
    session = load_cli_session(ctx)
    try:
        import_admin_json(session, Path(input_file).read_text(encoding="utf-8"))
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_cli_session(ctx, session)
    click.echo(
        f"Imported {len(session.people)} people, {len(session.projects)} projects, "
        f"{len(session.teams)} teams and {len(session.roles)} roles"
    )


def register_commands(cli):
    """Register data interchange commands with main CLI."""
    cli.add_command(data_group, name="data")
