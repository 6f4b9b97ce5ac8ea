"""Person registry commands."""

from pathlib import Path

import click

from timesheet_explorer.cli.error_handling import handle_domain_error
from timesheet_explorer.cli.filter_options import build_filter_spec, filter_options
from timesheet_explorer.cli.session_context import load_cli_session, save_cli_session
from timesheet_explorer.domain.admin_data import import_people_from_csv
from timesheet_explorer.domain.errors import DomainError
from timesheet_explorer.domain.records import RecordService
from timesheet_explorer.domain.registry import person_hours


@click.group()
def person_group():
    """Manage people and their team/project/role."""
    pass


@person_group.command("list")
@click.option("--search", default="", help="Only names containing this text")
@click.option("--team", help="Only people in this team")
@click.option("--project", help="Only people on this project")
@click.pass_context
def list_people(ctx, search: str, team: str | None, project: str | None):
    """List people with their attributes and total hours."""
    session = load_cli_session(ctx)

    names = sorted(
        name
        for name, entry in session.people
        if search.lower() in name.lower()
        and (not team or entry.team == team)
        and (not project or entry.project == project)
    )
    if not names:
        click.echo("No people")
        return

    click.echo(f"\n{'Name':<30} {'Team':<20} {'Project':<20} {'Role':<20} {'Hours':>8}")
    click.echo("-" * 102)
    for name in names:
        entry = session.people.get(name)
        hours = person_hours(name, session.records)
        click.echo(
            f"{name:<30} {entry.team or '-':<20} {entry.project or '-':<20} "
            f"{entry.role or '-':<20} {hours:>8.1f}"
        )


@person_group.command("add")
@click.argument("name")
@click.option("--team", help="Team name")
@click.option("--project", help="Project name")
@click.option("--role", help="Role name")
@click.pass_context
def add_person(ctx, name: str, team: str | None, project: str | None, role: str | None):
    """Register a person key (matched as a substring of 'Full name')."""
    session = load_cli_session(ctx)
    try:
        session.check_attributes(team=team, project=project, role=role)
        session.people.add(name, team=team, project=project, role=role)
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_cli_session(ctx, session)
    click.echo(f"Created person '{name.strip()}'")


@person_group.command("update")
@click.argument("name")
@click.option("--team", help="Team name (omit to clear)")
@click.option("--project", help="Project name (omit to clear)")
@click.option("--role", help="Role name (omit to clear)")
@click.pass_context
def update_person(ctx, name: str, team: str | None, project: str | None, role: str | None):
    """Replace a person's team, project and role."""
    session = load_cli_session(ctx)
    try:
        session.check_attributes(team=team, project=project, role=role)
        session.people.update(name, team=team, project=project, role=role)
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_cli_session(ctx, session)
    click.echo(f"Updated person '{name}'")


@person_group.command("rename")
@click.argument("old_name")
@click.argument("new_name")
@click.pass_context
def rename_person(ctx, old_name: str, new_name: str):
    """Rename a person key, keeping its matching priority."""
    session = load_cli_session(ctx)
    try:
        session.people.rename(old_name, new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_cli_session(ctx, session)
    click.echo(f"Renamed person '{old_name}' to '{new_name.strip()}'")


@person_group.command("delete")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_person(ctx, name: str, yes: bool):
    """Remove a person from the registry."""
    if not yes:
        click.confirm(f"Delete person '{name}'?", abort=True)
    session = load_cli_session(ctx)
    try:
        session.people.delete(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_cli_session(ctx, session)
    click.echo(f"Deleted person '{name}'")


@person_group.command("import-csv")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_people(ctx, csv_file: str):
    """Register every new short name found in a timesheet CSV."""
    session = load_cli_session(ctx)
    text = Path(csv_file).read_text(encoding="utf-8-sig")
    imported = import_people_from_csv(text, session.people)
    save_cli_session(ctx, session)
    click.echo(f"Imported {imported} new people from CSV")


@person_group.command("apply-mapping")
@click.option(
    "--override-existing",
    is_flag=True,
    help="Also update records that already have a team or project",
)
@filter_options
@click.pass_context
def apply_mapping(ctx, override_existing: bool, **filters):
    """Copy each matched person's team/project into record overrides."""
    session = load_cli_session(ctx)
    spec = build_filter_spec(ctx, filters)
    view = session.filter_engine().filter(session.records, spec)

    if not view:
        click.echo("No filtered data to apply mapping to.")
        return

    service = RecordService(session.records, session.resolver())
    result = service.apply_person_mapping(view, override_existing=override_existing)
    save_cli_session(ctx, session)
    click.echo("Person mapping applied!")
    click.echo(f"  {result.updated} record(s) updated")
    click.echo(f"  {result.skipped} record(s) skipped (already had values)")


def register_commands(cli):
    """Register person commands with main CLI."""
    cli.add_command(person_group, name="person")
