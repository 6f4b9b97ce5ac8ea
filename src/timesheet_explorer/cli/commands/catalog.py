"""Project, team and role management commands."""

import click

from timesheet_explorer.cli.error_handling import handle_domain_error
from timesheet_explorer.cli.session_context import load_cli_session, save_cli_session
from timesheet_explorer.domain.errors import DomainError


def make_catalog_group(attribute: str) -> click.Group:
    """Build the list/add/rename/delete group for one catalog."""

    @click.group(name=attribute, help=f"Manage {attribute}s.")
    def group():
        pass

    @group.command("list")
    @click.pass_context
    def list_values(ctx):
        session = load_cli_session(ctx)
        catalog = session.catalog(attribute)
        if not len(catalog):
            click.echo(f"No {attribute}s found.")
            return

        click.echo(f"\n{attribute.capitalize()}s:")
        for index, value in enumerate(catalog, start=1):
            click.echo(f"  {index:>3}. {value} ({catalog.usage_count(value)} people)")

    list_values.help = f"List {attribute}s with the number of people assigned."

    @group.command("add")
    @click.argument("name")
    @click.pass_context
    def add_value(ctx, name: str):
        session = load_cli_session(ctx)
        try:
            session.catalog(attribute).add(name)
        except DomainError as e:
            handle_domain_error(ctx, e)
        save_cli_session(ctx, session)
        click.echo(f"Created {attribute} '{name.strip()}'")

    add_value.help = f"Add a {attribute}."

    @group.command("rename")
    @click.argument("old_name")
    @click.argument("new_name")
    @click.pass_context
    def rename_value(ctx, old_name: str, new_name: str):
        session = load_cli_session(ctx)
        try:
            updated = session.catalog(attribute).rename(old_name, new_name)
        except DomainError as e:
            handle_domain_error(ctx, e)
        save_cli_session(ctx, session)
        click.echo(f"Renamed {attribute} '{old_name}' to '{new_name.strip()}' ({updated} people updated)")

    rename_value.help = f"Rename a {attribute} and update the people assigned to it."

    @group.command("delete")
    @click.argument("name")
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation")
    @click.pass_context
    def delete_value(ctx, name: str, yes: bool):
        if not yes:
            click.confirm(f"Delete {attribute} '{name}'?", abort=True)
        session = load_cli_session(ctx)
        try:
            updated = session.catalog(attribute).delete(name)
        except DomainError as e:
            handle_domain_error(ctx, e)
        save_cli_session(ctx, session)
        click.echo(f"Deleted {attribute} '{name}' ({updated} people cleared)")

    delete_value.help = (
        f"Delete a {attribute}; people lose it, record overrides keep their value."
    )

    return group


def register_commands(cli):
    """Register catalog commands with main CLI."""
    for attribute in ("project", "team", "role"):
        cli.add_command(make_catalog_group(attribute))
