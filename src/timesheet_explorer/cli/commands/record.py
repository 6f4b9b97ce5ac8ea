"""Timesheet record listing and override editing commands."""

import click

from timesheet_explorer.cli.error_handling import fail, handle_domain_error
from timesheet_explorer.cli.filter_options import build_filter_spec, filter_options
from timesheet_explorer.cli.session_context import load_cli_session, save_cli_session
from timesheet_explorer.domain.errors import DomainError
from timesheet_explorer.domain.records import OVERRIDE_FIELDS, RecordService


def _filtered_view(ctx, filters):
    session = load_cli_session(ctx)
    spec = build_filter_spec(ctx, filters)
    return session, session.filter_engine().filter(session.records, spec)


@click.group()
def record_group():
    """List timesheet records and edit their team/project overrides."""
    pass


@record_group.command("list")
@click.option("--limit", type=int, default=None, help="Show at most this many records")
@filter_options
@click.pass_context
def list_records(ctx, limit: int | None, **filters):
    """List (filtered) records with their view index and attribution.

    The index shown is the position in the filtered view; pass the same
    filters to 'record edit' and 'record batch'.
    """
    session, view = _filtered_view(ctx, filters)
    if not view:
        click.echo("No records found")
        return

    resolver = session.resolver()
    shown = view if limit is None else view[:limit]

    click.echo(
        f"\n{'#':>5}  {'Date':<10}  {'Name':<25} {'Issue':<12} {'Hours':>6}  "
        f"{'Team':<18} {'Project':<18}"
    )
    click.echo("-" * 104)
    for index, record in enumerate(shown):
        attribution = resolver.current_attribution(record)
        marker = "*" if record.overrides is not None else " "
        click.echo(
            f"{index:>5}{marker} {record.work_day or '-':<10}  {record.full_name[:25]:<25} "
            f"{record.issue_key[:12]:<12} {record.hours:>6.2f}  "
            f"{(attribution.team or '-')[:18]:<18} {(attribution.project or '-')[:18]:<18}"
        )

    click.echo(f"\nShowing {len(shown)} of {len(view)} records (* = manual override)")


@record_group.command("edit")
@click.argument("index", type=int)
@click.option("--set-team", "override_team", default="", help="Team override (omit to clear)")
@click.option("--set-project", "override_project", default="", help="Project override (omit to clear)")
@filter_options
@click.pass_context
def edit_record(ctx, index: int, override_team: str, override_project: str, **filters):
    """Set the team and project overrides of one record in the filtered view."""
    session, view = _filtered_view(ctx, filters)
    try:
        session.check_attributes(team=override_team, project=override_project)
        record = RecordService(session.records, session.resolver()).set_overrides(
            view, index, override_team, override_project
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_cli_session(ctx, session)

    click.echo(
        f"Updated record {index} ({record.full_name}, {record.issue_key}): "
        f"team={record.override_team or '-'}, project={record.override_project or '-'}"
    )


@record_group.command("batch")
@click.option("--field", type=click.Choice(OVERRIDE_FIELDS), required=True, help="Attribute to set")
@click.option("--value", required=True, help="Value to assign")
@click.option("--all", "select_all", is_flag=True, help="Select every record in the filtered view")
@click.argument("indices", nargs=-1, type=int)
@filter_options
@click.pass_context
def batch_edit(ctx, field: str, value: str, select_all: bool, indices: tuple[int, ...], **filters):
    """Set one override on the selected records of the filtered view."""
    session, view = _filtered_view(ctx, filters)
    if select_all:
        indices = tuple(range(len(view)))
    if not indices:
        fail(ctx, "Select at least one record (INDICES or --all)")

    try:
        session.check_attributes(**{field: value})
        result = RecordService(session.records, session.resolver()).batch_update(
            view, indices, field, value
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_cli_session(ctx, session)

    click.echo(f"Updated {result.updated} record(s) with {field} '{value}'")
    if result.skipped:
        click.echo(f"Skipped {result.skipped} index(es) outside the filtered view")


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(record_group, name="record")
