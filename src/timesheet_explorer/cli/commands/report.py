"""Report commands: ranked totals, time series and headline stats."""

import json
from pathlib import Path

import click

from timesheet_explorer.cli.error_handling import handle_domain_error
from timesheet_explorer.cli.filter_options import build_filter_spec, filter_options
from timesheet_explorer.cli.session_context import load_cli_session
from timesheet_explorer.domain.entities import Granularity, ReportType
from timesheet_explorer.domain.errors import DomainError
from timesheet_explorer.domain.report_view import (
    THEMES,
    ReportOverlay,
    category_color,
    ranked_chart_data,
    summary_stats,
    time_series_data,
)
from timesheet_explorer.domain.time_buckets import period_label

REPORT_TYPES = [report_type.value for report_type in ReportType]
GRANULARITIES = [granularity.value for granularity in Granularity]


def _load_overlay(ctx, path: str | None) -> ReportOverlay:
    """Read an overlay file; a missing file yields an empty overlay."""
    if not path or not Path(path).exists():
        return ReportOverlay()
    try:
        return ReportOverlay.from_json(Path(path).read_text(encoding="utf-8"))
    except DomainError as e:
        handle_domain_error(ctx, e)


def _ranked(ctx, report_type: str, filters):
    session = load_cli_session(ctx)
    spec = build_filter_spec(ctx, filters)
    view = session.filter_engine().filter(session.records, spec)
    ranked = session.aggregator().aggregate(view, ReportType(report_type))
    return session, view, ranked


def _report_options(command):
    command = click.option(
        "--overlay",
        "overlay_path",
        type=click.Path(dir_okay=False),
        help="JSON file with display labels, visibility, colors and order",
    )(command)
    command = click.option(
        "--type",
        "report_type",
        type=click.Choice(REPORT_TYPES),
        default=ReportType.PERSON.value,
        show_default=True,
        help="Dimension to group hours by",
    )(command)
    return command


@click.group()
def report_group():
    """Summarize hours by person, team, project and other dimensions."""
    pass


@report_group.command("ranked")
@_report_options
@click.option("--theme", type=click.Choice(list(THEMES)), default="Default", show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print the chart payload as JSON")
@filter_options
@click.pass_context
def ranked_report(ctx, report_type: str, overlay_path: str | None, theme: str, as_json: bool, **filters):
    """Show the top 20 categories ranked by hours."""
    _, view, ranked = _ranked(ctx, report_type, filters)
    overlay = _load_overlay(ctx, overlay_path)

    if as_json:
        click.echo(json.dumps(ranked_chart_data(ranked, overlay), indent=2, ensure_ascii=False))
        return

    if not ranked:
        click.echo("No data to display")
        return

    total = sum(item.value for item in ranked)
    labels = [item.label for item in ranked]

    click.echo(f"\nHours by {report_type} ({len(view)} records)")
    click.echo(f"\n{'#':>3}  {'Category':<40} {'Hours':>10} {'Share':>7}  Color")
    click.echo("-" * 75)
    position = 0
    for item in overlay.apply(ranked):
        if not item.visible:
            continue
        position += 1
        share = (item.value / total * 100) if total else 0.0
        color = category_color(item.label, labels, overlay, theme)
        click.echo(
            f"{position:>3}  {item.display_label[:40]:<40} {item.value:>10.2f} {share:>6.1f}%  {color}"
        )
    click.echo("-" * 75)
    click.echo(f"{'':>3}  {'Total':<40} {total:>10.2f}")


@report_group.command("timeseries")
@_report_options
@click.option(
    "--granularity",
    type=click.Choice(GRANULARITIES),
    default=Granularity.MONTHLY.value,
    show_default=True,
    help="Calendar bucket size",
)
@click.option("--json", "as_json", is_flag=True, help="Print the chart payload as JSON")
@filter_options
@click.pass_context
def timeseries_report(ctx, report_type: str, overlay_path: str | None, granularity: str, as_json: bool, **filters):
    """Show hours per calendar period, broken down by category."""
    session, view, ranked = _ranked(ctx, report_type, filters)
    overlay = _load_overlay(ctx, overlay_path)
    granularity = Granularity(granularity)
    periods = session.bucketer().bucket(view, granularity, ReportType(report_type))

    if as_json:
        payload = time_series_data(periods, ranked, granularity, overlay)
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if not periods:
        click.echo("No dated records to display")
        return

    display = {item.label: item for item in overlay.apply(ranked)}
    for period in periods:
        click.echo(f"\n{period_label(period.key, granularity)}: {period.total:.2f} hours")
        for label, hours in sorted(period.breakdown.items(), key=lambda item: item[1], reverse=True):
            item = display.get(label)
            if item is None or not item.visible:
                continue
            click.echo(f"    {item.display_label[:40]:<40} {hours:>10.2f}")


@report_group.command("stats")
@filter_options
@click.pass_context
def stats(ctx, **filters):
    """Show record, hour, people and issue counts."""
    session = load_cli_session(ctx)
    spec = build_filter_spec(ctx, filters)
    view = session.filter_engine().filter(session.records, spec)
    numbers = summary_stats(view)

    click.echo(f"Total records: {numbers['total_records']}")
    click.echo(f"Total hours:   {numbers['total_hours']:.2f}")
    click.echo(f"Unique people: {numbers['unique_people']}")
    click.echo(f"Unique issues: {numbers['unique_issues']}")


@report_group.command("overlay")
@click.argument("overlay_file", type=click.Path(dir_okay=False))
@click.option(
    "--type",
    "report_type",
    type=click.Choice(REPORT_TYPES),
    default=ReportType.PERSON.value,
    show_default=True,
    help="Report whose categories are edited",
)
@click.option("--rename", nargs=2, multiple=True, metavar="LABEL NEW", help="Set a display label")
@click.option("--hide", multiple=True, metavar="LABEL", help="Hide a category")
@click.option("--show", multiple=True, metavar="LABEL", help="Show a hidden category")
@click.option("--color", nargs=2, multiple=True, metavar="LABEL COLOR", help="Pin a color")
@click.option("--position", nargs=2, type=(str, int), multiple=True, metavar="LABEL INDEX", help="Move a category")
@filter_options
@click.pass_context
def edit_overlay(ctx, overlay_file, report_type, rename, hide, show, color, position, **filters):
    """Edit the presentation overlay stored in OVERLAY_FILE.

    Overlay edits are keyed by category label, so they survive re-running
    the report as long as the labels stay the same.
    """
    overlay = _load_overlay(ctx, overlay_file)

    for label, display_label in rename:
        overlay.set_display_label(label, display_label)
    for label in hide:
        overlay.set_visible(label, False)
    for label in show:
        overlay.set_visible(label, True)
    for label, value in color:
        overlay.set_color(label, value)

    if position:
        _, _, ranked = _ranked(ctx, report_type, filters)
        for label, index in position:
            labels = [item.label for item in overlay.apply(ranked) if item.visible]
            try:
                overlay.move(labels, label, index)
            except DomainError as e:
                handle_domain_error(ctx, e)

    Path(overlay_file).write_text(overlay.to_json(), encoding="utf-8")
    click.echo(f"Overlay saved to {overlay_file} ({len(overlay.entries)} edited categories)")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
