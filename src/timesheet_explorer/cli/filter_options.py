"""Shared click options that build a FilterSpec."""

from typing import Any

import click

from timesheet_explorer.cli.date_filters import resolve_work_date_bounds
from timesheet_explorer.domain.filters import Facet, FilterSpec
from timesheet_explorer.utils.date_parser import PERIODS

# (option name, FilterSpec attribute)
FACET_OPTIONS = (
    ("project", "project"),
    ("team", "team"),
    ("role", "role"),
    ("person", "person"),
    ("activity", "activity"),
    ("status", "status"),
    ("project-key", "project_key"),
    ("servis", "servis"),
)


def filter_options(command):
    """Attach facet, summary and date options to a command."""
    decorators = []
    for option, attribute in FACET_OPTIONS:
        decorators.append(
            click.option(
                f"--{option}",
                f"{attribute}_values",
                multiple=True,
                help=f"Keep records whose {option} is one of these values (repeatable)",
            )
        )
        decorators.append(
            click.option(
                f"--not-{option}",
                f"{attribute}_invert",
                is_flag=True,
                help=f"Exclude the selected {option} values instead",
            )
        )
    decorators += [
        click.option("--summary", "issue_summary", default="", help="Issue summary contains text (case-insensitive)"),
        click.option("--not-summary", "issue_summary_invert", is_flag=True, help="Exclude records whose summary matches"),
        click.option("--start-date", help="Earliest work date (YYYY-MM-DD or relative, e.g. 'last month')"),
        click.option("--end-date", help="Latest work date (YYYY-MM-DD or relative)"),
    ]
    for period in PERIODS:
        decorators.append(
            click.option(
                f"--{period}",
                period.replace("-", "_"),
                is_flag=True,
                help=f"Limit to {period.replace('-', ' ')}",
            )
        )

    for decorator in reversed(decorators):
        command = decorator(command)
    return command


def build_filter_spec(ctx: click.Context, options: dict[str, Any]) -> FilterSpec:
    """Turn the values collected by ``filter_options`` into a FilterSpec."""
    facets = {
        attribute: Facet.of(
            options.get(f"{attribute}_values") or (),
            invert=bool(options.get(f"{attribute}_invert")),
        )
        for _, attribute in FACET_OPTIONS
    }

    start, end = resolve_work_date_bounds(
        ctx,
        start_date=options.get("start_date"),
        end_date=options.get("end_date"),
        period_flags={period: bool(options.get(period.replace("-", "_"))) for period in PERIODS},
    )

    return FilterSpec(
        **facets,
        issue_summary=options.get("issue_summary") or "",
        issue_summary_invert=bool(options.get("issue_summary_invert")),
        work_date_start=start,
        work_date_end=end,
    )
