"""Timesheet CSV import, export and clear commands."""

from pathlib import Path

import click

from timesheet_explorer.cli.error_handling import fail
from timesheet_explorer.cli.filter_options import build_filter_spec, filter_options
from timesheet_explorer.cli.session_context import load_cli_session, save_cli_session
from timesheet_explorer.domain.csv_export import export_records, export_skipped_rows
from timesheet_explorer.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option(
    "--force",
    is_flag=True,
    help="Commit the valid rows even when some rows were skipped",
)
@click.option(
    "--skipped-report",
    type=click.Path(),
    help="Write skipped-row diagnostics to this CSV file",
)
@click.pass_context
def import_csv(ctx, csv_file: str, force: bool, skipped_report: str | None):
    """Import timesheet rows from a CSV file, replacing the stored rows."""
    service = CSVImportService()

    try:
        records, report = service.read_file(csv_file)
    except (ValueError, FileNotFoundError) as e:
        fail(ctx, e)

    if skipped_report and report.invalid_rows:
        Path(skipped_report).write_text(export_skipped_rows(report), encoding="utf-8")
        click.echo(f"Skipped-row report written to {skipped_report}")

    click.echo("\nParsed CSV:")
    click.echo(f"  Lines: {report.total_lines}")
    click.echo(f"  Valid rows: {report.valid_rows}")
    click.echo(f"  Skipped rows: {report.invalid_rows}")
    for message in service.summarize(report):
        click.echo(f"    {message}", err=True)

    if report.invalid_rows and not force:
        click.echo(
            "Import not committed: fix the skipped rows or re-run with --force "
            "to import the valid rows only.",
            err=True,
        )
        ctx.exit(1)

    session = load_cli_session(ctx)
    session.replace_records(records)
    save_cli_session(ctx, session)
    click.echo(f"\nImport complete: {len(records)} timesheet records stored")


@click.command("export")
@click.argument("output", type=click.Path())
@filter_options
@click.pass_context
def export_csv(ctx, output: str, **filters):
    """Export the (filtered) timesheet rows with resolved Team/Project columns."""
    session = load_cli_session(ctx)
    spec = build_filter_spec(ctx, filters)
    records = session.filter_engine().filter(session.records, spec)

    if not records:
        click.echo("No data to export")
        return

    Path(output).write_text(export_records(records, session.resolver()), encoding="utf-8")
    click.echo(f"Exported {len(records)} records to {output}")


@click.command("clear")
@click.confirmation_option(prompt="Delete all stored timesheet records?")
@click.pass_context
def clear_records(ctx):
    """Delete every stored timesheet record (registries are kept)."""
    session = load_cli_session(ctx)
    if not session.records:
        click.echo("No timesheet data to clear")
        return

    removed = session.clear_records()
    save_cli_session(ctx, session)
    click.echo(f"All {removed} timesheet records have been deleted")


def register_commands(cli):
    """Register import/export commands with main CLI."""
    cli.add_command(import_csv)
    cli.add_command(export_csv)
    cli.add_command(clear_records)
