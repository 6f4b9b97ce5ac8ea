"""CSV export of timesheet records and import diagnostics."""

from typing import Sequence

from timesheet_explorer.domain.attribution import AttributionResolver
from timesheet_explorer.domain.entities import (
    OVERRIDES_COLUMN,
    PROJECT,
    TEAM,
    TimesheetRecord,
    ValidationReport,
)


def quote(value) -> str:
    """Quote a CSV value, doubling embedded quotes."""
    return '"' + str(value).replace('"', '""') + '"'


def export_records(records: Sequence[TimesheetRecord], resolver: AttributionResolver) -> str:
    """Render records as CSV text with resolved Team/Project columns.

    The header comes from the first record's fields. ``Team`` and
    ``Project`` are appended when absent and always carry the resolved
    attribution, so overrides survive as plain columns.

    Args:
        records: Records to export (usually a filtered view)
        resolver: Attribution resolver over the person registry

    Returns:
        CSV document text, empty when there are no records
    """
    if not records:
        return ""

    headers = [h for h in records[0].fields if h != OVERRIDES_COLUMN]
    for column in (TEAM, PROJECT):
        if column not in headers:
            headers.append(column)

    lines = [",".join(quote(h) for h in headers)]
    for record in records:
        attribution = resolver.resolve_attribution(record)
        values = []
        for header in headers:
            if header == TEAM:
                values.append(quote(attribution.team or ""))
            elif header == PROJECT:
                values.append(quote(attribution.project or ""))
            else:
                values.append(quote(record.get(header)))
        lines.append(",".join(values))

    return "\n".join(lines) + "\n"


def export_skipped_rows(report: ValidationReport) -> str:
    """Render skipped-row diagnostics as CSV text."""
    lines = ["Line Number,Expected Columns,Actual Columns,Reason,Raw Data"]
    for row in report.skipped_rows:
        lines.append(
            f"{row.line_number},{row.expected_columns},{row.actual_columns},"
            f"{quote(row.reason)},{quote(row.raw_line)}"
        )
    return "\n".join(lines) + "\n"
