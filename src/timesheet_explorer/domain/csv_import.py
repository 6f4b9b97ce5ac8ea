"""Timesheet CSV import domain service.

The reader is lenient: a row is accepted whenever its field
count matches the header, and every other row is reported instead of
aborting the import. Quoted fields may contain commas, doubled quotes and
newlines.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from timesheet_explorer.domain.entities import (
    OVERRIDES_COLUMN,
    SkippedRow,
    TimesheetRecord,
    ValidationReport,
)

RAW_PREVIEW_LENGTH = 100
VALUES_PREVIEW_COUNT = 5


def parse_line(line: str) -> list[str]:
    """Split one logical CSV row into trimmed field values.

    Args:
        line: Row text, possibly containing newlines inside quoted fields

    Returns:
        List of field values with quoting removed
    """
    values = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    values.append("".join(current).strip())
    return values


def has_open_quote(text: str) -> bool:
    """Return True if ``text`` ends inside a quoted field.

    Doubled quotes are escapes and do not count towards the balance.
    """
    count = 0
    i = 0
    while i < len(text):
        if text[i] == '"':
            if i + 1 < len(text) and text[i + 1] == '"':
                i += 1
            else:
                count += 1
        i += 1
    return count % 2 == 1


def _preview(raw: str, values: list[str]) -> tuple[str, tuple[str, ...]]:
    raw_preview = raw
    if len(raw) > RAW_PREVIEW_LENGTH:
        raw_preview = raw[:RAW_PREVIEW_LENGTH] + "..."

    values_preview = list(values)
    if len(values) > VALUES_PREVIEW_COUNT:
        values_preview = values[:VALUES_PREVIEW_COUNT] + ["..."]
    return raw_preview, tuple(values_preview)


def parse_document(text: str) -> tuple[list[TimesheetRecord], ValidationReport]:
    """Parse a whole timesheet CSV document.

    The first non-blank line is the header. Every following logical row
    (physical lines joined while a quote is open) is accepted only when
    its field count equals the header's.

    Args:
        text: CSV document text

    Returns:
        Tuple of (accepted records, validation report)
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    lines = [line.rstrip("\r") for line in text.split("\n")]
    total_lines = sum(1 for line in lines if line.strip())

    position = 0
    while position < len(lines) and not lines[position].strip():
        position += 1

    if position >= len(lines):
        return [], ValidationReport(
            total_lines=0, valid_rows=0, invalid_rows=0, headers=(), skipped_rows=()
        )

    headers = [h.strip() for h in parse_line(lines[position])]
    expected_columns = len(headers)
    position += 1

    records: list[TimesheetRecord] = []
    skipped: list[SkippedRow] = []

    while position < len(lines):
        if not lines[position].strip():
            position += 1
            continue

        start_line = position + 1
        logical = lines[position]
        while has_open_quote(logical) and position + 1 < len(lines):
            position += 1
            logical += "\n" + lines[position]
        position += 1

        values = parse_line(logical)
        if len(values) == expected_columns:
            row = {
                header: value
                for header, value in zip(headers, values)
                if header != OVERRIDES_COLUMN
            }
            records.append(TimesheetRecord(fields=row))
        else:
            raw_preview, values_preview = _preview(logical, values)
            skipped.append(
                SkippedRow(
                    line_number=start_line,
                    raw_line=raw_preview,
                    parsed_values=values_preview,
                    expected_columns=expected_columns,
                    actual_columns=len(values),
                )
            )
            logger.debug(
                f"Skipping line {start_line}: expected {expected_columns} columns, got {len(values)}"
            )

    report = ValidationReport(
        total_lines=total_lines,
        valid_rows=len(records),
        invalid_rows=len(skipped),
        headers=tuple(h for h in headers if h != OVERRIDES_COLUMN),
        skipped_rows=tuple(skipped),
    )
    return records, report


class CSVImportService:
    """Service for reading timesheet CSV files."""

    def __init__(self, encoding: str = "utf-8-sig"):
        """Initialize CSV import service.

        Args:
            encoding: Text encoding of the files to read
        """
        self.encoding = encoding

    def read_file(
        self, csv_file_path: str
    ) -> tuple[list[TimesheetRecord], ValidationReport]:
        """Parse a timesheet CSV file.

        Args:
            csv_file_path: Path to CSV file

        Returns:
            Tuple of (accepted records, validation report)

        Raises:
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        text = csv_path.read_text(encoding=self.encoding)
        records, report = parse_document(text)

        logger.info(
            f"Parsed {csv_path.name}: {report.valid_rows} valid rows, "
            f"{report.invalid_rows} skipped"
        )
        if report.invalid_rows:
            logger.warning(
                f"{report.invalid_rows} row(s) in {csv_path.name} did not match "
                f"the {len(report.headers)}-column header"
            )
        return records, report

    def summarize(self, report: ValidationReport, limit: Optional[int] = 10) -> list[str]:
        """Describe skipped rows as human-readable lines.

        Args:
            report: Validation report from parsing
            limit: Maximum number of rows to describe (None for all)

        Returns:
            List of message strings in input order
        """
        rows = report.skipped_rows if limit is None else report.skipped_rows[:limit]
        return [f"Line {row.line_number}: {row.reason}" for row in rows]
