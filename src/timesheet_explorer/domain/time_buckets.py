"""Calendar bucketing of records for time series reports."""

from collections import defaultdict
from datetime import date, timedelta
from typing import Sequence

from timesheet_explorer.domain.entities import (
    Granularity,
    ReportType,
    TimePeriod,
    TimesheetRecord,
)
from timesheet_explorer.domain.summary import Aggregator
from timesheet_explorer.utils.date_parser import parse_work_day

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def week_monday(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def bucket_key(day: date, granularity: Granularity) -> str:
    """Return the bucket key for a date.

    daily → ``YYYY-MM-DD``, weekly → Monday of the week as ``YYYY-MM-DD``,
    monthly → ``YYYY-MM``, quarterly → ``YYYY-Q{n}``.
    """
    granularity = Granularity(granularity)
    if granularity == Granularity.DAILY:
        return day.isoformat()
    if granularity == Granularity.WEEKLY:
        return week_monday(day).isoformat()
    if granularity == Granularity.MONTHLY:
        return f"{day.year:04d}-{day.month:02d}"
    return f"{day.year:04d}-Q{(day.month - 1) // 3 + 1}"


def iso_week_number(day: date) -> int:
    """ISO week number: move to the Thursday of the week, count weeks from Jan 1."""
    thursday = day + timedelta(days=3 - day.weekday())
    year_start = date(thursday.year, 1, 1)
    return (thursday - year_start).days // 7 + 1


def period_label(key: str, granularity: Granularity) -> str:
    """Human label for a bucket key."""
    granularity = Granularity(granularity)
    if granularity == Granularity.WEEKLY:
        monday = date.fromisoformat(key)
        return f"Week {iso_week_number(monday)}, {monday.year}"
    if granularity == Granularity.MONTHLY:
        year, month = key.split("-")
        return f"{MONTH_NAMES[int(month) - 1]} {year}"
    return key


class TimeBucketer:
    """Splits records into calendar buckets with a per-category breakdown."""

    def __init__(self, aggregator: Aggregator):
        """Initialize time bucketer.

        Args:
            aggregator: Aggregator whose classification rule is reused
        """
        self.aggregator = aggregator

    def bucket(
        self,
        records: Sequence[TimesheetRecord],
        granularity: Granularity,
        report_type: ReportType,
    ) -> list[TimePeriod]:
        """Group records into periods sorted ascending by key.

        Records without a parseable work date are left out.
        """
        granularity = Granularity(granularity)
        totals: dict[str, float] = defaultdict(float)
        breakdowns: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))

        for record in records:
            day = parse_work_day(record.work_date)
            if day is None:
                continue
            key = bucket_key(day, granularity)
            category = self.aggregator.classify(record, report_type)
            hours = record.hours
            totals[key] += hours
            breakdowns[key][category] += hours

        return [
            TimePeriod(key=key, total=totals[key], breakdown=dict(breakdowns[key]))
            for key in sorted(totals)
        ]
