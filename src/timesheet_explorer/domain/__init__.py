"""Domain layer for timesheet_explorer application."""

from timesheet_explorer.domain.attribution import AttributionResolver
from timesheet_explorer.domain.csv_import import CSVImportService, parse_document
from timesheet_explorer.domain.filters import FilterEngine, FilterSpec
from timesheet_explorer.domain.records import RecordService
from timesheet_explorer.domain.session import TimesheetSession
from timesheet_explorer.domain.summary import Aggregator
from timesheet_explorer.domain.time_buckets import TimeBucketer

__all__ = [
    "AttributionResolver",
    "CSVImportService",
    "parse_document",
    "FilterEngine",
    "FilterSpec",
    "RecordService",
    "TimesheetSession",
    "Aggregator",
    "TimeBucketer",
]
