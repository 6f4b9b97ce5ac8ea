"""Report aggregation domain service."""

from collections import defaultdict
from typing import Sequence

from timesheet_explorer.domain.attribution import AttributionResolver
from timesheet_explorer.domain.entities import (
    CategoryTotal,
    ReportType,
    TimesheetRecord,
)
from timesheet_explorer.domain.registry import ServisMapping

TOP_CATEGORIES = 20

UNKNOWN = "Unknown"
UNASSIGNED = "Unassigned"
NO_EPIC = "No Epic"
NO_SERVICE = "No Service"


class Aggregator:
    """Service for classifying records and ranking report categories."""

    def __init__(self, resolver: AttributionResolver, servis: ServisMapping):
        """Initialize aggregator.

        Args:
            resolver: Attribution resolver over the person registry
            servis: Servis code labels
        """
        self.resolver = resolver
        self.servis = servis

    def classify(self, record: TimesheetRecord, report_type: ReportType) -> str:
        """Derive the report category key for a record."""
        report_type = ReportType(report_type)

        if report_type == ReportType.PERSON:
            return self.resolver.find_person(record.full_name) or record.full_name or UNKNOWN
        if report_type == ReportType.TEAM:
            return self.resolver.resolve_attribution(record).team or UNASSIGNED
        if report_type == ReportType.PROJECT:
            return self.resolver.resolve_attribution(record).project or UNASSIGNED
        if report_type == ReportType.ROLE:
            return self.resolver.role_for(record) or UNASSIGNED
        if report_type == ReportType.ACTIVITY:
            return record.activity_name or UNKNOWN
        if report_type == ReportType.STATUS:
            return record.issue_status or UNKNOWN
        if report_type == ReportType.EPIC:
            return record.epic or NO_EPIC
        if report_type == ReportType.PROJECT_KEY:
            return record.project_key or UNKNOWN
        if report_type == ReportType.ISSUE_KEY:
            return record.issue_key or UNKNOWN
        # ReportType.SERVIS
        if not record.servis:
            return NO_SERVICE
        return self.servis.display_name(record.servis)

    def totals(
        self, records: Sequence[TimesheetRecord], report_type: ReportType
    ) -> dict[str, float]:
        """Sum hours per category, keyed in first-seen order."""
        totals: dict[str, float] = defaultdict(float)
        for record in records:
            totals[self.classify(record, report_type)] += record.hours
        return dict(totals)

    def aggregate(
        self,
        records: Sequence[TimesheetRecord],
        report_type: ReportType,
        limit: int = TOP_CATEGORIES,
    ) -> list[CategoryTotal]:
        """Rank categories by summed hours.

        Categories are sorted by hours descending; ties keep first-seen
        order. Only the top ``limit`` categories are returned.

        Args:
            records: Filtered records
            report_type: Dimension to group by
            limit: Maximum number of categories

        Returns:
            Ranked list of CategoryTotal
        """
        totals = self.totals(records, report_type)
        ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
        return [CategoryTotal(label=label, value=value) for label, value in ranked[:limit]]
