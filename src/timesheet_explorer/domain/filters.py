"""Multi-facet filtering of timesheet records."""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from timesheet_explorer.domain.attribution import AttributionResolver
from timesheet_explorer.domain.entities import TimesheetRecord


@dataclass(frozen=True)
class Facet:
    """Selected values for one filter dimension.

    An empty selection makes the facet inactive. ``invert`` turns the
    selection into an exclusion list.
    """

    values: frozenset[str] = frozenset()
    invert: bool = False

    @classmethod
    def of(cls, values=(), invert: bool = False) -> "Facet":
        return cls(values=frozenset(v for v in values if v), invert=invert)

    @property
    def active(self) -> bool:
        return bool(self.values)

    def accepts(self, value: Optional[str]) -> bool:
        return (value in self.values) != self.invert


@dataclass(frozen=True)
class FilterSpec:
    """All filter facets; every active facet must pass."""

    project: Facet = field(default_factory=Facet)
    team: Facet = field(default_factory=Facet)
    role: Facet = field(default_factory=Facet)
    person: Facet = field(default_factory=Facet)
    activity: Facet = field(default_factory=Facet)
    status: Facet = field(default_factory=Facet)
    project_key: Facet = field(default_factory=Facet)
    servis: Facet = field(default_factory=Facet)
    issue_summary: str = ""
    issue_summary_invert: bool = False
    work_date_start: Optional[str] = None
    work_date_end: Optional[str] = None

    def is_empty(self) -> bool:
        facets = (
            self.project,
            self.team,
            self.role,
            self.person,
            self.activity,
            self.status,
            self.project_key,
            self.servis,
        )
        return (
            not any(facet.active for facet in facets)
            and not self.issue_summary
            and not self.work_date_start
            and not self.work_date_end
        )


# Facets read straight from a record field
_FIELD_FACETS: tuple[tuple[str, Callable[[TimesheetRecord], str]], ...] = (
    ("activity", lambda record: record.activity_name),
    ("status", lambda record: record.issue_status),
    ("project_key", lambda record: record.project_key),
    ("servis", lambda record: record.servis),
)


class FilterEngine:
    """Evaluates a FilterSpec against records."""

    def __init__(self, resolver: AttributionResolver):
        """Initialize filter engine.

        Args:
            resolver: Attribution resolver shared with reporting
        """
        self.resolver = resolver

    def filter(
        self, records: Sequence[TimesheetRecord], spec: FilterSpec
    ) -> list[TimesheetRecord]:
        """Return the records passing every active facet, in input order."""
        if spec.is_empty():
            return list(records)
        return [record for record in records if self.matches(record, spec)]

    def matches(self, record: TimesheetRecord, spec: FilterSpec) -> bool:
        """Check a single record against a filter spec."""
        person_key = self.resolver.find_person(record.full_name)
        entry = self.resolver.people.get(person_key) if person_key is not None else None

        if spec.project.active or spec.team.active:
            attribution = self.resolver.resolve_attribution(record)
            if spec.project.active and not spec.project.accepts(attribution.project):
                return False
            if spec.team.active and not spec.team.accepts(attribution.team):
                return False

        # Role and person facets only apply to records matched to a person
        if entry is not None:
            if spec.role.active and not spec.role.accepts(entry.role):
                return False
            if spec.person.active and not spec.person.accepts(person_key):
                return False

        for name, read in _FIELD_FACETS:
            facet: Facet = getattr(spec, name)
            if facet.active and not facet.accepts(read(record) or None):
                return False

        if spec.work_date_start or spec.work_date_end:
            if not record.work_date:
                return False
            day = record.work_day
            if spec.work_date_start and day < spec.work_date_start:
                return False
            if spec.work_date_end and day > spec.work_date_end:
                return False

        if spec.issue_summary:
            matched = spec.issue_summary.lower() in record.issue_summary.lower()
            if matched == spec.issue_summary_invert:
                return False

        return True
