"""Domain model entities for timesheet_explorer.

These are plain data classes describing timesheet rows, the people registry
and report results, independent of how they are stored. Everything the
pipeline needs is carried on these objects so the services stay pure.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from timesheet_explorer.utils.hours_parser import parse_hours


# Source column names as exported by the upstream timesheet tool
FULL_NAME = "Full name"
PROJECT_KEY = "Project Key"
ACTIVITY_NAME = "Activity Name"
ISSUE_KEY = "Issue Key"
ISSUE_SUMMARY = "Issue summary"
ISSUE_STATUS = "Issue Status"
HOURS = "Hours"
WORK_DATE = "Work date"
EPIC = "Epic"
EPIC_LINK = "Epic Link"
WORK_DESCRIPTION = "Work Description"
SERVIS = "Servis"
TEAM = "Team"
PROJECT = "Project"

# Export-only bookkeeping column, never part of the canonical schema
OVERRIDES_COLUMN = "_overrides"


class ReportType(str, Enum):
    """Dimension a report groups hours by."""

    PERSON = "person"
    TEAM = "team"
    PROJECT = "project"
    ROLE = "role"
    ACTIVITY = "activity"
    STATUS = "status"
    EPIC = "epic"
    PROJECT_KEY = "projectKey"
    ISSUE_KEY = "issueKey"
    SERVIS = "servis"


class Granularity(str, Enum):
    """Calendar bucket size for time series."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


@dataclass
class Overrides:
    """Manually assigned attribution stored on a record."""

    team: Optional[str] = None
    project: Optional[str] = None


@dataclass(eq=False)
class TimesheetRecord:
    """One accepted timesheet row.

    The raw source fields are read-only; only ``overrides`` may change after
    the record is created. Records have no identity of their own, see
    ``match_key`` for the weak key used to locate an original record.
    """

    fields: Mapping[str, str]
    overrides: Optional[Overrides] = None

    def __post_init__(self):
        self.fields = MappingProxyType(dict(self.fields))

    def get(self, column: str) -> str:
        """Return a raw field value, empty string when absent."""
        return self.fields.get(column) or ""

    @property
    def full_name(self) -> str:
        return self.get(FULL_NAME)

    @property
    def project_key(self) -> str:
        return self.get(PROJECT_KEY)

    @property
    def activity_name(self) -> str:
        return self.get(ACTIVITY_NAME)

    @property
    def issue_key(self) -> str:
        return self.get(ISSUE_KEY)

    @property
    def issue_summary(self) -> str:
        return self.get(ISSUE_SUMMARY)

    @property
    def issue_status(self) -> str:
        return self.get(ISSUE_STATUS)

    @property
    def hours(self) -> float:
        return parse_hours(self.fields.get(HOURS))

    @property
    def work_date(self) -> str:
        return self.get(WORK_DATE)

    @property
    def work_day(self) -> str:
        """Date-only part of the work date (text before the first space)."""
        return self.work_date.split(" ")[0]

    @property
    def epic(self) -> str:
        return self.get(EPIC) or self.get(EPIC_LINK)

    @property
    def work_description(self) -> str:
        return self.get(WORK_DESCRIPTION) or self.get("work description")

    @property
    def servis(self) -> str:
        return self.get(SERVIS)

    @property
    def source_team(self) -> str:
        return self.get(TEAM)

    @property
    def source_project(self) -> str:
        return self.get(PROJECT)

    @property
    def override_team(self) -> Optional[str]:
        return self.overrides.team if self.overrides else None

    @property
    def override_project(self) -> Optional[str]:
        return self.overrides.project if self.overrides else None

    @property
    def match_key(self) -> tuple[str, str, str]:
        """Weak equality key: (FullName, IssueKey, WorkDate).

        Distinct rows sharing these three values are indistinguishable.
        """
        return (self.full_name, self.issue_key, self.work_date)


@dataclass
class PersonEntry:
    """Attributes registered for a person key."""

    team: Optional[str] = None
    project: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class Attribution:
    """Resolved team/project for a record; None when unresolved."""

    team: Optional[str]
    project: Optional[str]


@dataclass(frozen=True)
class SkippedRow:
    """Diagnostic for a logical CSV row rejected on column count."""

    line_number: int
    raw_line: str
    parsed_values: tuple[str, ...]
    expected_columns: int
    actual_columns: int

    @property
    def reason(self) -> str:
        return (
            f"Column count mismatch: expected {self.expected_columns}, "
            f"got {self.actual_columns}"
        )


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of parsing a timesheet CSV document."""

    total_lines: int
    valid_rows: int
    invalid_rows: int
    headers: tuple[str, ...]
    skipped_rows: tuple[SkippedRow, ...]


@dataclass(frozen=True)
class CategoryTotal:
    """One ranked report entry."""

    label: str
    value: float


@dataclass(frozen=True)
class TimePeriod:
    """Hours for one calendar bucket, broken down by category."""

    key: str
    total: float
    breakdown: Mapping[str, float]


@dataclass(frozen=True)
class BatchResult:
    """Counts reported by batch record updates."""

    updated: int
    skipped: int


@dataclass
class DataBundle:
    """Everything persisted between runs."""

    projects: list[str] = field(default_factory=list)
    teams: list[str] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)
    people: dict[str, PersonEntry] = field(default_factory=dict)
    servis_mapping: dict[str, str] = field(default_factory=dict)
    records: list[TimesheetRecord] = field(default_factory=list)


@dataclass(frozen=True)
class SaveAck:
    """Acknowledgement returned by a completed save."""

    records: int
    people: int
