"""Attribution of timesheet records to people, teams and projects."""

from typing import Optional

from timesheet_explorer.domain.entities import Attribution, PersonEntry, TimesheetRecord
from timesheet_explorer.domain.registry import PersonRegistry


def short_display_name(full_name: Optional[str]) -> str:
    """Return the text before the first "-" in a full name, trimmed.

    Used for display only, never for matching.
    """
    return (full_name or "").split("-")[0].strip()


class AttributionResolver:
    """Read-only resolution service over a person registry."""

    def __init__(self, people: PersonRegistry):
        """Initialize attribution resolver.

        Args:
            people: Person registry to match names against
        """
        self.people = people

    def find_person(self, full_name: Optional[str]) -> Optional[str]:
        """Find the registered person key for a full name.

        Scans the registry in insertion order and returns the first key
        contained in ``full_name``. A short key registered early can shadow
        a longer one registered later.

        Args:
            full_name: Free-text name from a timesheet row

        Returns:
            Person key or None if nothing matches
        """
        if not full_name:
            return None
        for person_key, _ in self.people:
            if person_key in full_name:
                return person_key
        return None

    def find_entry(self, full_name: Optional[str]) -> Optional[PersonEntry]:
        person_key = self.find_person(full_name)
        return self.people.get(person_key) if person_key is not None else None

    def resolve_attribution(self, record: TimesheetRecord) -> Attribution:
        """Resolve a record's effective team and project.

        Each attribute is resolved independently in this order: the record's
        override, the record's own Team/Project column, the matched person's
        attribute. Unresolved attributes are None.
        """
        entry = self.find_entry(record.full_name)
        team = (
            record.override_team
            or record.source_team
            or (entry.team if entry else None)
        )
        project = (
            record.override_project
            or record.source_project
            or (entry.project if entry else None)
        )
        return Attribution(team=team or None, project=project or None)

    def current_attribution(self, record: TimesheetRecord) -> Attribution:
        """Attribution as it should be frozen into overrides before an edit.

        A record that already has overrides keeps exactly those values;
        otherwise the CSV columns and then the matched person fill in.
        """
        if record.overrides is not None:
            return Attribution(
                team=record.overrides.team or None,
                project=record.overrides.project or None,
            )
        entry = self.find_entry(record.full_name)
        team = record.source_team or (entry.team if entry else None)
        project = record.source_project or (entry.project if entry else None)
        return Attribution(team=team or None, project=project or None)

    def role_for(self, record: TimesheetRecord) -> Optional[str]:
        entry = self.find_entry(record.full_name)
        return entry.role if entry else None
