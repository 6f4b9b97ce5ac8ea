"""Override editing for timesheet records."""

from typing import Iterable, Optional, Sequence

from loguru import logger

from timesheet_explorer.domain.attribution import AttributionResolver
from timesheet_explorer.domain.entities import BatchResult, Overrides, TimesheetRecord
from timesheet_explorer.domain.errors import NotFoundError, ValidationError, unknown_choice

OVERRIDE_FIELDS = ("team", "project")


def find_original(
    records: Iterable[TimesheetRecord], record: TimesheetRecord
) -> Optional[TimesheetRecord]:
    """Find the first record sharing ``record``'s (FullName, IssueKey, WorkDate) key.

    The key is weak: distinct rows with the same three values coalesce
    onto whichever comes first.
    """
    key = record.match_key
    for candidate in records:
        if candidate.match_key == key:
            return candidate
    return None


class RecordService:
    """Service for assigning team/project overrides to records."""

    def __init__(self, records: list[TimesheetRecord], resolver: AttributionResolver):
        """Initialize record service.

        Args:
            records: The session's full record set
            resolver: Attribution resolver over the person registry
        """
        self.records = records
        self.resolver = resolver

    def set_overrides(
        self,
        view: Sequence[TimesheetRecord],
        index: int,
        team: Optional[str],
        project: Optional[str],
    ) -> TimesheetRecord:
        """Overwrite both overrides on one record of a (filtered) view.

        Empty values clear the override for that attribute. The same values
        are written to the matching original record when the view holds a
        detached copy.

        Raises:
            NotFoundError: If index is outside the view
        """
        if index < 0 or index >= len(view):
            raise NotFoundError(f"Record {index} not found")

        record = view[index]
        record.overrides = Overrides(team=team or None, project=project or None)
        original = find_original(self.records, record)
        if original is not None and original is not record:
            original.overrides = Overrides(team=team or None, project=project or None)
        return record

    def batch_update(
        self,
        view: Sequence[TimesheetRecord],
        indices: Iterable[int],
        field: str,
        value: str,
    ) -> BatchResult:
        """Set one override field on the selected records of a view.

        A record without overrides first has its current effective team and
        project frozen into overrides, so the other attribute keeps its
        value. Indices outside the view are skipped.

        Returns:
            BatchResult with updated and skipped counts
        """
        if field not in OVERRIDE_FIELDS:
            raise ValidationError(unknown_choice("field", field, OVERRIDE_FIELDS))
        if not value:
            raise ValidationError("A value is required for batch update")

        updated = 0
        skipped = 0
        for index in indices:
            if index < 0 or index >= len(view):
                skipped += 1
                continue

            record = view[index]
            self._assign(record, field, value)
            original = find_original(self.records, record)
            if original is not None and original is not record:
                self._assign(original, field, value)
            updated += 1

        logger.info(f"Batch {field}='{value}': {updated} updated, {skipped} skipped")
        return BatchResult(updated=updated, skipped=skipped)

    def apply_person_mapping(
        self, view: Sequence[TimesheetRecord], override_existing: bool = False
    ) -> BatchResult:
        """Copy each matched person's team/project into record overrides.

        Records that already carry a team or project (override or CSV
        column) are skipped unless ``override_existing`` is set.

        Returns:
            BatchResult with updated and skipped counts
        """
        updated = 0
        skipped = 0
        for record in view:
            if not record.full_name:
                continue

            has_existing = (
                record.override_team
                or record.source_team
                or record.override_project
                or record.source_project
            )
            if has_existing and not override_existing:
                skipped += 1
                continue

            entry = self.resolver.find_entry(record.full_name)
            if entry is None:
                continue

            targets = [record]
            original = find_original(self.records, record)
            if original is not None and original is not record:
                targets.append(original)
            for target in targets:
                if target.overrides is None:
                    target.overrides = Overrides()
                if entry.team:
                    target.overrides.team = entry.team
                if entry.project:
                    target.overrides.project = entry.project
            updated += 1

        logger.info(f"Person mapping applied: {updated} updated, {skipped} skipped")
        return BatchResult(updated=updated, skipped=skipped)

    def _assign(self, record: TimesheetRecord, field: str, value: str) -> None:
        if record.overrides is None:
            current = self.resolver.current_attribution(record)
            record.overrides = Overrides(team=current.team, project=current.project)
        setattr(record.overrides, field, value)
