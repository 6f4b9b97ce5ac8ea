"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay
stable when the storage schema changes.
"""

from timesheet_explorer.domain import entities as domain
from timesheet_explorer.database.models import (
    Person as ORMPerson,
    TimesheetRow as ORMTimesheetRow,
)


def person_to_domain(orm_person: ORMPerson) -> tuple[str, domain.PersonEntry]:
    """Convert SQLAlchemy Person model to a (name, PersonEntry) pair."""
    return orm_person.name, domain.PersonEntry(
        team=orm_person.team,
        project=orm_person.project,
        role=orm_person.role,
    )


def person_to_orm(name: str, entry: domain.PersonEntry, position: int) -> ORMPerson:
    """Convert a registry entry to a SQLAlchemy Person model."""
    return ORMPerson(
        name=name,
        team=entry.team,
        project=entry.project,
        role=entry.role,
        position=position,
    )


def record_to_domain(orm_row: ORMTimesheetRow) -> domain.TimesheetRecord:
    """Convert SQLAlchemy TimesheetRow model to domain TimesheetRecord entity."""
    overrides = None
    if orm_row.has_overrides:
        overrides = domain.Overrides(
            team=orm_row.override_team,
            project=orm_row.override_project,
        )
    return domain.TimesheetRecord(fields=dict(orm_row.fields or {}), overrides=overrides)


def record_to_orm(record: domain.TimesheetRecord, position: int) -> ORMTimesheetRow:
    """Convert domain TimesheetRecord entity to SQLAlchemy TimesheetRow model."""
    return ORMTimesheetRow(
        position=position,
        fields=dict(record.fields),
        has_overrides=record.overrides is not None,
        override_team=record.override_team,
        override_project=record.override_project,
    )
