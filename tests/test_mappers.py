"""Tests for mapper functions."""

from timesheet_explorer.database.mappers import (
    person_to_domain,
    person_to_orm,
    record_to_domain,
    record_to_orm,
)
from timesheet_explorer.database.models import Person, TimesheetRow
from timesheet_explorer.domain.entities import Overrides, PersonEntry, TimesheetRecord


def test_person_round_trip():
    orm = person_to_orm("Ana", PersonEntry(team="Core", project=None, role="Dev"), position=3)

    assert isinstance(orm, Person)
    assert orm.position == 3
    assert orm.name == "Ana"

    name, entry = person_to_domain(orm)
    assert name == "Ana"
    assert entry == PersonEntry(team="Core", project=None, role="Dev")


def test_record_to_orm_without_overrides():
    record = TimesheetRecord(fields={"Full name": "Ana", "Hours": "2"})

    orm = record_to_orm(record, position=0)

    assert isinstance(orm, TimesheetRow)
    assert orm.fields == {"Full name": "Ana", "Hours": "2"}
    assert orm.has_overrides is False
    assert orm.override_team is None


def test_record_to_orm_with_overrides():
    record = TimesheetRecord(fields={}, overrides=Overrides(team="Core", project="Alpha"))

    orm = record_to_orm(record, position=5)

    assert orm.position == 5
    assert orm.has_overrides is True
    assert orm.override_team == "Core"
    assert orm.override_project == "Alpha"


def test_record_to_domain():
    orm = TimesheetRow(
        position=0,
        fields={"Full name": "Ana"},
        has_overrides=True,
        override_team=None,
        override_project="Beta",
    )

    record = record_to_domain(orm)

    assert record.full_name == "Ana"
    assert record.overrides == Overrides(team=None, project="Beta")


def test_record_to_domain_without_overrides():
    orm = TimesheetRow(position=0, fields={"Full name": "Ana"}, has_overrides=False)

    assert record_to_domain(orm).overrides is None


def test_timesheet_row_columns():
    assert set(TimesheetRow.__table__.columns.keys()) == {
        "id",
        "position",
        "fields",
        "has_overrides",
        "override_team",
        "override_project",
    }
