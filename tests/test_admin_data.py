"""Tests for administrative data interchange."""

import json

import pytest

from timesheet_explorer.domain.admin_data import (
    export_admin_data,
    export_admin_json,
    import_admin_data,
    import_admin_json,
    import_people_from_csv,
)
from timesheet_explorer.domain.errors import ValidationError
from timesheet_explorer.domain.registry import PersonRegistry
from timesheet_explorer.domain.session import TimesheetSession


def test_export_admin_data(session):
    data = export_admin_data(session)

    assert data["projects"] == ["Alpha", "Beta"]
    assert data["teams"] == ["Core", "Ops"]
    assert data["roles"] == ["Developer", "Tester"]
    assert data["people"]["Bor Novak"] == {"team": "Ops", "project": None, "role": "Tester"}
    assert "records" not in data


def test_json_round_trip(session):
    text = export_admin_json(session)
    target = TimesheetSession()

    import_admin_json(target, text)

    assert export_admin_data(target) == export_admin_data(session)
    assert target.people.names() == session.people.names()


def test_import_replaces_people_but_keeps_records(session):
    records = list(session.records)

    import_admin_data(session, {"teams": ["Platform"], "people": {"Zala": {"team": "Platform"}}})

    assert session.people.names() == ["Zala"]
    assert session.teams.values() == ["Platform"]
    assert session.projects.values() == []
    assert session.records == records


def test_import_rebinds_catalog_cascades(session):
    import_admin_data(session, {"teams": ["Core"], "people": {"Zala": {"team": "Core"}}})

    session.teams.rename("Core", "Platform")

    assert session.people.get("Zala").team == "Platform"


def test_import_treats_missing_keys_as_empty():
    session = TimesheetSession()
    import_admin_data(session, {})

    assert len(session.people) == 0
    assert session.roles.values() == []


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"people": ["Ana"]},
        {"people": {"Ana": "Core"}},
        {"teams": "Core"},
    ],
)
def test_import_rejects_malformed_documents(data):
    with pytest.raises(ValidationError):
        import_admin_data(TimesheetSession(), data)


def test_import_rejects_invalid_json():
    with pytest.raises(ValidationError, match="Invalid JSON"):
        import_admin_json(TimesheetSession(), "{not json")


def test_exported_json_is_indented(session):
    text = export_admin_json(session)

    assert text.startswith("{\n  ")
    assert json.loads(text)["teams"] == ["Core", "Ops"]


def test_import_people_from_csv(sample_csv):
    people = PersonRegistry()
    people.add("Bor Novak", team="Ops")

    added = import_people_from_csv(sample_csv.read_text(encoding="utf-8"), people)

    assert added == 2
    assert people.names() == ["Bor Novak", "Ana Kovac", "Cene Zupan"]
    assert people.get("Bor Novak").team == "Ops"
    assert people.get("Ana Kovac").team is None


def test_rejected_import_leaves_session_untouched(session):
    with pytest.raises(ValidationError):
        import_admin_data(session, {"people": {"Zala": {}}, "roles": "Lead"})

    assert session.people.names() == ["Ana Kovac", "Bor Novak"]
    assert session.roles.values() == ["Developer", "Tester"]
