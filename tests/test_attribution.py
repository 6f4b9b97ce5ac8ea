"""Tests for person matching and team/project attribution."""

import pytest

from timesheet_explorer.domain.attribution import AttributionResolver, short_display_name
from timesheet_explorer.domain.entities import Attribution, Overrides
from timesheet_explorer.domain.registry import PersonRegistry


@pytest.fixture
def resolver(people):
    return AttributionResolver(people)


@pytest.mark.parametrize(
    "full_name, expected",
    [
        ("Ana Kovac - Developer", "Ana Kovac"),
        ("  Bor Novak  ", "Bor Novak"),
        ("No Dash", "No Dash"),
        ("", ""),
        (None, ""),
    ],
)
def test_short_display_name(full_name, expected):
    assert short_display_name(full_name) == expected


def test_find_person_by_substring(resolver):
    assert resolver.find_person("Ana Kovac - Dev") == "Ana Kovac"
    assert resolver.find_person("Mr Bor Novak") == "Bor Novak"
    assert resolver.find_person("Cene Zupan") is None
    assert resolver.find_person("") is None
    assert resolver.find_person(None) is None


def test_find_person_is_case_sensitive(resolver):
    assert resolver.find_person("ana kovac") is None


def test_find_person_first_registered_key_wins():
    registry = PersonRegistry()
    registry.add("Ana", team="Short")
    registry.add("Ana Kovac", team="Long")
    resolver = AttributionResolver(registry)

    assert resolver.find_person("Ana Kovac - Dev") == "Ana"
    assert resolver.find_entry("Ana Kovac - Dev").team == "Short"


def test_precedence_override_then_column_then_person(make_record):
    registry = PersonRegistry()
    registry.add("X", team="Z")
    resolver = AttributionResolver(registry)

    record = make_record(name="X", team="Y")
    record.overrides = Overrides(team="Team-A")
    assert resolver.resolve_attribution(record).team == "Team-A"

    record.overrides = None
    assert resolver.resolve_attribution(record).team == "Y"

    record = make_record(name="X")
    assert resolver.resolve_attribution(record).team == "Z"

    record = make_record(name="Unknown person")
    assert resolver.resolve_attribution(record) == Attribution(team=None, project=None)


def test_team_and_project_resolve_independently(resolver, make_record):
    record = make_record(name="Ana Kovac - Dev", project="From CSV")
    record.overrides = Overrides(team="Ops")

    assert resolver.resolve_attribution(record) == Attribution(team="Ops", project="From CSV")


def test_empty_override_falls_through(resolver, make_record):
    record = make_record(name="Ana Kovac - Dev")
    record.overrides = Overrides(team="", project=None)

    assert resolver.resolve_attribution(record) == Attribution(team="Core", project="Alpha")


def test_current_attribution_keeps_existing_overrides(resolver, make_record):
    record = make_record(name="Ana Kovac - Dev")
    record.overrides = Overrides(team="Ops")

    assert resolver.current_attribution(record) == Attribution(team="Ops", project=None)


def test_current_attribution_without_overrides(resolver, make_record):
    record = make_record(name="Ana Kovac - Dev", team="Legacy")

    assert resolver.current_attribution(record) == Attribution(team="Legacy", project="Alpha")


def test_role_for(resolver, make_record):
    assert resolver.role_for(make_record(name="Bor Novak")) == "Tester"
    assert resolver.role_for(make_record(name="Cene Zupan")) is None
