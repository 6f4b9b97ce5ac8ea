"""Tests for the multi-facet record filter."""

import pytest

from timesheet_explorer.domain.attribution import AttributionResolver
from timesheet_explorer.domain.entities import Overrides
from timesheet_explorer.domain.filters import Facet, FilterEngine, FilterSpec


@pytest.fixture
def engine(people):
    return FilterEngine(AttributionResolver(people))


def _keys(records):
    return [record.issue_key for record in records]


def test_facet_of_drops_empty_values():
    facet = Facet.of(["Core", "", None])

    assert facet.values == frozenset({"Core"})
    assert facet.active
    assert not Facet.of([""]).active


def test_facet_accepts_with_invert():
    facet = Facet.of(["Core"])
    inverted = Facet.of(["Core"], invert=True)

    assert facet.accepts("Core")
    assert not facet.accepts(None)
    assert not inverted.accepts("Core")
    assert inverted.accepts(None)


def test_empty_spec_returns_copy(engine, sample_records):
    result = engine.filter(sample_records, FilterSpec())

    assert result == sample_records
    assert result is not sample_records


def test_filter_is_order_preserving_subset(engine, sample_records):
    spec = FilterSpec(status=Facet.of(["Done"]))
    result = engine.filter(sample_records, spec)

    assert _keys(result) == ["ABC-1", "XYZ-7", "XYZ-8"]
    assert all(record in sample_records for record in result)


def test_team_facet_uses_resolved_attribution(engine, sample_records):
    sample_records[3].overrides = Overrides(team="Core")
    spec = FilterSpec(team=Facet.of(["Core"]))

    assert _keys(engine.filter(sample_records, spec)) == ["ABC-1", "ABC-2", "XYZ-8"]


def test_project_not_facet_keeps_unassigned(engine, sample_records):
    spec = FilterSpec(project=Facet.of(["Alpha"], invert=True))

    # Bor has no project, Cene is unregistered: both pass the exclusion
    assert _keys(engine.filter(sample_records, spec)) == ["XYZ-7", "XYZ-8"]


def test_person_facet_passes_unmatched_records(engine, sample_records):
    spec = FilterSpec(person=Facet.of(["Bor Novak"]))

    # Cene matches no registered person, so the person facet does not apply
    assert _keys(engine.filter(sample_records, spec)) == ["XYZ-7", "XYZ-8"]


def test_inverted_role_facet(engine, sample_records):
    spec = FilterSpec(role=Facet.of(["Developer"], invert=True))

    assert _keys(engine.filter(sample_records, spec)) == ["XYZ-7", "XYZ-8"]


def test_field_facets(engine, sample_records):
    assert _keys(engine.filter(sample_records, FilterSpec(activity=Facet.of(["Development"])))) == ["ABC-1", "XYZ-7"]
    assert _keys(engine.filter(sample_records, FilterSpec(project_key=Facet.of(["XYZ"], invert=True)))) == ["ABC-1", "ABC-2"]
    assert _keys(engine.filter(sample_records, FilterSpec(servis=Facet.of(["S1"])))) == ["ABC-1", "XYZ-8"]


def test_not_servis_keeps_records_without_servis(engine, sample_records):
    spec = FilterSpec(servis=Facet.of(["S1"], invert=True))

    assert _keys(engine.filter(sample_records, spec)) == ["ABC-2", "XYZ-7"]


def test_facets_combine_with_and(engine, sample_records):
    spec = FilterSpec(
        activity=Facet.of(["Development"]),
        status=Facet.of(["Done"]),
        project_key=Facet.of(["ABC"]),
    )

    assert _keys(engine.filter(sample_records, spec)) == ["ABC-1"]


def test_work_date_bounds_are_inclusive_and_date_only(engine, sample_records):
    spec = FilterSpec(work_date_start="2024-03-18", work_date_end="2024-04-02")

    assert _keys(engine.filter(sample_records, spec)) == ["ABC-2", "XYZ-7"]


def test_work_date_filter_excludes_undated(engine, sample_records, make_record):
    records = sample_records + [make_record(name="Ana Kovac", key="NODATE-1", hours="1")]
    spec = FilterSpec(work_date_start="2000-01-01")

    assert "NODATE-1" not in _keys(engine.filter(records, spec))


def test_summary_search_case_insensitive(engine, sample_records):
    spec = FilterSpec(issue_summary="LOGIN")

    assert _keys(engine.filter(sample_records, spec)) == ["ABC-1"]


def test_summary_search_inverted(engine, sample_records):
    spec = FilterSpec(issue_summary="login", issue_summary_invert=True)

    assert _keys(engine.filter(sample_records, spec)) == ["ABC-2", "XYZ-7", "XYZ-8"]


def test_spec_is_empty():
    assert FilterSpec().is_empty()
    assert FilterSpec(team=Facet.of([""])).is_empty()
    assert not FilterSpec(issue_summary="x").is_empty()
    assert not FilterSpec(work_date_end="2024-01-01").is_empty()
