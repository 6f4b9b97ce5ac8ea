"""Tests for calendar bucketing."""

from datetime import date

import pytest

from timesheet_explorer.domain.attribution import AttributionResolver
from timesheet_explorer.domain.entities import Granularity, ReportType
from timesheet_explorer.domain.registry import ServisMapping
from timesheet_explorer.domain.summary import Aggregator
from timesheet_explorer.domain.time_buckets import (
    TimeBucketer,
    bucket_key,
    iso_week_number,
    period_label,
    week_monday,
)


@pytest.fixture
def bucketer(people):
    return TimeBucketer(Aggregator(AttributionResolver(people), ServisMapping()))


@pytest.mark.parametrize(
    "granularity, expected",
    [
        (Granularity.DAILY, "2024-03-15"),
        (Granularity.WEEKLY, "2024-03-11"),
        (Granularity.MONTHLY, "2024-03"),
        (Granularity.QUARTERLY, "2024-Q1"),
    ],
)
def test_bucket_key(granularity, expected):
    assert bucket_key(date(2024, 3, 15), granularity) == expected


@pytest.mark.parametrize(
    "day, quarter",
    [(date(2024, 1, 1), "2024-Q1"), (date(2024, 4, 1), "2024-Q2"), (date(2024, 9, 30), "2024-Q3"), (date(2024, 12, 31), "2024-Q4")],
)
def test_quarter_keys(day, quarter):
    assert bucket_key(day, "quarterly") == quarter


def test_week_monday():
    assert week_monday(date(2024, 3, 17)) == date(2024, 3, 11)
    assert week_monday(date(2024, 3, 11)) == date(2024, 3, 11)


@pytest.mark.parametrize(
    "day, week",
    [
        (date(2024, 1, 1), 1),
        (date(2024, 3, 11), 11),
        (date(2021, 1, 4), 1),
        (date(2020, 12, 28), 53),
    ],
)
def test_iso_week_number(day, week):
    assert iso_week_number(day) == week
    assert iso_week_number(day) == day.isocalendar()[1]


def test_period_labels():
    assert period_label("2024-03-11", Granularity.WEEKLY) == "Week 11, 2024"
    assert period_label("2024-03", Granularity.MONTHLY) == "Mar 2024"
    assert period_label("2024-Q1", Granularity.QUARTERLY) == "2024-Q1"
    assert period_label("2024-03-15", Granularity.DAILY) == "2024-03-15"


def test_bucket_monthly_by_person(bucketer, sample_records):
    periods = bucketer.bucket(sample_records, Granularity.MONTHLY, ReportType.PERSON)

    assert [period.key for period in periods] == ["2024-03", "2024-04"]
    assert periods[0].total == 6.5
    assert periods[0].breakdown == {"Ana Kovac": 6.5}
    assert periods[1].breakdown == {"Bor Novak": 3.0, "Cene Zupan": 1.0}


def test_bucket_weekly_keys_are_mondays(bucketer, sample_records):
    periods = bucketer.bucket(sample_records, Granularity.WEEKLY, ReportType.TEAM)

    assert [period.key for period in periods] == ["2024-03-11", "2024-03-18", "2024-04-01"]
    for period in periods:
        assert date.fromisoformat(period.key).weekday() == 0


def test_bucket_totals_match_breakdowns(bucketer, sample_records):
    for granularity in Granularity:
        periods = bucketer.bucket(sample_records, granularity, ReportType.ACTIVITY)
        for period in periods:
            assert period.total == pytest.approx(sum(period.breakdown.values()))
        assert sum(period.total for period in periods) == pytest.approx(10.5)


def test_bucket_skips_unparseable_dates(bucketer, make_record):
    records = [
        make_record(name="Ana Kovac", hours="2", date="2024-02-01"),
        make_record(name="Ana Kovac", hours="5", date="01.02.2024"),
        make_record(name="Ana Kovac", hours="7"),
    ]

    periods = bucketer.bucket(records, Granularity.DAILY, ReportType.PERSON)

    assert len(periods) == 1
    assert periods[0].key == "2024-02-01"
    assert periods[0].total == 2.0


def test_bucket_output_sorted_regardless_of_input_order(bucketer, sample_records):
    periods = bucketer.bucket(list(reversed(sample_records)), Granularity.DAILY, ReportType.PERSON)
    keys = [period.key for period in periods]

    assert keys == sorted(keys)
