"""Tests for hours parsing."""

import pytest

from timesheet_explorer.utils.hours_parser import parse_hours


@pytest.mark.parametrize(
    "value, expected",
    [
        ("7.5", 7.5),
        (" 2 ", 2.0),
        ("0", 0.0),
        (".25", 0.25),
        ("1.25h", 1.25),
        ("3 hours", 3.0),
        ("1e1", 10.0),
    ],
)
def test_parse_hours_valid(value, expected):
    assert parse_hours(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [None, "", "abc", "h2", "-3", "1e400", "inf", "NaN"])
def test_parse_hours_invalid_yields_zero(value):
    assert parse_hours(value) == 0.0
