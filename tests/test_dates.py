"""Date helpers: month grid shape, month arithmetic, time parsing."""

import calendar
from datetime import datetime, time

import pytest

from calview.core.dates import (
    GRID_COLUMNS,
    GRID_ROWS,
    combine,
    month_grid,
    month_label,
    parse_time,
    weekday_labels,
)
from calview.domain import DateValue


@pytest.mark.parametrize(("year", "month"), [(2025, 1), (2025, 3), (2024, 1), (2026, 1), (2000, 11)])
def test_grid_is_always_six_by_seven(year, month):
    grid = month_grid(year, month)
    assert len(grid) == GRID_ROWS
    assert all(len(row) == GRID_COLUMNS for row in grid)
    in_month = [cell for row in grid for cell in row if not cell.overflow]
    assert [cell.day for cell in in_month] == list(range(1, calendar.monthrange(year, month + 1)[1] + 1))
    assert all((cell.year, cell.month) == (year, month) for cell in in_month)


def test_grid_starts_on_sunday_with_leading_overflow():
    # April 2025 begins on a Tuesday.
    first_row = month_grid(2025, 3)[0]
    assert [(cell.month, cell.day, cell.overflow) for cell in first_row[:3]] == [
        (2, 30, True),
        (2, 31, True),
        (3, 1, False),
    ]
    assert first_row[0].date == DateValue(2025, 2, 30)


def test_grid_can_start_on_monday():
    first_row = month_grid(2025, 3, week_start=calendar.MONDAY)[0]
    assert [(cell.day, cell.overflow) for cell in first_row[:2]] == [(31, True), (1, False)]


def test_december_grid_trails_into_next_year():
    last = month_grid(2025, 11)[-1][-1]
    assert (last.year, last.month, last.overflow) == (2026, 0, True)


def test_month_label_and_weekday_labels():
    assert month_label(2025, 2) == "March 2025"
    assert weekday_labels()[0] == calendar.day_abbr[calendar.SUNDAY]
    assert weekday_labels(calendar.MONDAY)[-1] == calendar.day_abbr[calendar.SUNDAY]


def test_parse_time():
    assert parse_time("07:05") == time(7, 5)
    assert parse_time("") is None
    assert parse_time(None) is None


@pytest.mark.parametrize("value", ["7", "7:5", "9:00", "0009:00", "25:00", "12:60", "noon", "12:00 "])
def test_parse_time_rejects_malformed_values(value):
    with pytest.raises(ValueError):
        parse_time(value)


def test_combine_defaults_to_midnight():
    assert combine(DateValue(2025, 3, 15)) == datetime(2025, 4, 15)
    assert combine(DateValue(2025, 3, 15), "18:30") == datetime(2025, 4, 15, 18, 30)
