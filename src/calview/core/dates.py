"""Date helpers for the month view.

Months are zero-based throughout, matching ``DateValue`` and ``ViewState``.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from ..domain import DateValue

GRID_ROWS = 6
GRID_COLUMNS = 7


@dataclass(frozen=True, slots=True)
class MonthCell:
    """One cell of the month grid; ``overflow`` marks days of an adjacent month."""

    year: int
    month: int
    day: int
    overflow: bool = False

    @property
    def date(self) -> DateValue:
        return DateValue(year=self.year, month=self.month, day=self.day)


def today() -> DateValue:
    return DateValue.from_date(date.today())


def month_label(year: int, month: int) -> str:
    return f"{calendar.month_name[month + 1]} {year}"


def weekday_labels(week_start: int = calendar.SUNDAY) -> List[str]:
    return [calendar.day_abbr[(week_start + offset) % 7] for offset in range(GRID_COLUMNS)]


def month_grid(year: int, month: int, *, week_start: int = calendar.SUNDAY) -> List[List[MonthCell]]:
    """Return a fixed 6x7 grid for the month, padded with overflow cells."""

    first = date(year, month + 1, 1)
    offset = (first.weekday() - week_start) % GRID_COLUMNS
    cursor = first - timedelta(days=offset)
    rows: List[List[MonthCell]] = []
    for _ in range(GRID_ROWS):
        row = []
        for _ in range(GRID_COLUMNS):
            row.append(
                MonthCell(
                    year=cursor.year,
                    month=cursor.month - 1,
                    day=cursor.day,
                    overflow=(cursor.year, cursor.month) != (first.year, first.month),
                )
            )
            cursor += timedelta(days=1)
        rows.append(row)
    return rows


def parse_time(value: Optional[str]) -> Optional[time]:
    """Parse an ``HH:MM`` string; blank values mean all-day and return ``None``."""

    if not value:
        return None
    hours, sep, minutes = value.partition(":")
    if not (sep and len(hours) == 2 and len(minutes) == 2 and value.isascii() and (hours + minutes).isdigit()):
        raise ValueError(f"Expected HH:MM, got {value!r}")
    return time(int(hours), int(minutes))


def combine(value: DateValue, at: Optional[str] = None) -> datetime:
    return datetime.combine(value.to_date(), parse_time(at) or time.min)
