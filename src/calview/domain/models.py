from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Iterator, Optional, Union

from .enums import CalendarColor


@dataclass(frozen=True, slots=True)
class DateValue:
    """A calendar date with a zero-based month.

    Day-of-month bounds are not checked here; ``to_date`` raises for
    impossible dates.
    """

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: date) -> "DateValue":
        return cls(year=value.year, month=value.month - 1, day=value.day)

    @classmethod
    def from_iso(cls, value: str) -> "DateValue":
        return cls.from_date(date.fromisoformat(value))

    def to_date(self) -> date:
        return date(self.year, self.month + 1, self.day)

    @property
    def iso(self) -> str:
        return f"{self.year:04d}-{self.month + 1:02d}-{self.day:02d}"


@dataclass(frozen=True, slots=True)
class ViewState:
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 0 <= self.month <= 11:
            raise ValueError(f"month must be within 0..11, got {self.month}")


@dataclass(frozen=True, slots=True)
class SelectionState:
    selected_date: Optional[DateValue] = None
    sidebar_open: bool = True


@dataclass(frozen=True, slots=True)
class CalendarEntry:
    checked: bool
    color: CalendarColor


class CalendarFilter(Mapping):
    """Immutable name -> ``CalendarEntry`` map with a fixed key set."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, CalendarEntry]) -> None:
        self._entries: Dict[str, CalendarEntry] = dict(entries)

    def __getitem__(self, name: str) -> CalendarEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CalendarFilter):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._entries.items()))

    def __repr__(self) -> str:
        return f"CalendarFilter({self._entries!r})"

    def toggled(self, name: str) -> "CalendarFilter":
        """Return a copy with ``checked`` flipped for ``name``; unknown names return ``self``."""

        entry = self._entries.get(name)
        if entry is None:
            return self
        entries = dict(self._entries)
        entries[name] = replace(entry, checked=not entry.checked)
        return CalendarFilter(entries)

    def visible(self) -> list[str]:
        return [name for name, entry in self._entries.items() if entry.checked]


DEFAULT_CALENDARS = CalendarFilter(
    {
        "My Events": CalendarEntry(checked=True, color=CalendarColor.BLUE),
        "Work": CalendarEntry(checked=True, color=CalendarColor.RED),
        "Personal": CalendarEntry(checked=True, color=CalendarColor.GREEN),
    }
)


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    id: str
    title: str
    date: DateValue
    calendar: str = "My Events"
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    description: str = ""
    location: Optional[str] = None
    reminder_minutes: Optional[int] = None

    @property
    def all_day(self) -> bool:
        return not self.start_time

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CalendarEvent":
        reminder = record.get("reminder_minutes")
        return cls(
            id=str(record["id"]),
            title=str(record["title"]),
            date=DateValue.from_iso(record["date"]),
            calendar=record.get("calendar") or "My Events",
            start_time=record.get("start_time") or None,
            end_time=record.get("end_time") or None,
            description=record.get("description") or "",
            location=record.get("location"),
            reminder_minutes=int(reminder) if reminder is not None else None,
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.iso,
            "calendar": self.calendar,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "description": self.description,
            "location": self.location,
            "reminder_minutes": self.reminder_minutes,
        }


@dataclass(frozen=True, slots=True)
class EventDraft:
    """Payload handed to ``EventStore.save``; ``id`` is ``None`` for a new event."""

    title: str
    date: DateValue
    calendar: str = "My Events"
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    description: str = ""
    location: Optional[str] = None
    reminder_minutes: Optional[int] = None
    id: Optional[str] = None

    @classmethod
    def from_event(cls, event: CalendarEvent) -> "EventDraft":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date,
            calendar=event.calendar,
            start_time=event.start_time,
            end_time=event.end_time,
            description=event.description,
            location=event.location,
            reminder_minutes=event.reminder_minutes,
        )

    def to_event(self, event_id: str) -> CalendarEvent:
        return CalendarEvent(
            id=event_id,
            title=self.title.strip(),
            date=self.date,
            calendar=self.calendar,
            start_time=self.start_time or None,
            end_time=self.end_time or None,
            description=self.description.strip(),
            location=(self.location or "").strip() or None,
            reminder_minutes=self.reminder_minutes,
        )


@dataclass(frozen=True, slots=True)
class NoModal:
    pass


@dataclass(frozen=True, slots=True)
class CreateModal:
    date: DateValue


@dataclass(frozen=True, slots=True)
class EditModal:
    event: CalendarEvent
    date: DateValue


ModalState = Union[NoModal, CreateModal, EditModal]

NO_MODAL = NoModal()
