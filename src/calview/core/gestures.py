"""Gesture inputs accepted by the controller and the effects they request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..domain import CalendarEvent, DateValue, EventDraft


# ------------------------------------------------------------------ navigation


@dataclass(frozen=True, slots=True)
class PreviousMonth:
    pass


@dataclass(frozen=True, slots=True)
class NextMonth:
    pass


@dataclass(frozen=True, slots=True)
class GoToday:
    today: DateValue


@dataclass(frozen=True, slots=True)
class JumpToMonth:
    year: int
    month: int


# ------------------------------------------------------------------ selection & filters


@dataclass(frozen=True, slots=True)
class SelectDate:
    date: DateValue


@dataclass(frozen=True, slots=True)
class ToggleCalendar:
    name: str


@dataclass(frozen=True, slots=True)
class SetSidebarOpen:
    open: bool


@dataclass(frozen=True, slots=True)
class ToggleSidebar:
    pass


# ------------------------------------------------------------------ modal workflow


@dataclass(frozen=True, slots=True)
class OpenCreate:
    date: DateValue


@dataclass(frozen=True, slots=True)
class OpenEdit:
    event: CalendarEvent
    date: DateValue


@dataclass(frozen=True, slots=True)
class CloseModal:
    pass


@dataclass(frozen=True, slots=True)
class SaveRequested:
    draft: EventDraft


@dataclass(frozen=True, slots=True)
class DeleteRequested:
    event_id: str
    date: DateValue


# ------------------------------------------------------------------ composite UI gestures


@dataclass(frozen=True, slots=True)
class DayCellClicked:
    year: int
    month: int
    day: int
    overflow: bool = False

    @property
    def date(self) -> DateValue:
        return DateValue(year=self.year, month=self.month, day=self.day)


@dataclass(frozen=True, slots=True)
class EventClicked:
    event: CalendarEvent
    date: DateValue


@dataclass(frozen=True, slots=True)
class SidebarDatePicked:
    date: DateValue


@dataclass(frozen=True, slots=True)
class SidebarCreateRequested:
    date: DateValue


@dataclass(frozen=True, slots=True)
class DismissToast:
    toast_id: str


Gesture = Union[
    PreviousMonth,
    NextMonth,
    GoToday,
    JumpToMonth,
    SelectDate,
    ToggleCalendar,
    SetSidebarOpen,
    ToggleSidebar,
    OpenCreate,
    OpenEdit,
    CloseModal,
    SaveRequested,
    DeleteRequested,
    DayCellClicked,
    EventClicked,
    SidebarDatePicked,
    SidebarCreateRequested,
    DismissToast,
]


# ------------------------------------------------------------------ effects


@dataclass(frozen=True, slots=True)
class SaveEvent:
    draft: EventDraft


@dataclass(frozen=True, slots=True)
class DeleteEvent:
    event_id: str
    date: DateValue


@dataclass(frozen=True, slots=True)
class DismissToastEffect:
    toast_id: str


Effect = Union[SaveEvent, DeleteEvent, DismissToastEffect]
