"""Domain models for the month-view calendar."""

from __future__ import annotations

from .enums import CalendarColor
from .errors import EventStoreError, NotFoundError, PersistenceError, ValidationError
from .models import (
    DEFAULT_CALENDARS,
    NO_MODAL,
    CalendarEntry,
    CalendarEvent,
    CalendarFilter,
    CreateModal,
    DateValue,
    EditModal,
    EventDraft,
    ModalState,
    NoModal,
    SelectionState,
    ViewState,
)

__all__ = [
    "CalendarColor",
    "CalendarEntry",
    "CalendarEvent",
    "CalendarFilter",
    "CreateModal",
    "DEFAULT_CALENDARS",
    "DateValue",
    "EditModal",
    "EventDraft",
    "EventStoreError",
    "ModalState",
    "NO_MODAL",
    "NoModal",
    "NotFoundError",
    "PersistenceError",
    "SelectionState",
    "ValidationError",
    "ViewState",
]
