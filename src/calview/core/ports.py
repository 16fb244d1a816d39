from __future__ import annotations

from typing import Callable, Iterable, List, Protocol, Sequence

from ..domain import CalendarEvent, DateValue, EventDraft


class EventStore(Protocol):
    def save(self, draft: EventDraft) -> CalendarEvent:
        """Insert or update; raises ``ValidationError`` or ``NotFoundError``."""

    def delete(self, event_id: str, date: DateValue) -> None:
        """Remove an event; raises ``NotFoundError``."""

    def list_events(self) -> List[CalendarEvent]:
        ...

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        ...


class NotificationSource(Protocol):
    @property
    def toasts(self) -> Sequence:
        ...

    @property
    def notifications(self) -> Sequence:
        ...

    @property
    def unread_count(self) -> int:
        ...

    def refresh(self, events: Iterable[CalendarEvent]) -> None:
        ...

    def dismiss(self, toast_id: str) -> None:
        ...

    def mark_all_read(self) -> None:
        ...
