from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Set

from ..core.dates import combine
from ..domain import CalendarEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Toast:
    id: str
    event_id: str
    title: str
    message: str
    starts_at: datetime


@dataclass(frozen=True, slots=True)
class Notification:
    event_id: str
    title: str
    calendar: str
    starts_at: datetime
    all_day: bool
    read: bool = False


def _reminder_message(remaining: timedelta) -> str:
    minutes = int(remaining.total_seconds() // 60)
    if minutes <= 0:
        return "Starting now"
    if minutes == 1:
        return "Starts in 1 minute"
    return f"Starts in {minutes} minutes"


class NotificationEngine:
    """Derives reminder toasts and the notification list from the event set.

    Toasts cover timed events whose reminder window contains ``now``; a
    dismissed toast stays suppressed until the event moves to another start.
    Notifications list everything from one day ago through ``lookahead``.
    """

    def __init__(
        self,
        *,
        now: Callable[[], datetime] = datetime.now,
        default_lead: timedelta = timedelta(minutes=15),
        lookahead: timedelta = timedelta(days=7),
    ) -> None:
        self._now = now
        self._default_lead = default_lead
        self._lookahead = lookahead
        self._toasts: List[Toast] = []
        self._notifications: List[Notification] = []
        self._dismissed: Set[str] = set()
        self._read: Set[str] = set()

    @property
    def toasts(self) -> List[Toast]:
        return list(self._toasts)

    @property
    def notifications(self) -> List[Notification]:
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self._notifications if not item.read)

    def _lead_for(self, event: CalendarEvent) -> timedelta:
        if event.reminder_minutes is not None:
            return timedelta(minutes=event.reminder_minutes)
        return self._default_lead

    def refresh(self, events: Iterable[CalendarEvent]) -> None:
        current = self._now()
        toasts: List[Toast] = []
        notifications: List[Notification] = []
        due: Set[str] = set()
        for event in events:
            try:
                starts_at = combine(event.date, event.start_time)
            except ValueError:
                logger.debug("Skipping event %s with unusable date/time", event.id)
                continue

            if not event.all_day and starts_at - self._lead_for(event) <= current <= starts_at:
                toast_id = f"{event.id}@{starts_at.isoformat(timespec='minutes')}"
                due.add(toast_id)
                if toast_id not in self._dismissed:
                    toasts.append(
                        Toast(
                            id=toast_id,
                            event_id=event.id,
                            title=event.title,
                            message=_reminder_message(starts_at - current),
                            starts_at=starts_at,
                        )
                    )

            if current - timedelta(days=1) <= starts_at <= current + self._lookahead:
                notifications.append(
                    Notification(
                        event_id=event.id,
                        title=event.title,
                        calendar=event.calendar,
                        starts_at=starts_at,
                        all_day=event.all_day,
                        read=event.id in self._read,
                    )
                )

        toasts.sort(key=lambda item: item.starts_at)
        notifications.sort(key=lambda item: item.starts_at)
        if len(toasts) > len(self._toasts):
            logger.info("%d reminder(s) due", len(toasts))
        self._toasts = toasts
        self._notifications = notifications
        # Remember only ids that are still due or listed.
        self._dismissed &= due
        self._read &= {item.event_id for item in notifications}

    def dismiss(self, toast_id: str) -> None:
        remaining = [toast for toast in self._toasts if toast.id != toast_id]
        if len(remaining) == len(self._toasts):
            return
        self._dismissed.add(toast_id)
        self._toasts = remaining

    def mark_all_read(self) -> None:
        self._read.update(item.event_id for item in self._notifications)
        self._notifications = [replace(item, read=True) for item in self._notifications]
