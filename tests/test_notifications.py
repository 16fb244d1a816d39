"""Notification engine: reminder toasts and the bell list.

Invariants:
    - A toast exists only while start - lead <= now <= start
    - All-day events are listed but never toast
    - A dismissed toast stays gone across refreshes while its event is due
    - Dismissal and read state only cover events still present
"""

from datetime import datetime, timedelta

import pytest

from calview.domain import CalendarEvent, DateValue
from calview.services import NotificationEngine

APRIL_15 = DateValue(2025, 3, 15)


def _event(event_id="evt_0001", *, day=APRIL_15, start="09:10", reminder=None, title="Standup"):
    return CalendarEvent(
        id=event_id,
        title=title,
        date=day,
        calendar="Work",
        start_time=start,
        reminder_minutes=reminder,
    )


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        ("09:00", True),
        ("09:15", True),
        ("09:16", False),
        ("08:59", False),
    ],
)
def test_toast_window_uses_default_lead(engine, start, expected):
    engine.refresh([_event(start=start)])
    assert bool(engine.toasts) is expected


def test_per_event_reminder_overrides_default(engine):
    engine.refresh([_event(start="09:45", reminder=60), _event("evt_0002", start="09:10", reminder=5)])
    assert [toast.event_id for toast in engine.toasts] == ["evt_0001"]


def test_zero_minute_reminder_fires_only_at_start(engine):
    engine.refresh([_event(start="09:00", reminder=0)])
    assert [toast.message for toast in engine.toasts] == ["Starting now"]


def test_all_day_events_never_toast(engine):
    engine.refresh([_event(start=None)])
    assert engine.toasts == []
    assert [item.all_day for item in engine.notifications] == [True]


def test_toast_id_and_message(engine):
    engine.refresh([_event(start="09:10")])
    toast = engine.toasts[0]
    assert toast.id == "evt_0001@2025-04-15T09:10"
    assert toast.message == "Starts in 10 minutes"
    assert toast.starts_at == datetime(2025, 4, 15, 9, 10)


def test_one_minute_message(now):
    engine = NotificationEngine(now=lambda: now + timedelta(minutes=9))
    engine.refresh([_event(start="09:10")])
    assert engine.toasts[0].message == "Starts in 1 minute"


def test_toasts_sorted_by_start(engine):
    engine.refresh([_event("late", start="09:12"), _event("early", start="09:05")])
    assert [toast.event_id for toast in engine.toasts] == ["early", "late"]


def test_dismissed_toast_stays_suppressed(engine):
    events = [_event(start="09:10"), _event("evt_0002", start="09:05")]
    engine.refresh(events)
    engine.dismiss("evt_0001@2025-04-15T09:10")
    assert [toast.event_id for toast in engine.toasts] == ["evt_0002"]
    engine.refresh(events)
    assert [toast.event_id for toast in engine.toasts] == ["evt_0002"]


def test_moved_event_toasts_again_after_dismissal(engine):
    engine.refresh([_event(start="09:10")])
    engine.dismiss("evt_0001@2025-04-15T09:10")
    engine.refresh([_event(start="09:12")])
    assert [toast.id for toast in engine.toasts] == ["evt_0001@2025-04-15T09:12"]


def test_dismiss_unknown_toast_is_noop(engine):
    engine.refresh([_event(start="09:10")])
    engine.dismiss("missing@2025-04-15T09:10")
    assert len(engine.toasts) == 1


def test_notification_range_covers_yesterday_through_lookahead(engine):
    events = [
        _event("too-old", day=DateValue(2025, 3, 14), start="08:59"),
        _event("yesterday", day=DateValue(2025, 3, 14), start="09:00"),
        _event("next-week", day=DateValue(2025, 3, 22), start="09:00"),
        _event("too-far", day=DateValue(2025, 3, 22), start="09:01"),
    ]
    engine.refresh(events)
    assert [item.event_id for item in engine.notifications] == ["yesterday", "next-week"]


def test_mark_all_read_survives_refresh(engine):
    events = [_event(start="11:00"), _event("evt_0002", start="12:00")]
    engine.refresh(events)
    assert engine.unread_count == 2
    engine.mark_all_read()
    assert engine.unread_count == 0
    engine.refresh(events + [_event("evt_0003", start="13:00")])
    assert engine.unread_count == 1
    assert [item.read for item in engine.notifications] == [True, True, False]


def test_events_with_impossible_dates_are_skipped(engine):
    engine.refresh([_event(day=DateValue(2025, 1, 30)), _event("evt_0002")])
    assert [item.event_id for item in engine.notifications] == ["evt_0002"]


def test_dismissal_is_forgotten_once_the_event_is_gone(engine):
    engine.refresh([_event(start="09:10")])
    engine.dismiss("evt_0001@2025-04-15T09:10")
    engine.refresh([])
    engine.refresh([_event(start="09:10")])
    assert [toast.id for toast in engine.toasts] == ["evt_0001@2025-04-15T09:10"]


def test_read_mark_is_forgotten_once_the_event_is_gone(engine):
    engine.refresh([_event(start="11:00")])
    engine.mark_all_read()
    engine.refresh([])
    engine.refresh([_event(start="11:00")])
    assert engine.unread_count == 1


def test_dismissal_and_read_state_stay_bounded(engine):
    for index in range(50):
        event = _event(f"evt_{index:04d}", start="09:10")
        engine.refresh([event])
        engine.dismiss(f"{event.id}@2025-04-15T09:10")
        engine.mark_all_read()
    engine.refresh([])
    assert engine.toasts == []
    assert engine.notifications == []
    assert engine._dismissed == set()
    assert engine._read == set()
