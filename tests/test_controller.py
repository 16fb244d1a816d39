"""Calendar controller: gestures wired to the store and the reminder engine.

Invariants:
    - The modal never closes on a failed save or delete
    - Store errors propagate unchanged to the caller
    - Listeners see every committed change and nothing on a failure
"""

from datetime import datetime

import pytest

from calview.core import CalendarController
from calview.data import JsonEventStore
from calview.domain import (
    NO_MODAL,
    CreateModal,
    DateValue,
    EditModal,
    EventDraft,
    NotFoundError,
    PersistenceError,
    ValidationError,
    ViewState,
)
from calview.services import NotificationEngine


class RejectingStore:
    """Store double that refuses every write."""

    def save(self, draft):
        raise ValidationError(["Title is required."])

    def delete(self, event_id, date):
        raise NotFoundError(event_id)

    def list_events(self):
        return []

    def subscribe(self, callback):
        return lambda: None


def test_initial_view_comes_from_today(controller):
    assert controller.view == ViewState(2025, 3)
    assert controller.selected_date is None
    assert controller.modal == NO_MODAL
    assert controller.sidebar_open is True


def test_navigation_methods(controller):
    assert controller.go_to_previous_month() == ViewState(2025, 2)
    assert controller.go_to_next_month() == ViewState(2025, 3)
    controller.jump_to_month(2030, 0)
    assert controller.go_to_previous_month() == ViewState(2029, 11)


def test_go_to_today_selects_today(controller, today):
    controller.jump_to_month(1999, 4)
    assert controller.go_to_today() == ViewState(2025, 3)
    assert controller.selected_date == today


def test_overflow_click_updates_all_slices_in_one_notification(controller):
    seen = []
    controller.subscribe(seen.append)
    controller.day_click(2025, 2, 31, overflow=True)
    assert controller.view == ViewState(2025, 2)
    assert controller.selected_date == DateValue(2025, 2, 31)
    assert controller.modal == CreateModal(DateValue(2025, 2, 31))
    assert len(seen) == 1
    assert seen[0] is controller.state


def test_successful_save_stores_event_and_closes_modal(controller, store):
    day = DateValue(2025, 3, 20)
    controller.day_click(day.year, day.month, day.day)
    controller.save(EventDraft(title="Lunch", date=day, start_time="12:00"))
    assert controller.modal == NO_MODAL
    assert [event.title for event in store.events_for_day(day)] == ["Lunch"]
    assert [event.title for event in controller.events] == ["Lunch"]


def test_failed_save_keeps_create_modal_open(controller):
    day = DateValue(2025, 3, 20)
    controller.open_create(day)
    seen = []
    controller.subscribe(seen.append)
    with pytest.raises(ValidationError) as excinfo:
        controller.save(EventDraft(title="  ", date=day))
    assert "Title is required." in excinfo.value.problems
    assert controller.modal == CreateModal(day)
    assert seen == []


def test_failed_save_keeps_edit_modal_open(controller, store):
    saved = store.save(EventDraft(title="Review", date=DateValue(2025, 3, 2), calendar="Work"))
    controller.event_click(saved, saved.date)
    with pytest.raises(ValidationError):
        controller.save(EventDraft(id=saved.id, title="Review", date=saved.date, start_time="25:00"))
    assert controller.modal == EditModal(event=saved, date=saved.date)


def test_edit_save_updates_in_place(controller, store):
    saved = store.save(EventDraft(title="Review", date=DateValue(2025, 3, 2), calendar="Work"))
    controller.event_click(saved, saved.date)
    controller.save(EventDraft(id=saved.id, title="Design review", date=saved.date, calendar="Work"))
    assert controller.modal == NO_MODAL
    assert [(event.id, event.title) for event in controller.events] == [(saved.id, "Design review")]


def test_delete_success_and_failure(controller, store):
    saved = store.save(EventDraft(title="Gym", date=DateValue(2025, 3, 5), calendar="Personal"))
    controller.event_click(saved, saved.date)

    with pytest.raises(NotFoundError):
        controller.delete("evt_9999", saved.date)
    assert controller.modal == EditModal(event=saved, date=saved.date)

    controller.delete(saved.id, saved.date)
    assert controller.modal == NO_MODAL
    assert controller.events == []


def test_store_errors_propagate_unmodified(engine, today):
    controller = CalendarController(RejectingStore(), engine, today=lambda: today)
    controller.open_create(today)
    with pytest.raises(ValidationError):
        controller.save(EventDraft(title="x", date=today))
    with pytest.raises(NotFoundError):
        controller.delete("evt_0001", today)
    assert controller.modal == CreateModal(today)


def test_unwritable_store_leaves_no_events_behind(tmp_path, engine, today):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = JsonEventStore(blocker / "events.json")
    controller = CalendarController(store, engine, today=lambda: today)
    controller.open_create(today)

    for _ in range(2):
        with pytest.raises(PersistenceError):
            controller.save(EventDraft(title="Lunch", date=today, start_time="12:00"))

    assert controller.modal == CreateModal(today)
    assert store.list_events() == []
    assert controller.events == []


def test_close_modal_twice(controller, today):
    controller.open_create(today)
    controller.close_modal()
    controller.close_modal()
    assert controller.modal == NO_MODAL


def test_toggle_calendar_visibility(controller):
    controller.toggle_calendar_visibility("Work")
    assert "Work" not in controller.visible_calendars()
    controller.toggle_calendar_visibility("Work")
    assert controller.visible_calendars() == ["My Events", "Work", "Personal"]


def test_unknown_calendar_toggle_does_not_notify(controller):
    seen = []
    controller.subscribe(seen.append)
    before = controller.calendars
    controller.toggle_calendar_visibility("Nonexistent")
    assert controller.calendars is before
    assert seen == []


def test_sidebar_gestures(controller):
    controller.toggle_sidebar()
    assert controller.sidebar_open is False
    controller.set_sidebar_open(True)
    assert controller.sidebar_open is True

    picked = DateValue(2024, 1, 29)
    controller.sidebar_date_pick(picked)
    assert controller.view == ViewState(2024, 1)
    assert controller.selected_date == picked
    assert controller.modal == NO_MODAL

    controller.sidebar_create_event(picked)
    assert controller.modal == CreateModal(picked)
    assert controller.view == ViewState(2024, 1)


def test_calendar_color_lookup(controller):
    assert controller.calendar_color("Work").value == "red"
    assert controller.calendar_color("Nonexistent") is None


def test_unsubscribe_stops_notifications(controller):
    seen = []
    unsubscribe = controller.subscribe(seen.append)
    controller.go_to_next_month()
    unsubscribe()
    controller.go_to_next_month()
    assert len(seen) == 1


def test_saving_refreshes_reminders(store, today):
    engine = NotificationEngine(now=lambda: datetime(2025, 4, 15, 8, 50))
    controller = CalendarController(store, engine, today=lambda: today)
    controller.save(EventDraft(title="Standup", date=today, start_time="09:00", calendar="Work"))
    assert [toast.title for toast in controller.toasts] == ["Standup"]
    assert controller.unread_count == 1


def test_dismiss_toast_goes_through_engine(store, today):
    engine = NotificationEngine(now=lambda: datetime(2025, 4, 15, 8, 50))
    store.save(EventDraft(title="Standup", date=today, start_time="09:00", calendar="Work"))
    controller = CalendarController(store, engine, today=lambda: today)
    seen = []
    controller.subscribe(seen.append)
    toast_id = controller.toasts[0].id
    controller.dismiss_toast(toast_id)
    assert controller.toasts == []
    assert len(seen) == 1
    controller.refresh_notifications()
    assert controller.toasts == []


def test_mark_notifications_read(store, today):
    engine = NotificationEngine(now=lambda: datetime(2025, 4, 15, 8, 0))
    store.save(EventDraft(title="Standup", date=today, start_time="09:00"))
    controller = CalendarController(store, engine, today=lambda: today)
    assert controller.unread_count == 1
    controller.mark_notifications_read()
    assert controller.unread_count == 0
    assert controller.notifications[0].read is True
