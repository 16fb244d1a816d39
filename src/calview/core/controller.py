from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Sequence

from ..domain import (
    CalendarColor,
    CalendarEvent,
    CalendarFilter,
    DateValue,
    EventDraft,
    EventStoreError,
    ModalState,
    SelectionState,
    ViewState,
)
from . import dates
from .gestures import (
    CloseModal,
    DayCellClicked,
    DeleteEvent,
    DeleteRequested,
    DismissToast,
    DismissToastEffect,
    Effect,
    EventClicked,
    Gesture,
    GoToday,
    JumpToMonth,
    NextMonth,
    OpenCreate,
    OpenEdit,
    PreviousMonth,
    SaveEvent,
    SaveRequested,
    SelectDate,
    SetSidebarOpen,
    SidebarCreateRequested,
    SidebarDatePicked,
    ToggleCalendar,
    ToggleSidebar,
)
from .ports import EventStore, NotificationSource
from .state import ControllerState, initial_state
from .transitions import reduce

logger = logging.getLogger(__name__)

Listener = Callable[[ControllerState], None]


class CalendarController:
    """Owns the view, selection, filter and modal slices of the month view.

    Every mutation goes through ``dispatch``: the gesture is reduced to a new
    state and a list of effects while holding a single lock, effects run
    against the store and the notification engine, and the post-effect state
    is committed only when none of them raised. Listeners are notified after
    the lock is released.
    """

    def __init__(
        self,
        store: EventStore,
        notifications: NotificationSource,
        *,
        today: Callable[[], DateValue] = dates.today,
        sidebar_open: bool = True,
        calendars: Optional[CalendarFilter] = None,
    ) -> None:
        self._store = store
        self._notifications = notifications
        self._today = today
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._state = initial_state(today(), sidebar_open=sidebar_open, calendars=calendars)
        self._notifications.refresh(self._store.list_events())
        self._unsubscribe_store = self._store.subscribe(self._on_events_changed)

    # ------------------------------------------------------------------ state access

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def view(self) -> ViewState:
        return self._state.view

    @property
    def selection(self) -> SelectionState:
        return self._state.selection

    @property
    def selected_date(self) -> Optional[DateValue]:
        return self._state.selection.selected_date

    @property
    def sidebar_open(self) -> bool:
        return self._state.selection.sidebar_open

    @property
    def calendars(self) -> CalendarFilter:
        return self._state.calendars

    @property
    def modal(self) -> ModalState:
        return self._state.modal

    @property
    def events(self) -> List[CalendarEvent]:
        return self._store.list_events()

    @property
    def toasts(self) -> Sequence:
        return self._notifications.toasts

    @property
    def notifications(self) -> Sequence:
        return self._notifications.notifications

    @property
    def unread_count(self) -> int:
        return self._notifications.unread_count

    def visible_calendars(self) -> List[str]:
        return self._state.calendars.visible()

    def calendar_color(self, name: str) -> Optional[CalendarColor]:
        entry = self._state.calendars.get(name)
        return entry.color if entry else None

    def today(self) -> DateValue:
        return self._today()

    # ------------------------------------------------------------------ listeners

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: ControllerState) -> None:
        for listener in list(self._listeners):
            listener(state)

    # ------------------------------------------------------------------ dispatch

    def dispatch(self, gesture: Gesture) -> ControllerState:
        with self._lock:
            before = self._state
            transition = reduce(before, gesture)
            self._state = transition.state
            logger.debug("%s -> %s", type(gesture).__name__, transition.state.modal)
            try:
                for effect in transition.effects:
                    self._run_effect(effect)
            except EventStoreError as exc:
                logger.warning("%s rejected by event store: %s", type(gesture).__name__, exc)
                raise
            if transition.on_success is not None:
                self._state = transition.on_success
            after = self._state
        if after is not before or transition.effects:
            self._notify(after)
        return after

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, SaveEvent):
            saved = self._store.save(effect.draft)
            logger.info("Saved event %s on %s", saved.id, saved.date.iso)
        elif isinstance(effect, DeleteEvent):
            self._store.delete(effect.event_id, effect.date)
            logger.info("Deleted event %s on %s", effect.event_id, effect.date.iso)
        elif isinstance(effect, DismissToastEffect):
            self._notifications.dismiss(effect.toast_id)
        else:
            raise TypeError(f"Unsupported effect: {type(effect).__name__}")

    def _on_events_changed(self) -> None:
        with self._lock:
            self._notifications.refresh(self._store.list_events())

    def refresh_notifications(self) -> None:
        """Re-derive reminders against the current clock; used by the reminder timer."""

        with self._lock:
            self._notifications.refresh(self._store.list_events())
            state = self._state
        self._notify(state)

    def mark_notifications_read(self) -> None:
        with self._lock:
            self._notifications.mark_all_read()
            state = self._state
        self._notify(state)

    def close(self) -> None:
        self._unsubscribe_store()
        self._listeners.clear()

    # ------------------------------------------------------------------ navigation

    def go_to_previous_month(self) -> ViewState:
        return self.dispatch(PreviousMonth()).view

    def go_to_next_month(self) -> ViewState:
        return self.dispatch(NextMonth()).view

    def go_to_today(self) -> ViewState:
        return self.dispatch(GoToday(self._today())).view

    def jump_to_month(self, year: int, month: int) -> ViewState:
        return self.dispatch(JumpToMonth(year, month)).view

    # ------------------------------------------------------------------ selection & filters

    def select_date(self, date: DateValue) -> None:
        self.dispatch(SelectDate(date))

    def toggle_calendar_visibility(self, name: str) -> None:
        self.dispatch(ToggleCalendar(name))

    def set_sidebar_open(self, flag: bool) -> None:
        self.dispatch(SetSidebarOpen(flag))

    def toggle_sidebar(self) -> None:
        self.dispatch(ToggleSidebar())

    # ------------------------------------------------------------------ modal workflow

    def open_create(self, date: DateValue) -> ModalState:
        return self.dispatch(OpenCreate(date)).modal

    def open_edit(self, event: CalendarEvent, date: DateValue) -> ModalState:
        return self.dispatch(OpenEdit(event, date)).modal

    def close_modal(self) -> None:
        self.dispatch(CloseModal())

    def save(self, draft: EventDraft) -> None:
        self.dispatch(SaveRequested(draft))

    def delete(self, event_id: str, date: DateValue) -> None:
        self.dispatch(DeleteRequested(event_id, date))

    # ------------------------------------------------------------------ gestures

    def day_click(self, year: int, month: int, day: int, *, overflow: bool = False) -> ControllerState:
        return self.dispatch(DayCellClicked(year, month, day, overflow))

    def event_click(self, event: CalendarEvent, date: DateValue) -> ControllerState:
        return self.dispatch(EventClicked(event, date))

    def sidebar_date_pick(self, date: DateValue) -> ControllerState:
        return self.dispatch(SidebarDatePicked(date))

    def sidebar_create_event(self, date: DateValue) -> ControllerState:
        return self.dispatch(SidebarCreateRequested(date))

    def dismiss_toast(self, toast_id: str) -> None:
        self.dispatch(DismissToast(toast_id))
