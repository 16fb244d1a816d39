"""Pure state transitions for every gesture the month view understands.

``reduce(state, gesture)`` never touches a collaborator. Persistence and toast
dismissal are returned as effects; ``Transition.on_success`` is the state to
commit once those effects have completed without raising.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple, Type

from ..domain import NO_MODAL, CreateModal, EditModal, ViewState
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
from .state import ControllerState


@dataclass(frozen=True, slots=True)
class Transition:
    state: ControllerState
    effects: Tuple[Effect, ...] = ()
    on_success: Optional[ControllerState] = None


Handler = Callable[[ControllerState, Gesture], Transition]

_HANDLERS: Dict[Type, Handler] = {}


def _handles(*gesture_types: Type) -> Callable[[Handler], Handler]:
    def decorator(func: Handler) -> Handler:
        for gesture_type in gesture_types:
            if gesture_type in _HANDLERS:
                raise ValueError(f"Gesture {gesture_type.__name__} already has a handler.")
            _HANDLERS[gesture_type] = func
        return func

    return decorator


def reduce(state: ControllerState, gesture: Gesture) -> Transition:
    handler = _HANDLERS.get(type(gesture))
    if handler is None:
        raise TypeError(f"Unsupported gesture: {type(gesture).__name__}")
    return handler(state, gesture)


# ------------------------------------------------------------------ view


def previous_month(view: ViewState) -> ViewState:
    if view.month == 0:
        return ViewState(year=view.year - 1, month=11)
    return ViewState(year=view.year, month=view.month - 1)


def next_month(view: ViewState) -> ViewState:
    if view.month == 11:
        return ViewState(year=view.year + 1, month=0)
    return ViewState(year=view.year, month=view.month + 1)


@_handles(PreviousMonth)
def _previous_month(state: ControllerState, gesture: PreviousMonth) -> Transition:
    return Transition(replace(state, view=previous_month(state.view)))


@_handles(NextMonth)
def _next_month(state: ControllerState, gesture: NextMonth) -> Transition:
    return Transition(replace(state, view=next_month(state.view)))


@_handles(GoToday)
def _go_today(state: ControllerState, gesture: GoToday) -> Transition:
    today = gesture.today
    return Transition(
        replace(
            state,
            view=ViewState(year=today.year, month=today.month),
            selection=replace(state.selection, selected_date=today),
        )
    )


@_handles(JumpToMonth)
def _jump_to_month(state: ControllerState, gesture: JumpToMonth) -> Transition:
    return Transition(replace(state, view=ViewState(year=gesture.year, month=gesture.month)))


# ------------------------------------------------------------------ selection & filters


@_handles(SelectDate)
def _select_date(state: ControllerState, gesture: SelectDate) -> Transition:
    return Transition(replace(state, selection=replace(state.selection, selected_date=gesture.date)))


@_handles(ToggleCalendar)
def _toggle_calendar(state: ControllerState, gesture: ToggleCalendar) -> Transition:
    calendars = state.calendars.toggled(gesture.name)
    if calendars is state.calendars:
        return Transition(state)
    return Transition(replace(state, calendars=calendars))


@_handles(SetSidebarOpen)
def _set_sidebar_open(state: ControllerState, gesture: SetSidebarOpen) -> Transition:
    if state.selection.sidebar_open == gesture.open:
        return Transition(state)
    return Transition(replace(state, selection=replace(state.selection, sidebar_open=gesture.open)))


@_handles(ToggleSidebar)
def _toggle_sidebar(state: ControllerState, gesture: ToggleSidebar) -> Transition:
    flipped = not state.selection.sidebar_open
    return Transition(replace(state, selection=replace(state.selection, sidebar_open=flipped)))


# ------------------------------------------------------------------ modal workflow


@_handles(OpenCreate, SidebarCreateRequested)
def _open_create(state: ControllerState, gesture: OpenCreate) -> Transition:
    return Transition(replace(state, modal=CreateModal(date=gesture.date)))


@_handles(OpenEdit, EventClicked)
def _open_edit(state: ControllerState, gesture: OpenEdit) -> Transition:
    return Transition(replace(state, modal=EditModal(event=gesture.event, date=gesture.date)))


@_handles(CloseModal)
def _close_modal(state: ControllerState, gesture: CloseModal) -> Transition:
    if state.modal == NO_MODAL:
        return Transition(state)
    return Transition(replace(state, modal=NO_MODAL))


@_handles(SaveRequested)
def _save(state: ControllerState, gesture: SaveRequested) -> Transition:
    return Transition(state, effects=(SaveEvent(gesture.draft),), on_success=replace(state, modal=NO_MODAL))


@_handles(DeleteRequested)
def _delete(state: ControllerState, gesture: DeleteRequested) -> Transition:
    return Transition(
        state,
        effects=(DeleteEvent(gesture.event_id, gesture.date),),
        on_success=replace(state, modal=NO_MODAL),
    )


# ------------------------------------------------------------------ composite gestures


@_handles(DayCellClicked)
def _day_cell_clicked(state: ControllerState, gesture: DayCellClicked) -> Transition:
    view = state.view
    if gesture.overflow:
        view = ViewState(year=gesture.year, month=gesture.month)
    clicked = gesture.date
    return Transition(
        replace(
            state,
            view=view,
            selection=replace(state.selection, selected_date=clicked),
            modal=CreateModal(date=clicked),
        )
    )


@_handles(SidebarDatePicked)
def _sidebar_date_picked(state: ControllerState, gesture: SidebarDatePicked) -> Transition:
    picked = gesture.date
    return Transition(
        replace(
            state,
            view=ViewState(year=picked.year, month=picked.month),
            selection=replace(state.selection, selected_date=picked),
        )
    )


@_handles(DismissToast)
def _dismiss_toast(state: ControllerState, gesture: DismissToast) -> Transition:
    return Transition(state, effects=(DismissToastEffect(gesture.toast_id),))
