from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain import (
    DEFAULT_CALENDARS,
    NO_MODAL,
    CalendarFilter,
    DateValue,
    ModalState,
    SelectionState,
    ViewState,
)


@dataclass(frozen=True, slots=True)
class ControllerState:
    """Snapshot of every slice the controller owns."""

    view: ViewState
    selection: SelectionState
    calendars: CalendarFilter
    modal: ModalState = NO_MODAL


def initial_state(
    current: DateValue,
    *,
    sidebar_open: bool = True,
    calendars: Optional[CalendarFilter] = None,
) -> ControllerState:
    return ControllerState(
        view=ViewState(year=current.year, month=current.month),
        selection=SelectionState(selected_date=None, sidebar_open=sidebar_open),
        calendars=calendars if calendars is not None else DEFAULT_CALENDARS,
    )
