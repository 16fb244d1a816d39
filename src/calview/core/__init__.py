"""Month view state, gesture transitions and the controller that owns them."""

from .controller import CalendarController
from .dates import MonthCell, month_grid, month_label, today
from .state import ControllerState, initial_state
from .transitions import Transition, next_month, previous_month, reduce

__all__ = [
    "CalendarController",
    "ControllerState",
    "MonthCell",
    "Transition",
    "initial_state",
    "month_grid",
    "month_label",
    "next_month",
    "previous_month",
    "reduce",
    "today",
]
