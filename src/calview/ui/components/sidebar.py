from __future__ import annotations

from typing import Dict, Optional

from PyQt6.QtCore import QDate, Qt, pyqtSignal
from PyQt6.QtWidgets import QCalendarWidget, QCheckBox, QLabel, QPushButton, QVBoxLayout, QWidget

from ...config import AppPalette
from ...domain import CalendarFilter, DateValue, SelectionState, ViewState


def _to_qdate(value: DateValue) -> QDate:
    return QDate(value.year, value.month + 1, value.day)


class Sidebar(QWidget):
    date_picked = pyqtSignal(object)
    create_requested = pyqtSignal(object)
    calendar_toggled = pyqtSignal(str)

    def __init__(self, *, palette: AppPalette, starts_on_monday: bool = False) -> None:
        super().__init__()
        self.setObjectName("sidebarPanel")
        self.setFixedWidth(256)
        self._palette = palette
        self._selected: Optional[DateValue] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        create_button = QPushButton("+  Create")
        create_button.setObjectName("createButton")
        create_button.clicked.connect(self._emit_create)
        layout.addWidget(create_button)

        self.mini_calendar = QCalendarWidget()
        self.mini_calendar.setGridVisible(False)
        self.mini_calendar.setVerticalHeaderFormat(QCalendarWidget.VerticalHeaderFormat.NoVerticalHeader)
        self.mini_calendar.setNavigationBarVisible(True)
        self.mini_calendar.setFirstDayOfWeek(Qt.DayOfWeek.Monday if starts_on_monday else Qt.DayOfWeek.Sunday)
        self.mini_calendar.clicked.connect(self._emit_date_picked)
        layout.addWidget(self.mini_calendar)

        layout.addWidget(QLabel("My calendars"))
        self._checkboxes: Dict[str, QCheckBox] = {}
        self._calendar_layout = QVBoxLayout()
        self._calendar_layout.setSpacing(4)
        layout.addLayout(self._calendar_layout)
        layout.addStretch(1)

    def show_state(self, selection: SelectionState, view: ViewState, calendars: CalendarFilter) -> None:
        self.setVisible(selection.sidebar_open)
        self._selected = selection.selected_date

        self.mini_calendar.blockSignals(True)
        if selection.selected_date is not None:
            self.mini_calendar.setSelectedDate(_to_qdate(selection.selected_date))
        self.mini_calendar.setCurrentPage(view.year, view.month + 1)
        self.mini_calendar.blockSignals(False)

        for name, entry in calendars.items():
            checkbox = self._checkboxes.get(name)
            if checkbox is None:
                checkbox = QCheckBox(name)
                checkbox.clicked.connect(lambda _checked, calendar_name=name: self.calendar_toggled.emit(calendar_name))
                color = self._palette.calendar_color(entry.color)
                checkbox.setStyleSheet(
                    f"QCheckBox::indicator {{ border: 2px solid {color}; border-radius: 2px; }}"
                    f"QCheckBox::indicator:checked {{ background-color: {color}; }}"
                )
                self._checkboxes[name] = checkbox
                self._calendar_layout.addWidget(checkbox)
            checkbox.setChecked(entry.checked)

    def _emit_date_picked(self, qdate: QDate) -> None:
        self.date_picked.emit(DateValue(year=qdate.year(), month=qdate.month() - 1, day=qdate.day()))

    def _emit_create(self) -> None:
        if self._selected is not None:
            self.create_requested.emit(self._selected)
            return
        qdate = self.mini_calendar.selectedDate()
        self.create_requested.emit(DateValue(year=qdate.year(), month=qdate.month() - 1, day=qdate.day()))
