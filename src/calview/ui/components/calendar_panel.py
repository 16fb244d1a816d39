from __future__ import annotations

import calendar
from typing import Dict, List, Optional, Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QFrame, QGridLayout, QLabel, QVBoxLayout, QWidget

from ...config import AppPalette
from ...core.dates import GRID_COLUMNS, MonthCell, month_grid, weekday_labels
from ...domain import CalendarEvent, CalendarFilter, DateValue, ViewState

MAX_CHIPS_PER_CELL = 3


def _repolish(widget: QWidget) -> None:
    widget.style().unpolish(widget)
    widget.style().polish(widget)


class EventChip(QLabel):
    """Event label inside a day cell; its clicks never reach the cell."""

    clicked = pyqtSignal(object, object)

    def __init__(self, event: CalendarEvent, *, color: str) -> None:
        label = f"{event.start_time}  {event.title}" if event.start_time else event.title
        super().__init__(label)
        self.setObjectName("eventChip")
        self.setStyleSheet(f"background-color: {color};")
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(event.description or event.title)
        self._event = event

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        event.accept()
        self.clicked.emit(self._event, self._event.date)


class DayCell(QFrame):
    clicked = pyqtSignal(object)
    event_clicked = pyqtSignal(object, object)

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("dayCell")
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self._cell: Optional[MonthCell] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        self.day_label = QLabel("")
        self.day_label.setObjectName("dayNumber")
        self.day_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.day_label.setFixedSize(22, 22)
        layout.addWidget(self.day_label, alignment=Qt.AlignmentFlag.AlignHCenter)

        self._chip_layout = QVBoxLayout()
        self._chip_layout.setSpacing(2)
        layout.addLayout(self._chip_layout)
        layout.addStretch(1)

    def populate(
        self,
        cell: MonthCell,
        events: Sequence[CalendarEvent],
        *,
        colors: Dict[str, str],
        selected: bool,
        is_today: bool,
    ) -> None:
        self._cell = cell
        self.day_label.setText(str(cell.day))
        self.day_label.setProperty("overflow", cell.overflow)
        self.day_label.setProperty("today", is_today)
        self.day_label.setProperty("selected", selected and not is_today)
        _repolish(self.day_label)

        while self._chip_layout.count():
            item = self._chip_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        for event in events[:MAX_CHIPS_PER_CELL]:
            chip = EventChip(event, color=colors.get(event.calendar, "#5f6368"))
            chip.clicked.connect(self.event_clicked)
            self._chip_layout.addWidget(chip)
        hidden = len(events) - MAX_CHIPS_PER_CELL
        if hidden > 0:
            self._chip_layout.addWidget(QLabel(f"{hidden} more"))

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.LeftButton and self._cell is not None:
            self.clicked.emit(self._cell)
        super().mousePressEvent(event)


class CalendarPanel(QWidget):
    """Fixed 6x7 month grid."""

    day_clicked = pyqtSignal(object)
    event_clicked = pyqtSignal(object, object)

    def __init__(self, *, palette: AppPalette, week_start: int = calendar.SUNDAY) -> None:
        super().__init__()
        self.setObjectName("calendarPanel")
        self._palette = palette
        self._week_start = week_start

        grid = QGridLayout(self)
        grid.setContentsMargins(0, 0, 0, 0)
        grid.setSpacing(0)

        for column, label in enumerate(weekday_labels(week_start)):
            header = QLabel(label.upper())
            header.setObjectName("weekdayLabel")
            header.setAlignment(Qt.AlignmentFlag.AlignCenter)
            grid.addWidget(header, 0, column)

        self._cells: List[DayCell] = []
        for index in range(GRID_COLUMNS * 6):
            cell = DayCell()
            cell.clicked.connect(self.day_clicked)
            cell.event_clicked.connect(self.event_clicked)
            row, column = divmod(index, GRID_COLUMNS)
            grid.addWidget(cell, row + 1, column)
            grid.setRowStretch(row + 1, 1)
            self._cells.append(cell)
        for column in range(GRID_COLUMNS):
            grid.setColumnStretch(column, 1)

    def show_month(
        self,
        view: ViewState,
        events: Sequence[CalendarEvent],
        *,
        calendars: CalendarFilter,
        selected: Optional[DateValue],
        today: DateValue,
    ) -> None:
        visible = set(calendars.visible())
        by_day: Dict[DateValue, List[CalendarEvent]] = {}
        for event in events:
            if event.calendar in visible:
                by_day.setdefault(event.date, []).append(event)
        colors = {name: self._palette.calendar_color(entry.color) for name, entry in calendars.items()}

        cells = [cell for row in month_grid(view.year, view.month, week_start=self._week_start) for cell in row]
        for widget, cell in zip(self._cells, cells):
            widget.populate(
                cell,
                by_day.get(cell.date, []),
                colors=colors,
                selected=cell.date == selected,
                is_today=cell.date == today,
            )
