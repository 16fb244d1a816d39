from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QResizeEvent
from PyQt6.QtWidgets import QHBoxLayout, QMainWindow, QMessageBox, QVBoxLayout, QWidget

from ..config import AppPalette
from ..core import ControllerState
from ..core.dates import MonthCell
from ..domain import NO_MODAL, CalendarEvent, DateValue, EventDraft, EventStoreError, ModalState
from ..services import AppContext
from .components.calendar_panel import CalendarPanel
from .components.event_dialog import EventDialog
from .components.header import Header
from .components.sidebar import Sidebar
from .components.toast_stack import ToastStack

logger = logging.getLogger(__name__)

TOAST_MARGIN = 24


class MainWindow(QMainWindow):
    def __init__(self, *, context: AppContext, palette: Optional[AppPalette] = None) -> None:
        super().__init__()
        self.context = context
        self.controller = context.controller
        self.palette_config = palette or AppPalette()
        settings = context.settings
        self._dialog: Optional[EventDialog] = None

        self.setWindowTitle(settings.ui.app_name)
        self.resize(1280, 820)

        self.header = Header(app_name=settings.ui.app_name)
        self.sidebar = Sidebar(palette=self.palette_config, starts_on_monday=settings.ui.starts_on_monday)
        self.calendar_panel = CalendarPanel(palette=self.palette_config, week_start=settings.ui.week_start)

        body = QWidget()
        body_layout = QHBoxLayout(body)
        body_layout.setContentsMargins(0, 0, 0, 0)
        body_layout.setSpacing(0)
        body_layout.addWidget(self.sidebar)
        body_layout.addWidget(self.calendar_panel, stretch=1)

        central = QWidget()
        central_layout = QVBoxLayout(central)
        central_layout.setContentsMargins(0, 0, 0, 0)
        central_layout.setSpacing(0)
        central_layout.addWidget(self.header)
        central_layout.addWidget(body, stretch=1)
        self.setCentralWidget(central)

        self.toast_stack = ToastStack(central)

        self.header.previous_requested.connect(self.controller.go_to_previous_month)
        self.header.next_requested.connect(self.controller.go_to_next_month)
        self.header.today_requested.connect(self.controller.go_to_today)
        self.header.sidebar_toggle_requested.connect(self.controller.toggle_sidebar)
        self.header.notifications_seen.connect(self.controller.mark_notifications_read)

        self.sidebar.date_picked.connect(self.controller.sidebar_date_pick)
        self.sidebar.create_requested.connect(self.controller.sidebar_create_event)
        self.sidebar.calendar_toggled.connect(self.controller.toggle_calendar_visibility)

        self.calendar_panel.day_clicked.connect(self._on_day_clicked)
        self.calendar_panel.event_clicked.connect(self._on_event_clicked)

        self.toast_stack.dismiss_requested.connect(self.controller.dismiss_toast)

        self._unsubscribe = self.controller.subscribe(self._on_state_changed)

        self.reminder_timer = QTimer(self)
        self.reminder_timer.setInterval(int(settings.notifications.poll_interval.total_seconds() * 1000))
        self.reminder_timer.timeout.connect(self.controller.refresh_notifications)
        self.reminder_timer.start()

        self._on_state_changed(self.controller.state)

    # ------------------------------------------------------------------ gestures

    def _on_day_clicked(self, cell: MonthCell) -> None:
        self.controller.day_click(cell.year, cell.month, cell.day, overflow=cell.overflow)

    def _on_event_clicked(self, event: CalendarEvent, date: DateValue) -> None:
        self.controller.event_click(event, date)

    def _on_save_requested(self, draft: EventDraft) -> None:
        try:
            self.controller.save(draft)
        except EventStoreError as exc:
            self._show_store_error("Could not save event", exc)

    def _on_delete_requested(self, event_id: str, date: DateValue) -> None:
        try:
            self.controller.delete(event_id, date)
        except EventStoreError as exc:
            self._show_store_error("Could not delete event", exc)

    def _on_dialog_rejected(self, dialog: EventDialog) -> None:
        if dialog is not self._dialog:
            return
        self._dialog = None
        self.controller.close_modal()

    # ------------------------------------------------------------------ rendering

    def _on_state_changed(self, state: ControllerState) -> None:
        self.header.show_state(
            state.view,
            unread_count=self.controller.unread_count,
            notifications=self.controller.notifications,
        )
        self.sidebar.show_state(state.selection, state.view, state.calendars)
        self.calendar_panel.show_month(
            state.view,
            self.controller.events,
            calendars=state.calendars,
            selected=state.selection.selected_date,
            today=self.controller.today(),
        )
        self.toast_stack.show_toasts(self.controller.toasts)
        self._position_toasts()
        self._sync_modal(state.modal)

    def _sync_modal(self, modal: ModalState) -> None:
        if self._dialog is not None and self._dialog.modal_state != modal:
            dialog, self._dialog = self._dialog, None
            dialog.accept()
        if self._dialog is not None or modal == NO_MODAL:
            return

        dialog = EventDialog(modal=modal, calendars=list(self.controller.calendars), parent=self)
        dialog.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        dialog.save_requested.connect(self._on_save_requested)
        dialog.delete_requested.connect(self._on_delete_requested)
        dialog.rejected.connect(lambda: self._on_dialog_rejected(dialog))
        self._dialog = dialog
        dialog.open()

    def _position_toasts(self) -> None:
        parent = self.toast_stack.parentWidget()
        if parent is None:
            return
        self.toast_stack.adjustSize()
        x = parent.width() - self.toast_stack.width() - TOAST_MARGIN
        y = parent.height() - self.toast_stack.height() - TOAST_MARGIN
        self.toast_stack.move(max(x, 0), max(y, 0))
        self.toast_stack.raise_()

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802
        super().resizeEvent(event)
        self._position_toasts()

    def _show_store_error(self, title: str, exc: EventStoreError) -> None:
        logger.warning("%s: %s", title, exc)
        QMessageBox.warning(self._dialog or self, title, str(exc))

    def closeEvent(self, event) -> None:  # noqa: N802
        self.reminder_timer.stop()
        self._unsubscribe()
        self.controller.close()
        super().closeEvent(event)
