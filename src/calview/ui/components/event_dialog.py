from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Union

from PyQt6.QtCore import QDate, QTime, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QTextEdit,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)

from ...domain import CreateModal, DateValue, EditModal, EventDraft

DEFAULT_REMINDER = -1


class EventDialog(QDialog):
    """Create/edit form bound to a single modal state.

    The dialog never closes itself on save or delete; the main window closes
    it once the controller leaves the modal state.
    """

    save_requested = pyqtSignal(object)
    delete_requested = pyqtSignal(str, object)

    def __init__(
        self,
        *,
        modal: Union[CreateModal, EditModal],
        calendars: Iterable[str],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.modal_state = modal
        event = modal.event if isinstance(modal, EditModal) else None
        self.setWindowTitle("Edit event" if event else "New event")
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.title_input = QLineEdit(event.title if event else "")
        self.title_input.setPlaceholderText("Add title")
        form.addRow("Title", self.title_input)

        self.date_input = QDateEdit()
        self.date_input.setCalendarPopup(True)
        self.date_input.setDate(QDate(modal.date.year, modal.date.month + 1, modal.date.day))
        form.addRow("Date", self.date_input)

        self.all_day_input = QCheckBox("All day")
        self.all_day_input.setChecked(bool(event) and event.all_day)
        self.all_day_input.toggled.connect(self._sync_time_inputs)
        form.addRow("", self.all_day_input)

        self.start_input = QTimeEdit()
        self.start_input.setDisplayFormat("HH:mm")
        self.start_input.setTime(QTime.fromString(event.start_time, "HH:mm") if event and event.start_time else QTime(9, 0))
        form.addRow("Start", self.start_input)

        self.end_input = QTimeEdit()
        self.end_input.setDisplayFormat("HH:mm")
        self.end_input.setTime(QTime.fromString(event.end_time, "HH:mm") if event and event.end_time else QTime(10, 0))
        form.addRow("End", self.end_input)

        self.calendar_input = QComboBox()
        for name in calendars:
            self.calendar_input.addItem(name)
        if event:
            index = self.calendar_input.findText(event.calendar)
            if index >= 0:
                self.calendar_input.setCurrentIndex(index)
        form.addRow("Calendar", self.calendar_input)

        self.location_input = QLineEdit((event.location or "") if event else "")
        self.location_input.setPlaceholderText("Add location")
        form.addRow("Location", self.location_input)

        self.reminder_input = QSpinBox()
        self.reminder_input.setRange(DEFAULT_REMINDER, 7 * 24 * 60)
        self.reminder_input.setSpecialValueText("Default")
        self.reminder_input.setSuffix(" min before")
        reminder = event.reminder_minutes if event and event.reminder_minutes is not None else DEFAULT_REMINDER
        self.reminder_input.setValue(reminder)
        form.addRow("Reminder", self.reminder_input)

        self.description_input = QTextEdit()
        self.description_input.setPlainText(event.description if event else "")
        self.description_input.setPlaceholderText("Add description")
        form.addRow("Description", self.description_input)

        layout.addLayout(form)

        buttons = QHBoxLayout()
        if event:
            delete_button = QPushButton("Delete")
            delete_button.setObjectName("dangerButton")
            delete_button.clicked.connect(self._confirm_delete)
            buttons.addWidget(delete_button)
        buttons.addStretch(1)
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        buttons.addWidget(cancel_button)
        save_button = QPushButton("Save")
        save_button.setObjectName("primaryButton")
        save_button.setDefault(True)
        save_button.clicked.connect(lambda: self.save_requested.emit(self.draft()))
        buttons.addWidget(save_button)
        layout.addLayout(buttons)

        self._sync_time_inputs(self.all_day_input.isChecked())

    def _sync_time_inputs(self, all_day: bool) -> None:
        self.start_input.setEnabled(not all_day)
        self.end_input.setEnabled(not all_day)

    def draft(self) -> EventDraft:
        qdate = self.date_input.date()
        all_day = self.all_day_input.isChecked()
        reminder = self.reminder_input.value()
        date = DateValue(year=qdate.year(), month=qdate.month() - 1, day=qdate.day())
        if isinstance(self.modal_state, EditModal):
            base = EventDraft.from_event(self.modal_state.event)
        else:
            base = EventDraft(title="", date=date)
        return replace(
            base,
            title=self.title_input.text(),
            date=date,
            calendar=self.calendar_input.currentText(),
            start_time=None if all_day else self.start_input.time().toString("HH:mm"),
            end_time=None if all_day else self.end_input.time().toString("HH:mm"),
            description=self.description_input.toPlainText(),
            location=self.location_input.text() or None,
            reminder_minutes=None if reminder == DEFAULT_REMINDER else reminder,
        )

    def _confirm_delete(self) -> None:
        if not isinstance(self.modal_state, EditModal):
            return
        answer = QMessageBox.question(self, "Delete event", f"Delete '{self.modal_state.event.title}'?")
        if answer != QMessageBox.StandardButton.Yes:
            return
        event = self.modal_state.event
        self.delete_requested.emit(event.id, event.date)
