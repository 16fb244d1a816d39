from __future__ import annotations

from typing import Sequence

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QMenu, QPushButton, QToolButton, QWidget

from ...core.dates import month_label
from ...domain import ViewState
from ...services import Notification


def _notification_text(item: Notification) -> str:
    when = item.starts_at.strftime("%a %d %b") if item.all_day else item.starts_at.strftime("%a %d %b %H:%M")
    marker = "" if item.read else "• "
    return f"{marker}{when}  {item.title}"


class Header(QWidget):
    previous_requested = pyqtSignal()
    next_requested = pyqtSignal()
    today_requested = pyqtSignal()
    sidebar_toggle_requested = pyqtSignal()
    notifications_seen = pyqtSignal()

    def __init__(self, *, app_name: str) -> None:
        super().__init__()
        self.setObjectName("header")
        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 16, 8)
        layout.setSpacing(8)

        menu_button = QToolButton()
        menu_button.setText("☰")
        menu_button.setToolTip("Toggle sidebar")
        menu_button.clicked.connect(self.sidebar_toggle_requested)
        layout.addWidget(menu_button)

        brand = QLabel(app_name)
        brand.setObjectName("brandName")
        layout.addWidget(brand)
        layout.addSpacing(24)

        today_button = QPushButton("Today")
        today_button.clicked.connect(self.today_requested)
        layout.addWidget(today_button)

        previous_button = QToolButton()
        previous_button.setText("‹")
        previous_button.setToolTip("Previous month")
        previous_button.clicked.connect(self.previous_requested)
        layout.addWidget(previous_button)

        next_button = QToolButton()
        next_button.setText("›")
        next_button.setToolTip("Next month")
        next_button.clicked.connect(self.next_requested)
        layout.addWidget(next_button)

        self.title_label = QLabel("")
        self.title_label.setObjectName("monthTitle")
        layout.addWidget(self.title_label)
        layout.addStretch(1)

        self.notification_menu = QMenu(self)
        self.notification_menu.aboutToHide.connect(self.notifications_seen)
        self.bell_button = QToolButton()
        self.bell_button.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        self.bell_button.setMenu(self.notification_menu)
        layout.addWidget(self.bell_button)

    def show_state(self, view: ViewState, *, unread_count: int, notifications: Sequence[Notification]) -> None:
        self.title_label.setText(month_label(view.year, view.month))
        self.bell_button.setText(f"Notifications ({unread_count})" if unread_count else "Notifications")

        if self.notification_menu.isVisible():
            return
        self.notification_menu.clear()
        if not notifications:
            placeholder = self.notification_menu.addAction("No upcoming events")
            placeholder.setEnabled(False)
            return
        for item in notifications:
            self.notification_menu.addAction(_notification_text(item))
