from __future__ import annotations

import html
from typing import Sequence

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ...services import Toast


class ToastStack(QWidget):
    dismiss_requested = pyqtSignal(str)

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setFixedWidth(320)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(8)

    def show_toasts(self, toasts: Sequence[Toast]) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        for toast in toasts:
            frame = QFrame()
            frame.setObjectName("toast")
            row = QHBoxLayout(frame)
            row.setContentsMargins(14, 10, 8, 10)

            text = QLabel(f"<b>{html.escape(toast.title)}</b><br>{toast.message} · {toast.starts_at.strftime('%H:%M')}")
            text.setWordWrap(True)
            row.addWidget(text, stretch=1)

            dismiss = QPushButton("Dismiss")
            dismiss.clicked.connect(lambda _checked=False, toast_id=toast.id: self.dismiss_requested.emit(toast_id))
            row.addWidget(dismiss)
            self._layout.addWidget(frame)

        self.setVisible(bool(toasts))
        self.adjustSize()
