from __future__ import annotations

from dataclasses import dataclass

from ..domain import CalendarColor

CALENDAR_COLORS = {
    CalendarColor.BLUE: "#1a73e8",
    CalendarColor.RED: "#d93025",
    CalendarColor.GREEN: "#188038",
    CalendarColor.YELLOW: "#f9ab00",
    CalendarColor.PURPLE: "#8e24aa",
    CalendarColor.ORANGE: "#e8710a",
    CalendarColor.GRAY: "#5f6368",
}


@dataclass(frozen=True)
class AppPalette:
    background_primary: str = "#ffffff"
    background_secondary: str = "#f8f9fa"
    surface: str = "#ffffff"
    surface_alt: str = "#f1f3f4"
    accent_primary: str = "#1a73e8"
    accent_secondary: str = "#e8f0fe"
    accent_error: str = "#d93025"
    text_primary: str = "#3c4043"
    text_secondary: str = "#70757a"
    text_muted: str = "#bdc1c6"
    border_subtle: str = "#e0e0e0"
    border_strong: str = "#dadce0"

    def calendar_color(self, color: CalendarColor) -> str:
        return CALENDAR_COLORS.get(color, CALENDAR_COLORS[CalendarColor.GRAY])

    def as_stylesheet(self) -> str:
        """Global stylesheet for the month view shell."""

        return f"""
        QWidget {{
            background-color: {self.background_primary};
            color: {self.text_primary};
            font-family: 'Google Sans', 'Segoe UI', Arial, sans-serif;
            font-size: 13px;
        }}
        QPushButton, QToolButton {{
            background-color: transparent;
            color: {self.text_primary};
            border: 1px solid {self.border_strong};
            border-radius: 4px;
            padding: 6px 14px;
        }}
        QPushButton:hover, QToolButton:hover {{
            background-color: {self.surface_alt};
        }}
        QPushButton#primaryButton {{
            background-color: {self.accent_primary};
            color: #ffffff;
            border: none;
            font-weight: 600;
        }}
        QPushButton#dangerButton {{
            color: {self.accent_error};
            border-color: {self.accent_error};
        }}
        QPushButton#createButton {{
            border-radius: 20px;
            padding: 10px 20px;
            font-weight: 600;
        }}
        QLineEdit, QTextEdit, QComboBox, QDateEdit, QTimeEdit, QSpinBox {{
            background-color: {self.background_secondary};
            border: 1px solid {self.border_strong};
            border-radius: 4px;
            padding: 6px 8px;
        }}
        QLineEdit:focus, QTextEdit:focus, QComboBox:focus {{
            border-color: {self.accent_primary};
        }}
        QWidget#header {{
            border-bottom: 1px solid {self.border_subtle};
        }}
        QLabel#monthTitle {{
            font-size: 22px;
            color: {self.text_primary};
        }}
        QWidget#sidebarPanel {{
            background-color: {self.background_primary};
        }}
        QFrame#dayCell {{
            border-right: 1px solid {self.border_subtle};
            border-bottom: 1px solid {self.border_subtle};
        }}
        QFrame#dayCell:hover {{
            background-color: {self.background_secondary};
        }}
        QLabel#dayNumber {{
            color: {self.text_primary};
            background-color: transparent;
        }}
        QLabel#dayNumber[overflow="true"] {{
            color: {self.text_muted};
        }}
        QLabel#dayNumber[today="true"] {{
            color: #ffffff;
            background-color: {self.accent_primary};
            border-radius: 11px;
        }}
        QLabel#dayNumber[selected="true"] {{
            color: {self.accent_primary};
            background-color: {self.accent_secondary};
            border-radius: 11px;
        }}
        QLabel#weekdayLabel {{
            color: {self.text_secondary};
            font-size: 11px;
        }}
        QLabel#eventChip {{
            color: #ffffff;
            border-radius: 4px;
            padding: 1px 6px;
            font-size: 12px;
        }}
        QFrame#toast {{
            background-color: #323232;
            border-radius: 8px;
        }}
        QFrame#toast QLabel, QFrame#toast QPushButton {{
            background-color: transparent;
            color: #ffffff;
            border: none;
        }}
        """
