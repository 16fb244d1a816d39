from __future__ import annotations

from PyQt6.QtGui import QColor, QFont, QPalette
from PyQt6.QtWidgets import QApplication

from ...config import AppPalette


def apply_palette(app: QApplication, palette: AppPalette) -> None:
    qt_palette = QPalette()
    qt_palette.setColor(QPalette.ColorRole.Window, QColor(palette.background_primary))
    qt_palette.setColor(QPalette.ColorRole.Base, QColor(palette.background_secondary))
    qt_palette.setColor(QPalette.ColorRole.AlternateBase, QColor(palette.surface_alt))
    qt_palette.setColor(QPalette.ColorRole.Text, QColor(palette.text_primary))
    qt_palette.setColor(QPalette.ColorRole.WindowText, QColor(palette.text_primary))
    qt_palette.setColor(QPalette.ColorRole.PlaceholderText, QColor(palette.text_secondary))
    qt_palette.setColor(QPalette.ColorRole.Highlight, QColor(palette.accent_primary))
    qt_palette.setColor(QPalette.ColorRole.HighlightedText, QColor("#ffffff"))
    qt_palette.setColor(QPalette.ColorRole.ToolTipBase, QColor(palette.text_primary))
    qt_palette.setColor(QPalette.ColorRole.ToolTipText, QColor(palette.background_primary))
    app.setPalette(qt_palette)
    app.setFont(QFont("Segoe UI", 10))
    app.setStyleSheet(palette.as_stylesheet())
