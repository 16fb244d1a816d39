from __future__ import annotations

import sys

from PyQt6.QtWidgets import QApplication

from ..bootstrap import configure_logging
from ..config import AppPalette, get_settings
from ..services import AppContext
from .main_window import MainWindow
from .styles.theme import apply_palette


def run_gui(*, ephemeral: bool = False) -> None:
    configure_logging()
    app = QApplication.instance() or QApplication(sys.argv)
    settings = get_settings()
    app.setApplicationName(settings.ui.app_name)
    app.setOrganizationName(settings.ui.organization)
    palette = AppPalette()
    apply_palette(app, palette)

    context = AppContext(settings=settings, ephemeral=ephemeral)
    window = MainWindow(context=context, palette=palette)
    window.show()
    sys.exit(app.exec())
