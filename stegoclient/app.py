"""Desktop entry point for STEGOCLIENT."""
from __future__ import annotations

import sys

from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QApplication

from config import APP_NAME

from .ui.main_window import MainWindow


def run_gui(base_url: str | None = None) -> int:
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    settings_factory = lambda: QSettings("stegoclient", "desktop")
    window = MainWindow(settings_factory, base_url=base_url)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(run_gui())
