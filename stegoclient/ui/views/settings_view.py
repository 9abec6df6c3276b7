"""Settings view implementation."""
from __future__ import annotations

from PyQt6.QtCore import QSettings, pyqtSignal
from PyQt6.QtWidgets import (
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from config import API_SETTINGS, resolve_api_base


class SettingsView(QWidget):
    """Service address and timeout persisted using :class:`QSettings`."""

    settingsChanged = pyqtSignal()

    def __init__(self, settings: QSettings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._settings = settings
        self._build_ui()
        self._load_settings()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QLabel("Application Settings")
        header.setObjectName("viewTitle")
        layout.addWidget(header)

        service_box = QGroupBox("Service")
        form = QFormLayout(service_box)
        self._base_url_edit = QLineEdit()
        self._base_url_edit.setPlaceholderText(API_SETTINGS["base_url"])
        form.addRow("Base URL", self._base_url_edit)
        self._timeout_spin = QDoubleSpinBox()
        self._timeout_spin.setRange(1.0, 600.0)
        self._timeout_spin.setSuffix(" s")
        form.addRow("Timeout", self._timeout_spin)
        layout.addWidget(service_box)

        footer = QHBoxLayout()
        self._save_button = QPushButton("Save")
        footer.addWidget(self._save_button)
        layout.addLayout(footer)
        layout.addStretch(1)

        self._save_button.clicked.connect(self._save_settings)

    def _load_settings(self) -> None:
        self._base_url_edit.setText(str(self._settings.value("base_url", resolve_api_base())))
        self._timeout_spin.setValue(float(self._settings.value("timeout", API_SETTINGS["timeout"])))

    def _save_settings(self) -> None:
        base_url = self._base_url_edit.text().strip()
        if base_url:
            self._settings.setValue("base_url", base_url.rstrip("/"))
        else:
            self._settings.remove("base_url")
        self._settings.setValue("timeout", self._timeout_spin.value())
        self.settingsChanged.emit()
