"""Main window implementation for STEGOCLIENT."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import (
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QSplitter,
    QStackedWidget,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from config import API_SETTINGS, GUI_SETTINGS

from ..core.transport import TransportClient
from ..core.types import OperationRecord
from .views.embed_view import EmbedView
from .views.extract_view import ExtractView
from .views.history_view import HistoryView
from .views.settings_view import SettingsView


NAV_ITEMS = ["Embed", "Extract", "History", "Settings"]


@dataclass(slots=True)
class ViewRecord:
    name: str
    widget: QWidget


class MainWindow(QMainWindow):
    """Application main window with navigation sidebar."""

    def __init__(
        self,
        settings_factory: Callable[[], QSettings],
        base_url: str | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        window = GUI_SETTINGS["window"]
        self.setWindowTitle(window["title"])
        self.resize(window["width"], window["height"])
        self.setMinimumSize(window["min_width"], window["min_height"])

        self._settings_factory = settings_factory
        self._base_url_override = base_url
        self._views: Dict[str, ViewRecord] = {}

        self._history_view = HistoryView()
        self._stack = QStackedWidget()
        self._nav_list = QListWidget()
        self._nav_list.setSpacing(8)
        self._nav_list.setFixedWidth(180)

        container = QWidget()
        root_layout = QVBoxLayout(container)
        splitter = QSplitter()
        splitter.addWidget(self._nav_list)
        splitter.addWidget(self._stack)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        root_layout.addWidget(splitter)
        root_layout.setContentsMargins(0, 0, 0, 0)
        self.setCentralWidget(container)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

        self._build_views()
        self._build_navigation()
        self._nav_list.currentRowChanged.connect(self._stack.setCurrentIndex)
        self._nav_list.setCurrentRow(0)

    def _client_factory(self) -> TransportClient:
        settings = self._settings_factory()
        base_url = self._base_url_override or settings.value("base_url", None)
        timeout = float(settings.value("timeout", API_SETTINGS["timeout"]))
        return TransportClient(base_url=base_url, timeout=timeout)

    def _build_views(self) -> None:
        embed_view = EmbedView(self._client_factory)
        embed_view.operationFinished.connect(self._record_history)
        self._add_view("Embed", embed_view)

        extract_view = ExtractView(self._client_factory)
        extract_view.operationFinished.connect(self._record_history)
        self._add_view("Extract", extract_view)

        self._add_view("History", self._history_view)

        settings_view = SettingsView(self._settings_factory())
        settings_view.settingsChanged.connect(lambda: self._status_bar.showMessage("Settings saved", 3000))
        self._add_view("Settings", settings_view)

    def _build_navigation(self) -> None:
        for idx, name in enumerate(NAV_ITEMS):
            self._nav_list.addItem(QListWidgetItem(name))
            self._stack.insertWidget(idx, self._views[name].widget)

    def _add_view(self, name: str, widget: QWidget) -> None:
        self._views[name] = ViewRecord(name=name, widget=widget)

    def _record_history(self, record: OperationRecord) -> None:
        status = "completed" if record.success else "failed"
        self._status_bar.showMessage(f"{record.operation.title()} {status}: {record.message}", 5000)
        self._history_view.add_entry(record)
