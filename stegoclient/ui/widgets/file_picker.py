"""File picker widget that loads the chosen file into a :class:`FileSource`."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QWidget,
)

from ...core.types import FileSource


class FilePicker(QWidget):
    """Line edit plus browse button, with drag-and-drop support."""

    sourceChanged = pyqtSignal(object)

    def __init__(
        self,
        parent: QWidget | None = None,
        dialog_title: str = "Select file",
        filters: Iterable[str] | None = None,
    ) -> None:
        super().__init__(parent)
        self._dialog_title = dialog_title
        self._filters = ";;".join(filters) if filters else "All files (*)"
        self._source: FileSource | None = None

        self._line_edit = QLineEdit(self)
        self._line_edit.setReadOnly(True)
        self._browse_button = QPushButton("Browse…", self)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._line_edit)
        layout.addWidget(self._browse_button)

        self._browse_button.clicked.connect(self._open_dialog)
        self.setAcceptDrops(True)

    def _open_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, self._dialog_title, filter=self._filters)
        if path:
            self.load(Path(path))

    def load(self, path: Path) -> None:
        self.source = FileSource.from_path(path)

    @property
    def source(self) -> FileSource | None:
        return self._source

    @source.setter
    def source(self, value: FileSource | None) -> None:
        self._source = value
        if value is None:
            self._line_edit.clear()
        else:
            self._line_edit.setText(f"{value.name} ({value.size:,} bytes, {value.mime_type})")
        self.sourceChanged.emit(value)

    def clear(self) -> None:
        if self._source is not None:
            self.source = None

    # drag and drop events
    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event) -> None:  # type: ignore[override]
        urls = event.mimeData().urls()
        if not urls:
            return
        local_path = urls[0].toLocalFile()
        if local_path:
            self.load(Path(local_path))
