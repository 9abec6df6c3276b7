"""Panel that displays a rendered result or an error descriptor."""
from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import (
    QFileDialog,
    QGroupBox,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from config import GUI_SETTINGS

from ...core.renderer import ErrorDescriptor, RenderedResult
from ...core.types import Artifact, ArtifactKind


class ResultPanel(QGroupBox):
    """Preview, summary and download button for the latest outcome."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Result", parent)
        self._artifact: Artifact | None = None

        layout = QVBoxLayout(self)
        self._title = QLabel()
        self._title.setObjectName("resultTitle")
        self._message = QLabel()
        self._message.setWordWrap(True)
        self._preview = QLabel()
        self._preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._text = QPlainTextEdit()
        self._text.setReadOnly(True)
        self._save_button = QPushButton("Save…")
        self._save_button.clicked.connect(self._save_artifact)

        for widget in (self._title, self._message, self._preview, self._text, self._save_button):
            layout.addWidget(widget)
        self.clear()

    def clear(self) -> None:
        self._artifact = None
        self._title.clear()
        self._message.clear()
        self._preview.clear()
        self._preview.hide()
        self._text.clear()
        self._text.hide()
        self._save_button.hide()

    def show_busy(self, message: str) -> None:
        self.clear()
        self._title.setText(message)

    def show_result(self, result: RenderedResult) -> None:
        self.clear()
        artifact = result.artifact
        self._artifact = artifact
        self._title.setText(result.title)
        self._message.setText(result.summary_text())

        if artifact.kind is ArtifactKind.TEXT:
            self._text.setPlainText(artifact.text or "")
            self._text.show()
        elif artifact.kind is ArtifactKind.PREVIEW_IMAGE:
            pixmap = QPixmap()
            if pixmap.loadFromData(artifact.handle.data):
                preview = GUI_SETTINGS["preview"]
                self._preview.setPixmap(
                    pixmap.scaled(
                        preview["max_width"],
                        preview["max_height"],
                        Qt.AspectRatioMode.KeepAspectRatio,
                        Qt.TransformationMode.SmoothTransformation,
                    )
                )
            else:
                self._preview.setText("Preview unavailable")
            self._preview.show()
        else:
            self._preview.setText(f"{artifact.mime_type} • save the file to play it")
            self._preview.show()

        self._save_button.setText(f"Save {artifact.suggested_filename}")
        self._save_button.show()

    def show_error(self, error: ErrorDescriptor) -> None:
        self.clear()
        self._title.setText(error.title)
        hints = "\n".join(f"• {hint}" for hint in error.hints)
        self._message.setText(f"{error.message}\n\n{hints}")

    def _save_artifact(self) -> None:
        if self._artifact is None or self._artifact.handle.released:
            return
        path, _ = QFileDialog.getSaveFileName(self, "Save result", self._artifact.suggested_filename)
        if path:
            self._artifact.save(Path(path))
