"""Embed view implementation."""
from __future__ import annotations

from typing import Dict

from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QLabel,
    QPlainTextEdit,
)

from ...core import form_state as fs
from ...core.form_state import FormLayout
from ...core.types import MediaType, MessageType, Operation
from ...utils.validators import file_dialog_filter
from ..widgets.file_picker import FilePicker
from .submission_view import SubmissionView


class EmbedView(SubmissionView):
    """UI for hiding a payload inside a carrier through the service."""

    operation = Operation.EMBED
    title = "Embed payload into carrier media"
    submit_label = "Embed"
    busy_label = "Embedding…"

    def _build_extra_inputs(self) -> None:
        box = QGroupBox("Payload")
        form = QFormLayout(box)
        self._message_combo = QComboBox()
        self._message_combo.addItem("Select payload type", None)
        for message in MessageType:
            self._message_combo.addItem(message.value.title(), message)
        self._message_combo.currentIndexChanged.connect(self._on_message_changed)
        form.addRow("Payload type", self._message_combo)

        self._payload_text_edit = QPlainTextEdit()
        self._payload_text_edit.setPlaceholderText("Enter secret message…")
        self._payload_text_edit.textChanged.connect(self._on_text_changed)
        self._text_label = QLabel("Secret text")
        form.addRow(self._text_label, self._payload_text_edit)

        self._payload_pickers: Dict[MessageType, FilePicker] = {}
        self._payload_labels: Dict[MessageType, QLabel] = {}
        for message in (MessageType.IMAGE, MessageType.AUDIO, MessageType.VIDEO):
            label_text = message.value.title()
            picker = FilePicker(
                self,
                f"Select {label_text} payload",
                [file_dialog_filter(MediaType(message.value), label_text), "All files (*)"],
            )
            picker.sourceChanged.connect(lambda source, m=message: self._on_payload_file_changed(m, source))
            label = QLabel(f"{label_text} payload")
            form.addRow(label, picker)
            self._payload_pickers[message] = picker
            self._payload_labels[message] = label
        self._layout.addWidget(box)

    def _apply_extra_layout(self, layout: FormLayout) -> None:
        text_visible = MessageType.TEXT in layout.visible_payloads
        self._payload_text_edit.setVisible(text_visible)
        self._text_label.setVisible(text_visible)
        for message, picker in self._payload_pickers.items():
            visible = message in layout.visible_payloads
            picker.setVisible(visible)
            self._payload_labels[message].setVisible(visible)

    def _on_message_changed(self, _index: int) -> None:
        self._set_state(fs.select_message_type(self._state, self._message_combo.currentData()))

    def _on_text_changed(self) -> None:
        self._state = fs.set_payload_text(self._state, self._payload_text_edit.toPlainText())

    def _on_payload_file_changed(self, message: MessageType, source) -> None:
        self._state = fs.choose_payload_file(self._state, message, source)

    def _reset_form(self) -> None:
        self._message_combo.setCurrentIndex(0)
        self._payload_text_edit.clear()
        for picker in self._payload_pickers.values():
            picker.clear()
        super()._reset_form()
