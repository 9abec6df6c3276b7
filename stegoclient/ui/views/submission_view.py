"""Shared plumbing for the embed and extract views."""
from __future__ import annotations

from typing import Callable, Dict, Optional

from PyQt6.QtCore import QThreadPool, pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from utils.logger import setup_logger

from ...core import form_state as fs
from ...core import registry
from ...core.errors import StegoClientError
from ...core.form_state import FormLayout, FormState
from ...core.renderer import ErrorDescriptor, RenderedResult, render_error
from ...core.submission import REJECT, SubmissionController, SubmissionTicket
from ...core.transport import TransportClient
from ...core.types import MediaType, Operation, OperationRecord
from ...core.workflow import execute_submission, to_record
from ...utils.threading import Worker, WorkerConfig
from ...utils.validators import file_dialog_filter
from ..widgets.file_picker import FilePicker
from ..widgets.result_panel import ResultPanel

logger = setup_logger(__name__)


class SubmissionView(QWidget):
    """Form with a media type selector, per-media carrier pickers and a result panel."""

    operation: Operation
    title: str = ""
    submit_label: str = "Submit"
    busy_label: str = "Working…"

    operationFinished = pyqtSignal(OperationRecord)

    def __init__(
        self,
        client_factory: Callable[[], TransportClient],
        thread_pool: QThreadPool | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._client_factory = client_factory
        self._thread_pool = thread_pool or QThreadPool.globalInstance()
        self._controller = SubmissionController(self.operation.value)
        self._state: FormState = fs.new_form(self.operation)
        self._workers: Dict[SubmissionTicket, Worker] = {}
        self._submitted_state: Optional[FormState] = None

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(16, 16, 16, 16)
        self._layout.setSpacing(12)

        header = QLabel(self.title)
        header.setObjectName("viewTitle")
        self._layout.addWidget(header)

        self._build_carrier_box()
        self._build_extra_inputs()
        self._build_security_box()

        self._submit_button = QPushButton(self.submit_label)
        self._submit_button.clicked.connect(self._handle_submit)
        self._reset_button = QPushButton("Reset")
        self._reset_button.clicked.connect(self._reset_form)
        self._layout.addWidget(self._submit_button)
        self._layout.addWidget(self._reset_button)

        self._result_panel = ResultPanel(self)
        self._layout.addWidget(self._result_panel)
        self._layout.addStretch(1)

        self._apply_layout()

    # ------------------------------------------------------------------
    # Form construction
    # ------------------------------------------------------------------
    def _build_carrier_box(self) -> None:
        box = QGroupBox("Container")
        form = QFormLayout(box)
        self._media_combo = QComboBox()
        self._media_combo.addItem("Select media type", None)
        for media in MediaType:
            self._media_combo.addItem(registry.media_label(media), media)
        self._media_combo.currentIndexChanged.connect(self._on_media_changed)
        form.addRow("Media type", self._media_combo)

        self._carrier_pickers: Dict[MediaType, FilePicker] = {}
        self._carrier_rows: Dict[MediaType, QLabel] = {}
        for media in MediaType:
            label_text = registry.media_label(media)
            picker = FilePicker(self, f"Select {label_text} Container", [file_dialog_filter(media, label_text)])
            picker.sourceChanged.connect(self._on_carrier_changed)
            row_label = QLabel(f"{label_text} container")
            form.addRow(row_label, picker)
            self._carrier_pickers[media] = picker
            self._carrier_rows[media] = row_label
        self._layout.addWidget(box)

    def _build_extra_inputs(self) -> None:
        """Hook for views that need more inputs between carrier and passphrase."""

    def _build_security_box(self) -> None:
        box = QGroupBox("Security")
        form = QFormLayout(box)
        self._passphrase_edit = QLineEdit()
        self._passphrase_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self._passphrase_edit.textChanged.connect(self._on_passphrase_changed)
        form.addRow("Passphrase", self._passphrase_edit)
        self._layout.addWidget(box)

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------
    def _set_state(self, state: FormState) -> None:
        self._state = state
        self._apply_layout()

    def _apply_layout(self) -> None:
        layout = fs.derive_visibility(self._state)
        for media, picker in self._carrier_pickers.items():
            visible = media in layout.visible_carriers
            picker.setVisible(visible)
            picker.setEnabled(media in layout.enabled_carriers)
            self._carrier_rows[media].setVisible(visible)
            if media not in layout.visible_carriers and picker.source is not None:
                picker.blockSignals(True)
                picker.clear()
                picker.blockSignals(False)
        self._apply_extra_layout(layout)

    def _apply_extra_layout(self, layout: FormLayout) -> None:
        """Hook for views with extra input groups."""

    def _on_media_changed(self, _index: int) -> None:
        self._set_state(fs.select_media_type(self._state, self._media_combo.currentData()))

    def _on_carrier_changed(self, source) -> None:
        if self._state.media_type is None:
            return
        self._set_state(fs.choose_carrier(self._state, source))

    def _on_passphrase_changed(self, text: str) -> None:
        self._state = fs.set_passphrase(self._state, text)

    def _reset_form(self) -> None:
        for worker in self._workers.values():
            worker.cancel()
        self._controller.abandon()
        self._update_busy_state()
        self._media_combo.setCurrentIndex(0)
        self._passphrase_edit.clear()
        self._result_panel.clear()
        self._set_state(fs.reset(self._state))

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def _handle_submit(self) -> None:
        state = self._state
        try:
            ticket = self._controller.begin()
        except StegoClientError as exc:
            self._result_panel.show_error(render_error(exc, self.operation))
            return

        for pending, worker in self._workers.items():
            if pending != ticket:
                worker.cancel()

        self._submitted_state = state
        config = WorkerConfig(
            fn=execute_submission,
            ticket=ticket,
            args=(state, self._client_factory),
        )
        worker = Worker(config)
        worker.signals.result.connect(self._on_outcome)
        worker.signals.cancelled.connect(self._on_outcome)
        worker.signals.error.connect(self._on_worker_error)
        worker.signals.finished.connect(self._on_worker_finished)
        self._workers[ticket] = worker
        self._result_panel.show_busy(self.busy_label)
        self._update_busy_state()
        self._thread_pool.start(worker)

    def _update_busy_state(self) -> None:
        busy = self._controller.busy
        self._reset_button.setEnabled(not busy)
        self._submit_button.setEnabled(not (busy and self._controller.policy == REJECT))

    def _on_outcome(self, ticket: SubmissionTicket, outcome) -> None:
        accepted = self._controller.finish(ticket, outcome)
        self._update_busy_state()
        if not accepted:
            return
        if isinstance(outcome, RenderedResult):
            self._result_panel.show_result(outcome)
        elif isinstance(outcome, ErrorDescriptor):
            self._result_panel.show_error(outcome)
        self.operationFinished.emit(to_record(outcome, self.operation, self._submitted_state or self._state))

    def _on_worker_error(self, ticket: SubmissionTicket, exc: Exception) -> None:
        logger.error("Unexpected %s failure: %s", self.operation.value, exc)
        self._on_outcome(ticket, render_error(exc, self.operation))

    def _on_worker_finished(self, ticket: SubmissionTicket) -> None:
        self._workers.pop(ticket, None)
