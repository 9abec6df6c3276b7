"""History view implementation."""
from __future__ import annotations

import csv
from pathlib import Path

from PyQt6.QtWidgets import (
    QFileDialog,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from ...core.renderer import format_size
from ...core.types import OperationRecord

COLUMNS = ["Time", "Operation", "File", "Success", "Message", "Size"]


class HistoryView(QWidget):
    """Submissions made during this session."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._entries: list[OperationRecord] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QLabel("History")
        header.setObjectName("viewTitle")
        layout.addWidget(header)

        self._table = QTableWidget(0, len(COLUMNS))
        self._table.setHorizontalHeaderLabels(COLUMNS)
        self._table.horizontalHeader().setStretchLastSection(True)
        layout.addWidget(self._table)

        export_button = QPushButton("Export CSV")
        export_button.clicked.connect(self._export_csv)
        layout.addWidget(export_button)
        layout.addStretch(1)

    def add_entry(self, record: OperationRecord) -> None:
        self._entries.append(record)
        row_idx = self._table.rowCount()
        self._table.insertRow(row_idx)
        values = [
            record.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            record.operation,
            record.target,
            "Yes" if record.success else "No",
            record.message,
            format_size(record.size) if record.size is not None else "",
        ]
        for column, value in enumerate(values):
            self._table.setItem(row_idx, column, QTableWidgetItem(value))

    def _export_csv(self) -> None:
        if not self._entries:
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export history", filter="CSV (*.csv)")
        if not path:
            return
        with Path(path).open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(["timestamp", "operation", "file", "success", "message", "size"])
            for record in self._entries:
                writer.writerow(
                    [record.created_at.isoformat(), record.operation, record.target, record.success, record.message, record.size or ""]
                )
