"""Searchable palette of source fields that can be dragged onto the canvas."""

from __future__ import annotations

from dataclasses import asdict
import json

from PySide6.QtCore import QMimeData, Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from docmapper.model.field import SourceField
from docmapper.state.loader import filter_source_fields
from docmapper.viewer.canvas import FIELD_MIME_TYPE


class _SourceFieldList(QListWidget):
    def __init__(self) -> None:
        super().__init__()
        self.setDragEnabled(True)
        self.setDragDropMode(QAbstractItemView.DragDropMode.DragOnly)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)

    def mimeTypes(self) -> list[str]:  # type: ignore[override]
        return [FIELD_MIME_TYPE]

    def mimeData(self, items) -> QMimeData:  # type: ignore[override]
        mime = QMimeData()
        if items:
            source: SourceField = items[0].data(Qt.ItemDataRole.UserRole)
            mime.setData(FIELD_MIME_TYPE, json.dumps(asdict(source)).encode("utf-8"))
        return mime


class FieldPalette(QWidget):
    def __init__(self) -> None:
        super().__init__()
        self._fields: list[SourceField] = []

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search fields...")
        self.search.textChanged.connect(self._apply_filter)

        self.list = _SourceFieldList()
        self.empty_label = QLabel("No fields found.")
        self.empty_label.setVisible(False)

        layout = QVBoxLayout(self)
        layout.addWidget(self.search)
        layout.addWidget(self.list)
        layout.addWidget(self.empty_label)

    def set_fields(self, fields: list[SourceField]) -> None:
        self._fields = list(fields)
        self._apply_filter(self.search.text())

    def _apply_filter(self, query: str) -> None:
        self.list.clear()
        visible = filter_source_fields(self._fields, query)
        for source in visible:
            item = QListWidgetItem(f"{source.display_label}\n{source.field_name}")
            item.setData(Qt.ItemDataRole.UserRole, source)
            item.setToolTip("Drag to canvas")
            self.list.addItem(item)
        self.empty_label.setVisible(not visible)
