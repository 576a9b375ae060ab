"""Main editor window for mapping fields onto a template document."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence, QPixmap
from PySide6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSplitter,
    QToolBar,
)

from docmapper.api.client import TemplateApiError, TemplateDocumentClient
from docmapper.config import ZOOM_STEP, EditorConfig, clamp_zoom
from docmapper.model.document import TemplateDocument
from docmapper.pdf.loader import PdfLoadError, load_pdf_bytes
from docmapper.pdf.renderer import PdfRenderError, render_page
from docmapper.pdf.writer import PdfWriteError, write_mapping_preview
from docmapper.state.loader import load_editor_data, load_source_fields
from docmapper.state.session import MappingSession
from docmapper.ui.field_dialog import FieldEditDialog
from docmapper.ui.palette import FieldPalette
from docmapper.viewer.canvas import MappingCanvas

logger = logging.getLogger(__name__)


class EditorWindow(QMainWindow):
    def __init__(
        self,
        client: TemplateDocumentClient,
        config: EditorConfig,
        document_id: str,
    ) -> None:
        super().__init__()
        self.setWindowTitle(f"Template Document Editor - Doc ID: {document_id}")
        self.resize(1300, 850)

        self._client = client
        self._config = config
        self._document_id = document_id
        self._document: TemplateDocument | None = None
        self._session = MappingSession()
        self._page_index = 0
        self._zoom = clamp_zoom(config.zoom)

        self.palette = FieldPalette()

        self.canvas = MappingCanvas(self._session)
        self.canvas.fields_changed.connect(self._update_status)
        self.canvas.field_dropped.connect(self._on_field_dropped)
        self.canvas.edit_requested.connect(self._on_edit_requested)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(False)
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scroll_area.setWidget(self.canvas)

        splitter = QSplitter()
        splitter.addWidget(self.palette)
        splitter.addWidget(self.scroll_area)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 4)
        self.setCentralWidget(splitter)

        self._build_toolbar()
        self.statusBar().showMessage("Ready")

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Editor Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        zoom_out_action = QAction("Zoom -", self)
        zoom_out_action.setShortcut(QKeySequence.StandardKey.ZoomOut)
        zoom_out_action.triggered.connect(self.zoom_out)
        toolbar.addAction(zoom_out_action)

        zoom_in_action = QAction("Zoom +", self)
        zoom_in_action.setShortcut(QKeySequence.StandardKey.ZoomIn)
        zoom_in_action.triggered.connect(self.zoom_in)
        toolbar.addAction(zoom_in_action)

        toolbar.addSeparator()

        prev_action = QAction("Prev", self)
        prev_action.triggered.connect(self.show_previous_page)
        toolbar.addAction(prev_action)

        next_action = QAction("Next", self)
        next_action.triggered.connect(self.show_next_page)
        toolbar.addAction(next_action)

        toolbar.addSeparator()

        refresh_action = QAction("Refresh Fields", self)
        refresh_action.triggered.connect(self.refresh_fields)
        toolbar.addAction(refresh_action)

        remove_action = QAction("Remove Field", self)
        remove_action.triggered.connect(self.remove_selected_field)
        toolbar.addAction(remove_action)

        preview_action = QAction("Export Preview", self)
        preview_action.triggered.connect(self.export_preview)
        toolbar.addAction(preview_action)

        toolbar.addSeparator()

        self._save_action = QAction("Save", self)
        self._save_action.setShortcut(QKeySequence.StandardKey.Save)
        self._save_action.triggered.connect(self.save)
        toolbar.addAction(self._save_action)

    def load(self) -> None:
        data = load_editor_data(self._client, self._document_id, self._config.entity_type)
        self.palette.set_fields(data.source_fields)
        self._session.replace_fields(data.mapped_fields)

        self._close_document()
        try:
            content = self._client.fetch_document_file(self._document_id)
            self._document = load_pdf_bytes(content, self._document_id)
        except (TemplateApiError, PdfLoadError) as exc:
            logger.warning("Could not open template document %s: %s", self._document_id, exc)
            self.canvas.clear_page()
            self.statusBar().showMessage("No PDF found for this template document.")
            return

        self._page_index = 0
        self._render_current_page()

    def refresh_fields(self) -> None:
        self.palette.set_fields(load_source_fields(self._client, self._config.entity_type))

    def zoom_in(self) -> None:
        self._set_zoom(self._zoom + ZOOM_STEP)

    def zoom_out(self) -> None:
        self._set_zoom(self._zoom - ZOOM_STEP)

    def show_previous_page(self) -> None:
        if self._document is None or self._page_index <= 0:
            return
        self._page_index -= 1
        self._render_current_page()

    def show_next_page(self) -> None:
        if self._document is None or self._page_index >= self._document.page_count - 1:
            return
        self._page_index += 1
        self._render_current_page()

    def remove_selected_field(self) -> None:
        selected_id = self._session.selected_id
        if selected_id is None or not self._session.remove_field(selected_id):
            self.statusBar().showMessage("No selected field to remove.")
            return
        self.canvas.update()
        self._update_status()

    def save(self) -> None:
        self._session.end_gesture()
        self._save_action.setEnabled(False)
        self.statusBar().showMessage("Saving...")
        try:
            self._client.save_mappings(self._document_id, self._session.fields)
        except TemplateApiError as exc:
            logger.error("Save mapping error for %s", self._document_id, exc_info=True)
            QMessageBox.critical(self, "Save Failed", exc.message)
            self._update_status()
            return
        finally:
            self._save_action.setEnabled(True)

        self.statusBar().showMessage("Saved.")
        self.close()

    def export_preview(self) -> None:
        if self._document is None:
            QMessageBox.information(self, "No Document", "No template document is loaded.")
            return

        output_path, _ = QFileDialog.getSaveFileName(
            self,
            "Export Mapping Preview",
            str(Path.home() / f"template_{self._document_id}_preview.pdf"),
            "PDF Files (*.pdf)",
        )
        if not output_path:
            return

        try:
            write_mapping_preview(
                self._document.data,
                output_path,
                self._session.fields,
                page_index=self._page_index,
            )
        except PdfWriteError as exc:
            QMessageBox.critical(self, "Export Failed", str(exc))
            return
        self.statusBar().showMessage(f"Preview exported: {output_path}")

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if event.key() == Qt.Key.Key_Delete:
            self.remove_selected_field()
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._session.end_gesture()
        self._close_document()
        super().closeEvent(event)

    def _set_zoom(self, zoom: float) -> None:
        zoom = clamp_zoom(zoom)
        if zoom == self._zoom:
            return
        self._zoom = zoom
        self._render_current_page()

    def _on_field_dropped(self, field_id: str) -> None:
        del field_id
        # Let the drag-and-drop loop finish before going modal.
        QTimer.singleShot(0, self._edit_draft)

    def _on_edit_requested(self, field_id: str) -> None:
        self._session.open_editor(field_id)
        self._edit_draft()

    def _edit_draft(self) -> None:
        if not self._session.is_editing:
            return
        dialog = FieldEditDialog(self._session, self)
        dialog.exec()
        self.canvas.update()
        self._update_status()

    def _update_status(self) -> None:
        page_count = self._document.page_count if self._document is not None else 0
        self.statusBar().showMessage(
            f"Page {self._page_index + 1}/{page_count} | "
            f"Zoom {self._zoom:.0%} | Mapped: {len(self._session.fields)}"
        )

    def _render_current_page(self) -> None:
        if self._document is None:
            self.canvas.clear_page()
            return

        try:
            rendered = render_page(self._document, self._page_index, zoom=self._zoom)
        except PdfRenderError as exc:
            QMessageBox.critical(self, "Render Failed", str(exc))
            return

        self.canvas.set_page(pixmap=QPixmap.fromImage(rendered.image), page=rendered.page)
        self._update_status()

    def _close_document(self) -> None:
        if self._document is not None:
            self._document.close()
            self._document = None
