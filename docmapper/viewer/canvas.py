"""Interactive template page canvas for dropping, dragging and resizing fields."""

from __future__ import annotations

import json

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QWidget

from docmapper.api.codec import source_field_from_row
from docmapper.model.geometry import PageSize, PixelPoint, PixelRect, ViewTransform
from docmapper.state.session import MappingSession

FIELD_MIME_TYPE = "application/x-field"

_HANDLE_SIZE = 10.0


def _point(pos: QPointF) -> PixelPoint:
    return PixelPoint(float(pos.x()), float(pos.y()))


def _qrect(rect: PixelRect) -> QRectF:
    return QRectF(rect.x, rect.y, rect.width, rect.height)


class MappingCanvas(QWidget):
    selection_changed = Signal(object)
    fields_changed = Signal()
    field_dropped = Signal(str)
    edit_requested = Signal(str)

    def __init__(self, session: MappingSession) -> None:
        super().__init__()
        self._session = session
        self._pixmap: QPixmap | None = None

        self.setAcceptDrops(True)
        self.setMouseTracking(True)
        self.setMinimumSize(500, 600)

    @property
    def session(self) -> MappingSession:
        return self._session

    def set_session(self, session: MappingSession) -> None:
        self._session.end_gesture()
        self._session = session
        self.update()

    def set_page(self, pixmap: QPixmap, page: PageSize) -> None:
        self._session.end_gesture()
        self._pixmap = pixmap
        self._session.set_view(page, ViewTransform.measure(page, float(pixmap.width())))
        self.resize(pixmap.size())
        self.update()

    def clear_page(self) -> None:
        self._session.end_gesture()
        self._pixmap = None
        self.resize(500, 600)
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        del event
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#e9eaee"))

        if self._pixmap is None:
            return

        painter.drawPixmap(0, 0, self._pixmap)
        selected_id = self._session.selected_id
        for field, rect in self._session.pixel_rects():
            rect_px = _qrect(rect)
            selected = field.id == selected_id
            color = QColor("#2563eb") if selected else QColor("#9ca3af")
            pen = QPen(color)
            pen.setWidth(2)
            painter.setPen(pen)
            painter.fillRect(rect_px, QColor(255, 255, 255, 200))
            painter.drawRect(rect_px)
            painter.setPen(QColor("#111827"))
            painter.drawText(
                rect_px.adjusted(4, 2, -4, -2),
                Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop,
                f"{field.source_field_label}\n{field.source_field_name} • {field.field_type.value}",
            )
            if selected:
                painter.fillRect(self._resize_handle_rect(rect_px), color)

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is None or event.button() != Qt.MouseButton.LeftButton:
            return

        point = _point(event.position())
        field = self._session.hit_test(point)
        if field is None:
            self._session.select(None)
            self.selection_changed.emit(None)
            self.update()
            return

        self._session.select(field.id)
        self.selection_changed.emit(field)

        rect = _qrect(self._session.transform.to_pixels(field.rect))
        if self._resize_handle_rect(rect).contains(event.position()):
            self._session.begin_resize(field.id, point, on_end=self.releaseMouse)
        else:
            self._session.begin_move(field.id, point, on_end=self.releaseMouse)
        self.grabMouse()
        self.update()

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        gesture = self._session.gesture
        if gesture is None:
            return
        gesture.move_to(_point(event.position()))
        self.fields_changed.emit()
        self.update()

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        del event
        self._session.end_gesture()
        self.update()

    def mouseDoubleClickEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is None:
            return
        self._session.end_gesture()
        field = self._session.hit_test(_point(event.position()))
        if field is not None:
            self.edit_requested.emit(field.id)

    def hideEvent(self, event) -> None:  # type: ignore[override]
        self._session.end_gesture()
        super().hideEvent(event)

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is not None and event.mimeData().hasFormat(FIELD_MIME_TYPE):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event) -> None:  # type: ignore[override]
        self.dragEnterEvent(event)

    def dropEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is None:
            event.ignore()
            return

        raw = bytes(event.mimeData().data(FIELD_MIME_TYPE)).decode("utf-8")
        try:
            source = source_field_from_row(json.loads(raw))
        except (KeyError, TypeError, ValueError):
            event.ignore()
            return

        field = self._session.drop_field(source, _point(event.position()))
        event.acceptProposedAction()
        self.selection_changed.emit(field)
        self.fields_changed.emit()
        self.update()
        self.field_dropped.emit(field.id)

    def _resize_handle_rect(self, field_rect: QRectF) -> QRectF:
        return QRectF(
            field_rect.right() - _HANDLE_SIZE,
            field_rect.bottom() - _HANDLE_SIZE,
            _HANDLE_SIZE,
            _HANDLE_SIZE,
        )
