"""Page rendering for the editor canvas using PyMuPDF."""

from __future__ import annotations

from dataclasses import dataclass

import fitz
from PySide6.QtGui import QImage

from docmapper.model.document import TemplateDocument
from docmapper.model.geometry import PageSize


class PdfRenderError(RuntimeError):
    """Raised when a page cannot be rendered."""


@dataclass(slots=True)
class RenderedPage:
    image: QImage
    page: PageSize
    page_index: int


def render_page(document: TemplateDocument, page_index: int, zoom: float = 1.0) -> RenderedPage:
    if page_index < 0 or page_index >= document.page_count:
        raise PdfRenderError(f"Page index out of range: {page_index}")
    if zoom <= 0:
        raise PdfRenderError(f"Zoom must be positive: {zoom}")

    try:
        page = document.handle.load_page(page_index)
        pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False, annots=False)
    except Exception as exc:  # pragma: no cover - defensive for PyMuPDF errors
        raise PdfRenderError(f"Failed to render page {page_index + 1}") from exc

    image = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)
    return RenderedPage(
        image=image.copy(),
        page=PageSize(width=float(page.rect.width), height=float(page.rect.height)),
        page_index=page_index,
    )
