"""PDF loading helpers."""

from __future__ import annotations

import logging

import fitz

from docmapper.model.document import TemplateDocument

logger = logging.getLogger(__name__)


class PdfLoadError(RuntimeError):
    """Raised when a template PDF cannot be opened."""


def load_pdf_bytes(data: bytes, document_id: str = "") -> TemplateDocument:
    if not data:
        raise PdfLoadError(f"Template document {document_id or '?'} has no content")

    try:
        handle = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:  # pragma: no cover - defensive for PyMuPDF errors
        raise PdfLoadError(f"Failed to open template document {document_id or '?'}") from exc

    if handle.page_count == 0:
        handle.close()
        raise PdfLoadError(f"Template document {document_id or '?'} has no pages")

    logger.info("Opened template document %s (%d page(s))", document_id, handle.page_count)
    return TemplateDocument(document_id=document_id, data=data, handle=handle)
