"""Mapping preview writer using a reportlab overlay merged with pypdf."""

from __future__ import annotations

from io import BytesIO
import logging
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from reportlab.lib import colors
from reportlab.pdfgen import canvas

from docmapper.model.field import MappedField

logger = logging.getLogger(__name__)

_BOX_STROKE = colors.HexColor("#007bff")
_BOX_FILL = colors.Color(0, 0, 0, alpha=0.1)
_LABEL_FONT = ("Helvetica", 8)


class PdfWriteError(RuntimeError):
    """Raised when preview generation fails."""


def write_mapping_preview(
    source: bytes | str | Path,
    output_path: str | Path,
    fields: list[MappedField],
    page_index: int = 0,
) -> None:
    output = Path(output_path)

    try:
        reader = PdfReader(BytesIO(source) if isinstance(source, bytes) else str(source))
        page_count = len(reader.pages)
    except Exception as exc:
        raise PdfWriteError("Failed to read template document") from exc

    if page_index < 0 or page_index >= page_count:
        raise PdfWriteError(f"Page index out of range: {page_index}")

    try:
        writer = PdfWriter()
        for page in reader.pages:
            writer.add_page(page)

        if fields:
            target = writer.pages[page_index]
            box = target.cropbox
            overlay = PdfReader(
                _build_overlay_pdf(
                    fields,
                    left=float(box.left),
                    top=float(box.top),
                    page_size=(float(box.right), float(box.top)),
                )
            )
            target.merge_page(overlay.pages[0])

        with output.open("wb") as handle:
            writer.write(handle)
    except Exception as exc:
        raise PdfWriteError(f"Failed to write preview PDF: {output}") from exc

    logger.info("Wrote preview with %d field(s) to %s", len(fields), output)


def _build_overlay_pdf(
    fields: list[MappedField],
    left: float,
    top: float,
    page_size: tuple[float, float],
) -> BytesIO:
    buffer = BytesIO()
    report = canvas.Canvas(buffer, pagesize=page_size)
    report.setLineWidth(1)
    report.setDash(4, 2)
    report.setFont(*_LABEL_FONT)

    for field in fields:
        rect = field.rect
        # Document space is top-left origin; PDF user space is bottom-left.
        x = left + rect.x
        y = top - rect.bottom
        report.setStrokeColor(_BOX_STROKE)
        report.setFillColor(_BOX_FILL)
        report.rect(x, y, rect.width, rect.height, stroke=1, fill=1)
        report.setFillColor(colors.black)
        report.drawCentredString(
            x + rect.width / 2.0,
            y + rect.height / 2.0 - _LABEL_FONT[1] / 3.0,
            field.source_field_label or field.source_field_name,
        )

    report.showPage()
    report.save()
    buffer.seek(0)
    return buffer
