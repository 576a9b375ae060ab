"""Template document model wrapping the fetched PDF bytes and handle."""

from __future__ import annotations

from dataclasses import dataclass

import fitz


@dataclass(slots=True)
class TemplateDocument:
    document_id: str
    data: bytes
    handle: fitz.Document

    @property
    def page_count(self) -> int:
        return self.handle.page_count

    def close(self) -> None:
        if not self.handle.is_closed:
            self.handle.close()
