"""Builders shared by the test modules."""

from unittest.mock import MagicMock

from docmapper.model.field import MappedField
from docmapper.model.geometry import DocumentRect, PageSize

LETTER = PageSize(612.0, 792.0)


def make_field(field_id: str = "f1", x=100.0, y=100.0, w=220.0, h=44.0, **kwargs) -> MappedField:
    kwargs.setdefault("source_field_name", "first_name")
    kwargs.setdefault("source_field_label", "First Name")
    return MappedField(id=field_id, rect=DocumentRect(x, y, w, h), **kwargs)


def make_response(status_code: int = 200, payload=None, content: bytes = b""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = content
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response
