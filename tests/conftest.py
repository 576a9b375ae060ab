"""
Shared pytest fixtures for the template field mapper tests.
"""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
import requests
from reportlab.pdfgen import canvas

from docmapper.api.client import TemplateDocumentClient
from docmapper.config import EditorConfig
from docmapper.model.geometry import ViewTransform
from docmapper.state.session import MappingSession
from helpers import LETTER


@pytest.fixture
def session() -> MappingSession:
    """Session with a rendered letter page at scale 1.0."""
    mapping = MappingSession()
    mapping.set_view(LETTER, ViewTransform(1.0))
    return mapping


@pytest.fixture
def editor_config() -> EditorConfig:
    return EditorConfig(
        api_base_url="http://crm.test/",
        api_token="test-token",
        entity_type="job-seekers",
        timeout=5,
    )


@pytest.fixture
def mock_http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(editor_config: EditorConfig, mock_http) -> TemplateDocumentClient:
    return TemplateDocumentClient(config=editor_config, session=mock_http)


@pytest.fixture
def template_pdf_bytes() -> bytes:
    """Two-page letter-size PDF built with reportlab."""
    buffer = BytesIO()
    report = canvas.Canvas(buffer, pagesize=(612, 792))
    for number in (1, 2):
        report.drawString(72, 720, f"Template page {number}")
        report.showPage()
    report.save()
    return buffer.getvalue()
