"""
Tests for the command-line entry point and headless preview export.
"""

import os
from unittest.mock import MagicMock, patch

from pypdf import PdfReader

from docmapper.api.client import TemplateApiError, TemplateDocumentClient
from docmapper.main import build_parser, config_from_args, export_preview, main
from helpers import make_field


class TestArguments:
    def test_overrides_environment(self):
        args = build_parser().parse_args(
            ["42", "--base-url", "http://other", "--entity-type", "leads", "--zoom", "5"]
        )

        with patch.dict(os.environ, {"DOCMAPPER_API_BASE_URL": "http://env"}):
            config = config_from_args(args)

        assert args.document_id == "42"
        assert config.api_base_url == "http://other"
        assert config.entity_type == "leads"
        assert config.zoom == 2.0


class TestExportPreview:
    def test_writes_preview(self, template_pdf_bytes, tmp_path):
        client = MagicMock(spec=TemplateDocumentClient)
        client.fetch_document_file.return_value = template_pdf_bytes
        client.fetch_mappings.return_value = [make_field(source_field_label="Start Date")]
        output = tmp_path / "preview.pdf"

        assert export_preview(client, "42", output) == 0
        assert "Start Date" in (PdfReader(str(output)).pages[0].extract_text() or "")

    def test_missing_document(self, tmp_path):
        client = MagicMock(spec=TemplateDocumentClient)
        client.fetch_document_file.side_effect = TemplateApiError("gone", 404)

        assert export_preview(client, "42", tmp_path / "preview.pdf") == 1

    def test_mapping_failure_still_exports(self, template_pdf_bytes, tmp_path):
        client = MagicMock(spec=TemplateDocumentClient)
        client.fetch_document_file.return_value = template_pdf_bytes
        client.fetch_mappings.side_effect = TemplateApiError("nope")
        output = tmp_path / "preview.pdf"

        assert export_preview(client, "42", output) == 0
        assert output.exists()

    def test_main_dispatches_headless_export(self, tmp_path):
        output = tmp_path / "preview.pdf"
        with patch("docmapper.main.load_dotenv"), patch(
            "docmapper.main.export_preview", return_value=0
        ) as exporter:
            assert main(["42", "--export-preview", str(output), "--page", "2"]) == 0

        _, document_id, path, page_index = exporter.call_args.args
        assert (document_id, path, page_index) == ("42", output, 1)
