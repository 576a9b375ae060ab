"""
Unit tests for best-effort editor loading and palette filtering.
"""

from unittest.mock import MagicMock

import pytest
import requests

from docmapper.api.client import TemplateApiError, TemplateDocumentClient
from docmapper.model.field import BLANK_BOX, SIGNATURE_BOX, SourceField
from docmapper.state.loader import (
    filter_source_fields,
    load_editor_data,
    load_mapped_fields,
    load_source_fields,
)
from helpers import make_field, make_response

EMAIL = SourceField(id=1, field_name="email", field_label="Email Address")
PHONE = SourceField(id=2, field_name="mobile_phone", field_label="Mobile")


@pytest.fixture
def api():
    return MagicMock(spec=TemplateDocumentClient)


class TestLoadSourceFields:
    def test_synthetic_entries_first(self, api):
        api.fetch_source_fields.return_value = [EMAIL]

        fields = load_source_fields(api, "job-seekers")

        assert fields == [SIGNATURE_BOX, BLANK_BOX, EMAIL]

    @pytest.mark.parametrize(
        "error",
        [TemplateApiError("down", 503), requests.Timeout("slow"), ValueError("bad entity")],
    )
    def test_failures_degrade_to_synthetic_only(self, api, error):
        api.fetch_source_fields.side_effect = error

        assert load_source_fields(api, "job-seekers") == [SIGNATURE_BOX, BLANK_BOX]


class TestLoadMappedFields:
    def test_returns_fields(self, api):
        api.fetch_mappings.return_value = [make_field("a")]

        assert [f.id for f in load_mapped_fields(api, "12")] == ["a"]

    def test_failure_degrades_to_empty(self, api):
        api.fetch_mappings.side_effect = TemplateApiError("nope")

        assert load_mapped_fields(api, "12") == []

    @pytest.mark.parametrize("fields", [["oops"], {"a": 1}])
    def test_malformed_payload_degrades_to_empty(self, client, mock_http, fields):
        mock_http.request.return_value = make_response(payload={"success": True, "fields": fields})

        assert load_mapped_fields(client, "9") == []


class TestLoadEditorData:
    def test_fetches_are_independent(self, api):
        api.fetch_source_fields.side_effect = TemplateApiError("fields down")
        api.fetch_mappings.return_value = [make_field("a")]

        data = load_editor_data(api, "12", "job-seekers")

        assert data.source_fields == [SIGNATURE_BOX, BLANK_BOX]
        assert [f.id for f in data.mapped_fields] == ["a"]


class TestFilterSourceFields:
    def test_blank_query_returns_all(self):
        assert filter_source_fields([EMAIL, PHONE], "   ") == [EMAIL, PHONE]

    def test_matches_label_case_insensitive(self):
        assert filter_source_fields([EMAIL, PHONE], "ADDRESS") == [EMAIL]

    def test_matches_name(self):
        assert filter_source_fields([EMAIL, PHONE], "phone") == [PHONE]
