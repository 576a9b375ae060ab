"""HTTP client for the CRM's custom-field and template-document endpoints."""

from __future__ import annotations

import logging
from typing import Any

import requests

from docmapper.api.codec import field_from_row, fields_to_payload, source_field_from_row
from docmapper.config import ENTITY_TYPES, EditorConfig
from docmapper.model.field import MappedField, SourceField

logger = logging.getLogger(__name__)


class TemplateApiError(RuntimeError):
    """Raised when a backend request fails or returns an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TemplateDocumentClient:
    """
    Thin wrapper over the CRM backend REST API.

    Every method raises TemplateApiError on transport failures, non-2xx
    responses and payloads that cannot be decoded.
    """

    def __init__(
        self,
        config: EditorConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or EditorConfig.from_env()
        self.session = session or requests.Session()

    @property
    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def fetch_source_fields(self, entity_type: str) -> list[SourceField]:
        if entity_type not in ENTITY_TYPES:
            raise ValueError(f"Invalid entity type: {entity_type}")

        data = self._request_json("GET", f"/api/custom-fields/entity/{entity_type}")
        rows = data.get("customFields") or []
        try:
            fields = [source_field_from_row(row) for row in rows]
        except (KeyError, TypeError, ValueError) as exc:
            raise TemplateApiError("Malformed custom field list") from exc
        return [field for field in fields if not field.is_hidden]

    def fetch_document_file(self, document_id: str) -> bytes:
        response = self._send("GET", f"/api/template-documents/{document_id}/file")
        if not response.ok:
            raise TemplateApiError(
                f"Failed to fetch template document {document_id}",
                status_code=response.status_code,
            )
        return response.content

    def fetch_mappings(self, document_id: str) -> list[MappedField]:
        data = self._request_json("GET", f"/api/template-documents/{document_id}/mappings")
        if not data.get("success"):
            raise TemplateApiError(data.get("message") or "Failed to fetch field mappings")
        rows = data.get("fields") or []
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise TemplateApiError("Malformed field mapping list")
        try:
            return [field_from_row(row) for row in rows]
        except (AttributeError, OverflowError, TypeError, ValueError) as exc:
            raise TemplateApiError("Malformed field mapping list") from exc

    def save_mappings(self, document_id: str, fields: list[MappedField]) -> dict[str, Any]:
        payload = fields_to_payload(fields)
        data = self._request_json(
            "PUT",
            f"/api/template-documents/{document_id}/mappings",
            json=payload,
            default_message="Save failed",
        )
        if not data.get("success"):
            raise TemplateApiError(data.get("message") or "Save failed")
        logger.info(
            "Saved %d field mapping(s) for template document %s",
            len(payload["fields"]),
            document_id,
        )
        return data

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(
                method,
                self._url(path),
                headers=self._headers,
                timeout=self.config.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise TemplateApiError(f"{method} {path} failed: {exc}") from exc

    def _request_json(
        self,
        method: str,
        path: str,
        default_message: str = "Request failed",
        **kwargs: Any,
    ) -> dict[str, Any]:
        response = self._send(method, path, **kwargs)
        try:
            data = response.json()
        except ValueError as exc:
            raise TemplateApiError(
                f"{method} {path} returned invalid JSON",
                status_code=response.status_code,
            ) from exc

        if not isinstance(data, dict):
            raise TemplateApiError(
                f"{method} {path} returned an unexpected payload",
                status_code=response.status_code,
            )
        if not response.ok:
            raise TemplateApiError(
                data.get("message") or default_message,
                status_code=response.status_code,
            )
        return data
