"""Best-effort loading of the palette and saved mappings for the editor."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

import requests

from docmapper.api.client import TemplateApiError, TemplateDocumentClient
from docmapper.model.field import SYNTHETIC_FIELDS, MappedField, SourceField

logger = logging.getLogger(__name__)

_LOAD_ERRORS = (TemplateApiError, requests.RequestException, ValueError)


@dataclass(slots=True)
class EditorData:
    source_fields: list[SourceField] = field(default_factory=list)
    mapped_fields: list[MappedField] = field(default_factory=list)


def load_source_fields(client: TemplateDocumentClient, entity_type: str) -> list[SourceField]:
    try:
        fetched = client.fetch_source_fields(entity_type)
    except _LOAD_ERRORS as exc:
        logger.warning("Could not load %s fields: %s", entity_type, exc)
        fetched = []
    return [*SYNTHETIC_FIELDS, *fetched]


def load_mapped_fields(client: TemplateDocumentClient, document_id: str) -> list[MappedField]:
    try:
        fields = client.fetch_mappings(document_id)
    except _LOAD_ERRORS as exc:
        logger.warning("Could not load mappings for template document %s: %s", document_id, exc)
        return []
    logger.info("Loaded %d mapping(s) for template document %s", len(fields), document_id)
    return fields


def load_editor_data(
    client: TemplateDocumentClient,
    document_id: str,
    entity_type: str,
) -> EditorData:
    return EditorData(
        source_fields=load_source_fields(client, entity_type),
        mapped_fields=load_mapped_fields(client, document_id),
    )


def filter_source_fields(fields: list[SourceField], query: str) -> list[SourceField]:
    needle = query.strip().lower()
    if not needle:
        return list(fields)
    return [
        f for f in fields if needle in f.field_label.lower() or needle in f.field_name.lower()
    ]
