"""Conversion between mapped fields and the backend's JSON rows."""

from __future__ import annotations

import math
from typing import Any

from docmapper.model.field import (
    DEFAULT_MAX_CHARACTERS,
    FieldFormat,
    FieldType,
    MappedField,
    SourceField,
    WhoFills,
    new_field_id,
)
from docmapper.model.geometry import DocumentRect

_DEFAULT_X = 20.0
_DEFAULT_Y = 20.0
_DEFAULT_W = 220.0
_DEFAULT_H = 44.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _number(row: dict[str, Any], key: str, default: float) -> float:
    value = row.get(key)
    if value is None:
        return default
    return float(value)


def _enum_value(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


def field_from_row(row: dict[str, Any]) -> MappedField:
    name = str(row.get("field_name") or "")
    row_id = row.get("client_id") or row.get("id")
    max_characters = row.get("max_characters")
    if max_characters is None or int(max_characters) < 1:
        max_characters = DEFAULT_MAX_CHARACTERS
    return MappedField(
        id=str(row_id) if row_id else new_field_id(),
        source_field_name=name,
        source_field_label=str(row.get("field_label") or name),
        rect=DocumentRect(
            x=_number(row, "x", _DEFAULT_X),
            y=_number(row, "y", _DEFAULT_Y),
            width=_number(row, "w", _DEFAULT_W),
            height=_number(row, "h", _DEFAULT_H),
        ),
        who_fills=WhoFills.ADMIN if row.get("who_fills") == "Admin" else WhoFills.CANDIDATE,
        required=bool(row.get("is_required")),
        field_type=_enum_value(FieldType, row.get("field_type"), FieldType.TEXT_INPUT),
        max_characters=int(max_characters),
        format=_enum_value(FieldFormat, row.get("format"), FieldFormat.NONE),
        populate_with_data=bool(row.get("populate_with_data")),
        data_flow_back=bool(row.get("data_flow_back")),
    )


def field_to_row(field: MappedField, sort_order: int) -> dict[str, Any]:
    rect = field.rect
    return {
        "field_id": None,
        "field_name": field.source_field_name,
        "field_label": field.source_field_label,
        "field_type": field.field_type.value,
        "who_fills": field.who_fills.value,
        "is_required": field.required,
        "max_characters": field.max_characters,
        "format": field.format.value,
        "populate_with_data": field.populate_with_data,
        "data_flow_back": field.data_flow_back,
        "sort_order": sort_order,
        "x": round_half_up(rect.x),
        "y": round_half_up(rect.y),
        "w": round_half_up(rect.width),
        "h": round_half_up(rect.height),
    }


def fields_to_payload(fields: list[MappedField]) -> dict[str, list[dict[str, Any]]]:
    return {"fields": [field_to_row(field, index) for index, field in enumerate(fields)]}


def source_field_from_row(row: dict[str, Any]) -> SourceField:
    return SourceField(
        id=int(row["id"]),
        field_name=str(row["field_name"]),
        field_label=str(row.get("field_label") or row["field_name"]),
        entity_type=str(row.get("entity_type") or ""),
        is_hidden=bool(row.get("is_hidden", False)),
    )
