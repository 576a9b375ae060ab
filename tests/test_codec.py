"""
Unit tests for the mapping row codec.
"""

import uuid

import pytest

from docmapper.api.codec import (
    field_from_row,
    field_to_row,
    fields_to_payload,
    round_half_up,
    source_field_from_row,
)
from docmapper.model.field import FieldFormat, FieldType, WhoFills
from helpers import make_field


@pytest.fixture
def saved_row() -> dict:
    return {
        "id": 17,
        "field_name": "ssn",
        "field_label": "Social Security Number",
        "x": 101.0,
        "y": 250.0,
        "w": 180.0,
        "h": 30.0,
        "who_fills": "Admin",
        "is_required": 1,
        "field_type": "Text Input",
        "max_characters": 11,
        "format": "SSN",
        "populate_with_data": True,
        "data_flow_back": 0,
    }


class TestFieldFromRow:
    def test_full_row(self, saved_row):
        field = field_from_row(saved_row)

        assert field.id == "17"
        assert field.source_field_name == "ssn"
        assert field.source_field_label == "Social Security Number"
        assert (field.rect.x, field.rect.y, field.rect.width, field.rect.height) == (
            101.0,
            250.0,
            180.0,
            30.0,
        )
        assert field.who_fills is WhoFills.ADMIN
        assert field.required is True
        assert field.field_type is FieldType.TEXT_INPUT
        assert field.max_characters == 11
        assert field.format is FieldFormat.SSN
        assert field.populate_with_data is True
        assert field.data_flow_back is False

    def test_client_id_wins_over_id(self, saved_row):
        saved_row["client_id"] = "abc"

        assert field_from_row(saved_row).id == "abc"

    def test_missing_values_fall_back_to_defaults(self):
        field = field_from_row({"field_name": "city"})

        uuid.UUID(field.id)
        assert field.source_field_label == "city"
        assert (field.rect.x, field.rect.y, field.rect.width, field.rect.height) == (
            20.0,
            20.0,
            220.0,
            44.0,
        )
        assert field.who_fills is WhoFills.CANDIDATE
        assert field.field_type is FieldType.TEXT_INPUT
        assert field.max_characters == 255
        assert field.format is FieldFormat.NONE

    def test_unknown_enums_fall_back(self):
        field = field_from_row(
            {"field_name": "x", "field_type": "Hologram", "format": "Morse", "who_fills": "admin"}
        )

        assert field.field_type is FieldType.TEXT_INPUT
        assert field.format is FieldFormat.NONE
        assert field.who_fills is WhoFills.CANDIDATE

    def test_null_max_characters_defaults(self, saved_row):
        saved_row["max_characters"] = None

        assert field_from_row(saved_row).max_characters == 255

    @pytest.mark.parametrize("value", [0, -3])
    def test_non_positive_max_characters_defaults(self, saved_row, value):
        saved_row["max_characters"] = value

        assert field_from_row(saved_row).max_characters == 255


class TestFieldToRow:
    def test_rounds_geometry_half_up(self):
        row = field_to_row(make_field(x=10.5, y=99.49, w=220.5, h=43.5), sort_order=3)

        assert (row["x"], row["y"], row["w"], row["h"]) == (11, 99, 221, 44)
        assert all(isinstance(row[key], int) for key in ("x", "y", "w", "h"))
        assert row["sort_order"] == 3
        assert row["field_id"] is None

    def test_serialises_enums_and_flags(self):
        field = make_field(
            who_fills=WhoFills.ADMIN,
            required=True,
            field_type=FieldType.PHONE,
            max_characters=None,
            format=FieldFormat.PHONE_NUMBER,
            data_flow_back=True,
        )

        row = field_to_row(field, 0)

        assert row["who_fills"] == "Admin"
        assert row["is_required"] is True
        assert row["field_type"] == "Phone"
        assert row["max_characters"] is None
        assert row["format"] == "Phone Number"
        assert row["populate_with_data"] is False
        assert row["data_flow_back"] is True

    def test_payload_sort_order_follows_list(self):
        payload = fields_to_payload([make_field("a"), make_field("b"), make_field("c")])

        assert [row["sort_order"] for row in payload["fields"]] == [0, 1, 2]

    def test_empty_payload(self):
        assert fields_to_payload([]) == {"fields": []}

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2


class TestRoundTrip:
    def test_load_then_save_preserves_geometry(self, saved_row):
        row = field_to_row(field_from_row(saved_row), 0)

        for key in ("field_name", "field_label", "x", "y", "w", "h", "who_fills", "format"):
            assert row[key] == saved_row[key]
        assert row["max_characters"] == 11


class TestSourceFieldFromRow:
    def test_parses_entry(self):
        source = source_field_from_row(
            {"id": "4", "entity_type": "job-seekers", "field_name": "email", "field_label": ""}
        )

        assert source.id == 4
        assert source.field_label == "email"
        assert source.is_hidden is False

    def test_missing_name_raises(self):
        with pytest.raises(KeyError):
            source_field_from_row({"id": 1})
