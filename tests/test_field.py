"""
Unit tests for source kinds, default sizes and editor controls.
"""

import pytest

from docmapper.model.field import (
    BLANK_BOX,
    SIGNATURE_BOX,
    FieldType,
    SourceKind,
    default_field_type,
    default_size,
    editor_controls,
    normalize_field_type,
)
from helpers import make_field


class TestSourceKind:
    def test_synthetic_entries(self):
        assert SIGNATURE_BOX.kind is SourceKind.SIGNATURE_BOX
        assert BLANK_BOX.kind is SourceKind.BLANK_BOX

    def test_record_field(self):
        assert SourceKind.of("email") is SourceKind.RECORD

    def test_default_sizes(self):
        assert default_size(SourceKind.SIGNATURE_BOX) == (260.0, 80.0)
        assert default_size(SourceKind.BLANK_BOX) == (260.0, 44.0)
        assert default_size(SourceKind.RECORD) == (220.0, 44.0)

    def test_default_field_types(self):
        assert default_field_type(SourceKind.SIGNATURE_BOX) is FieldType.SIGNATURE
        assert default_field_type(SourceKind.BLANK_BOX) is FieldType.TEXT_INPUT
        assert default_field_type(SourceKind.RECORD) is FieldType.TEXT_INPUT


class TestNormalizeFieldType:
    @pytest.mark.parametrize("field_type", list(FieldType))
    def test_signature_box_always_signature(self, field_type):
        assert normalize_field_type(SourceKind.SIGNATURE_BOX, field_type) is FieldType.SIGNATURE

    def test_blank_box_keeps_text_area(self):
        assert normalize_field_type(SourceKind.BLANK_BOX, FieldType.TEXT_AREA) is FieldType.TEXT_AREA

    def test_blank_box_falls_back_to_text_input(self):
        assert normalize_field_type(SourceKind.BLANK_BOX, FieldType.DATE) is FieldType.TEXT_INPUT

    def test_record_field_unchanged(self):
        assert normalize_field_type(SourceKind.RECORD, FieldType.EMAIL) is FieldType.EMAIL


class TestEditorControls:
    def test_signature_box_locks_type_and_hides_secondary(self):
        field = make_field(source_field_name="signature_box", field_type=FieldType.SIGNATURE)

        controls = editor_controls(field)

        assert controls.type_locked is True
        assert controls.type_choices == (FieldType.SIGNATURE,)
        assert controls.shows_secondary is False

    def test_blank_box_offers_text_types_only(self):
        controls = editor_controls(make_field(source_field_name="blank_box"))

        assert controls.type_choices == (FieldType.TEXT_INPUT, FieldType.TEXT_AREA)
        assert controls.type_locked is False
        assert controls.shows_secondary is False

    def test_record_text_input_shows_everything(self):
        controls = editor_controls(make_field(field_type=FieldType.TEXT_INPUT))

        assert controls.type_choices == tuple(FieldType)
        assert controls.show_max_characters
        assert controls.show_format
        assert controls.show_populate
        assert controls.show_data_flow_back

    def test_record_checkbox_hides_length_and_format(self):
        controls = editor_controls(make_field(field_type=FieldType.CHECKBOX))

        assert not controls.show_max_characters
        assert not controls.show_format
        assert controls.show_populate

    def test_record_signature_hides_secondary(self):
        controls = editor_controls(make_field(field_type=FieldType.SIGNATURE))

        assert controls.shows_secondary is False

    @pytest.mark.parametrize("field_type", list(FieldType))
    def test_every_record_type_is_handled(self, field_type):
        controls = editor_controls(make_field(field_type=field_type))

        assert field_type in controls.type_choices
