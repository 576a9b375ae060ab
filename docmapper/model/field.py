"""Mapped field and source field model definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import uuid

from docmapper.model.geometry import DocumentRect


class FieldType(str, Enum):
    TEXT_INPUT = "Text Input"
    TEXT_AREA = "Text Area"
    NUMBER = "Number"
    EMAIL = "Email"
    PHONE = "Phone"
    DATE = "Date"
    CHECKBOX = "Checkbox"
    SIGNATURE = "Signature"


class WhoFills(str, Enum):
    ADMIN = "Admin"
    CANDIDATE = "Candidate"


class FieldFormat(str, Enum):
    NONE = "None"
    PHONE_NUMBER = "Phone Number"
    SSN = "SSN"


class SourceKind(Enum):
    RECORD = "record"
    SIGNATURE_BOX = "signature_box"
    BLANK_BOX = "blank_box"

    @classmethod
    def of(cls, field_name: str) -> SourceKind:
        if field_name == cls.SIGNATURE_BOX.value:
            return cls.SIGNATURE_BOX
        if field_name == cls.BLANK_BOX.value:
            return cls.BLANK_BOX
        return cls.RECORD


DEFAULT_MAX_CHARACTERS = 255


@dataclass(frozen=True, slots=True)
class SourceField:
    id: int
    field_name: str
    field_label: str
    entity_type: str = ""
    is_hidden: bool = False

    @property
    def kind(self) -> SourceKind:
        return SourceKind.of(self.field_name)

    @property
    def display_label(self) -> str:
        return self.field_label or self.field_name


SIGNATURE_BOX = SourceField(
    id=-1001,
    field_name=SourceKind.SIGNATURE_BOX.value,
    field_label="Signature Box",
    entity_type="system",
)
BLANK_BOX = SourceField(
    id=-1002,
    field_name=SourceKind.BLANK_BOX.value,
    field_label="Blank Box (Variable)",
    entity_type="system",
)
SYNTHETIC_FIELDS: tuple[SourceField, ...] = (SIGNATURE_BOX, BLANK_BOX)


@dataclass(slots=True)
class MappedField:
    id: str
    source_field_name: str
    source_field_label: str
    rect: DocumentRect
    who_fills: WhoFills = WhoFills.CANDIDATE
    required: bool = False
    field_type: FieldType = FieldType.TEXT_INPUT
    max_characters: int | None = DEFAULT_MAX_CHARACTERS
    format: FieldFormat = FieldFormat.NONE
    populate_with_data: bool = False
    data_flow_back: bool = False

    @property
    def kind(self) -> SourceKind:
        return SourceKind.of(self.source_field_name)


def new_field_id() -> str:
    return str(uuid.uuid4())


def default_size(kind: SourceKind) -> tuple[float, float]:
    match kind:
        case SourceKind.SIGNATURE_BOX:
            return 260.0, 80.0
        case SourceKind.BLANK_BOX:
            return 260.0, 44.0
        case SourceKind.RECORD:
            return 220.0, 44.0


def default_field_type(kind: SourceKind) -> FieldType:
    if kind is SourceKind.SIGNATURE_BOX:
        return FieldType.SIGNATURE
    return FieldType.TEXT_INPUT


def normalize_field_type(kind: SourceKind, field_type: FieldType) -> FieldType:
    """Coerce a field type into the set allowed for its source kind."""
    if kind is SourceKind.SIGNATURE_BOX:
        return FieldType.SIGNATURE
    if kind is SourceKind.BLANK_BOX and field_type is not FieldType.TEXT_AREA:
        return FieldType.TEXT_INPUT
    return field_type


@dataclass(frozen=True, slots=True)
class EditorControls:
    """Which property controls the field editor shows for a field."""

    type_choices: tuple[FieldType, ...]
    type_locked: bool
    show_max_characters: bool
    show_format: bool
    show_populate: bool
    show_data_flow_back: bool

    @property
    def shows_secondary(self) -> bool:
        return (
            self.show_max_characters
            or self.show_format
            or self.show_populate
            or self.show_data_flow_back
        )


def editor_controls(field: MappedField) -> EditorControls:
    match field.kind:
        case SourceKind.SIGNATURE_BOX:
            return EditorControls(
                type_choices=(FieldType.SIGNATURE,),
                type_locked=True,
                show_max_characters=False,
                show_format=False,
                show_populate=False,
                show_data_flow_back=False,
            )
        case SourceKind.BLANK_BOX:
            return EditorControls(
                type_choices=(FieldType.TEXT_INPUT, FieldType.TEXT_AREA),
                type_locked=False,
                show_max_characters=False,
                show_format=False,
                show_populate=False,
                show_data_flow_back=False,
            )
        case SourceKind.RECORD:
            return _record_controls(field.field_type)


def _record_controls(field_type: FieldType) -> EditorControls:
    match field_type:
        case FieldType.TEXT_INPUT | FieldType.TEXT_AREA | FieldType.PHONE:
            bounded, masked, linked = True, True, True
        case FieldType.NUMBER | FieldType.EMAIL:
            bounded, masked, linked = True, False, True
        case FieldType.DATE | FieldType.CHECKBOX:
            bounded, masked, linked = False, False, True
        case FieldType.SIGNATURE:
            bounded, masked, linked = False, False, False
    return EditorControls(
        type_choices=tuple(FieldType),
        type_locked=False,
        show_max_characters=bounded,
        show_format=masked,
        show_populate=linked,
        show_data_flow_back=linked,
    )
