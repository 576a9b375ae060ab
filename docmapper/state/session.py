"""In-memory scene graph of mapped fields for one template document."""

from __future__ import annotations

from dataclasses import fields as dataclass_fields
from dataclasses import replace
from typing import Any, Callable, Iterator, TypeVar

from docmapper.api.codec import fields_to_payload
from docmapper.model.field import (
    MappedField,
    SourceField,
    default_field_type,
    default_size,
    new_field_id,
    normalize_field_type,
)
from docmapper.model.geometry import (
    DocumentRect,
    PageSize,
    PixelPoint,
    PixelRect,
    ViewTransform,
    clamp_position,
)
from docmapper.state.gesture import Gesture, MoveGesture, ResizeGesture

GestureT = TypeVar("GestureT", bound=Gesture)

_EDITABLE_ATTRIBUTES = frozenset(
    f.name for f in dataclass_fields(MappedField) if f.name not in {"id", "rect"}
)


class MappingSession:
    """Holds the mapped fields plus the UI-only selection, draft and gesture.

    Geometry on every field is in unscaled document space. Pixel input is
    converted through ``transform`` before it touches the list, and nothing
    here clamps loaded geometry until the user moves or resizes a field.
    """

    def __init__(self, fields: list[MappedField] | None = None) -> None:
        self.fields: list[MappedField] = list(fields or [])
        self.page: PageSize | None = None
        self.transform = ViewTransform()
        self.selected_id: str | None = None
        self.draft: MappedField | None = None
        self.gesture: Gesture | None = None
        self._pending_id: str | None = None

    @property
    def selected_field(self) -> MappedField | None:
        if self.selected_id is None:
            return None
        return self.find(self.selected_id)

    @property
    def is_editing(self) -> bool:
        return self.draft is not None

    @property
    def is_pending(self) -> bool:
        return self.draft is not None and self.draft.id == self._pending_id

    def find(self, field_id: str) -> MappedField | None:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    def get(self, field_id: str) -> MappedField:
        field = self.find(field_id)
        if field is None:
            raise KeyError(f"Unknown mapped field: {field_id}")
        return field

    def replace_fields(self, fields: list[MappedField]) -> None:
        self.end_gesture()
        self.fields = list(fields)
        self.selected_id = None
        self.draft = None
        self._pending_id = None

    def set_view(self, page: PageSize, transform: ViewTransform) -> None:
        self.page = page
        self.transform = transform

    def pixel_rects(self) -> Iterator[tuple[MappedField, PixelRect]]:
        for field in self.fields:
            yield field, self.transform.to_pixels(field.rect)

    def hit_test(self, point: PixelPoint) -> MappedField | None:
        for field in reversed(self.fields):
            if self.transform.to_pixels(field.rect).contains(point):
                return field
        return None

    def select(self, field_id: str | None) -> None:
        if field_id is not None:
            self.get(field_id)
        self.selected_id = field_id

    def drop_field(self, source: SourceField, point: PixelPoint) -> MappedField:
        page = self._require_page()
        width, height = default_size(source.kind)
        x, y = self.transform.point_to_document(point)
        field = MappedField(
            id=new_field_id(),
            source_field_name=source.field_name,
            source_field_label=source.display_label,
            rect=clamp_position(DocumentRect(x, y, width, height), page),
            field_type=default_field_type(source.kind),
        )
        self.fields.append(field)
        self.open_editor(field.id)
        self._pending_id = field.id
        return field

    def begin_move(
        self,
        field_id: str,
        point: PixelPoint,
        on_end: Callable[[], None] | None = None,
    ) -> MoveGesture:
        return self._begin_gesture(MoveGesture, field_id, point, on_end)

    def begin_resize(
        self,
        field_id: str,
        point: PixelPoint,
        on_end: Callable[[], None] | None = None,
    ) -> ResizeGesture:
        return self._begin_gesture(ResizeGesture, field_id, point, on_end)

    def end_gesture(self) -> None:
        if self.gesture is not None:
            self.gesture.end()

    def open_editor(self, field_id: str) -> MappedField:
        field = self.get(field_id)
        if self.draft is not None and self.draft.id != field_id:
            self.cancel_draft()
        self.selected_id = field_id
        self.draft = replace(
            field,
            field_type=normalize_field_type(field.kind, field.field_type),
        )
        return self.draft

    def update_draft(self, **changes: Any) -> MappedField:
        if self.draft is None:
            raise RuntimeError("No field is being edited")
        unknown = set(changes) - _EDITABLE_ATTRIBUTES
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
        max_characters = changes.get("max_characters")
        if max_characters is not None and max_characters < 1:
            raise ValueError(f"max_characters must be positive: {max_characters}")
        draft = replace(self.draft, **changes)
        draft.field_type = normalize_field_type(draft.kind, draft.field_type)
        self.draft = draft
        return draft

    def commit_draft(self) -> MappedField:
        if self.draft is None:
            raise RuntimeError("No field is being edited")
        index = self._index_of(self.draft.id)
        committed = replace(self.draft, rect=self.fields[index].rect)
        self.fields[index] = committed
        self.draft = None
        self._pending_id = None
        return committed

    def cancel_draft(self) -> None:
        if self.draft is None:
            return
        draft_id = self.draft.id
        discard = draft_id == self._pending_id
        self.draft = None
        self._pending_id = None
        if discard:
            self.remove_field(draft_id)

    def remove_field(self, field_id: str) -> bool:
        index = next((i for i, f in enumerate(self.fields) if f.id == field_id), None)
        if index is None:
            return False
        if self.gesture is not None and self.gesture.field.id == field_id:
            self.gesture.end()
        self.fields.pop(index)
        if self.selected_id == field_id:
            self.selected_id = None
        if self.draft is not None and self.draft.id == field_id:
            self.draft = None
            self._pending_id = None
        return True

    def to_payload(self) -> dict[str, list[dict[str, Any]]]:
        return fields_to_payload(self.fields)

    def _begin_gesture(
        self,
        gesture_cls: type[GestureT],
        field_id: str,
        point: PixelPoint,
        on_end: Callable[[], None] | None,
    ) -> GestureT:
        page = self._require_page()
        self.end_gesture()
        field = self.get(field_id)
        self.selected_id = field_id

        def release() -> None:
            if self.gesture is gesture:
                self.gesture = None
            if on_end is not None:
                on_end()

        gesture = gesture_cls(field, point, self.transform, page, on_end=release)
        self.gesture = gesture
        return gesture

    def _index_of(self, field_id: str) -> int:
        for index, field in enumerate(self.fields):
            if field.id == field_id:
                return index
        raise KeyError(f"Unknown mapped field: {field_id}")

    def _require_page(self) -> PageSize:
        if self.page is None:
            raise RuntimeError("No page has been rendered")
        return self.page
