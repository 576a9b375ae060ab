"""Scoped pointer gestures for moving and resizing mapped fields.

A gesture is created on pointer-down and owns the pointer for its lifetime.
``end()`` is idempotent and always runs the release callback, so a canvas can
grab the mouse when the gesture starts and trust that the grab is released on
pointer-up, teardown, or an exception unwinding through ``with gesture:``.
"""

from __future__ import annotations

from typing import Callable

from docmapper.model.field import MappedField
from docmapper.model.geometry import (
    DocumentRect,
    PageSize,
    PixelPoint,
    ViewTransform,
    clamp_position,
    clamp_size,
)


class Gesture:
    def __init__(
        self,
        field: MappedField,
        start: PixelPoint,
        transform: ViewTransform,
        page: PageSize,
        on_end: Callable[[], None] | None = None,
    ) -> None:
        self.field = field
        self._start = start
        self._origin = field.rect
        self._transform = transform
        self._page = page
        self._on_end = on_end
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    @property
    def origin(self) -> DocumentRect:
        return self._origin

    def move_to(self, point: PixelPoint) -> DocumentRect:
        if not self._active:
            raise RuntimeError("Gesture has already ended")
        dx, dy = self._transform.delta_to_document(
            point.x - self._start.x,
            point.y - self._start.y,
        )
        self.field.rect = self._apply(dx, dy)
        return self.field.rect

    def end(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._on_end is not None:
            self._on_end()

    def _apply(self, dx: float, dy: float) -> DocumentRect:
        raise NotImplementedError

    def __enter__(self) -> Gesture:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()


class MoveGesture(Gesture):
    def _apply(self, dx: float, dy: float) -> DocumentRect:
        moved = self._origin.moved_to(self._origin.x + dx, self._origin.y + dy)
        return clamp_position(moved, self._page)


class ResizeGesture(Gesture):
    def _apply(self, dx: float, dy: float) -> DocumentRect:
        resized = self._origin.resized_to(self._origin.width + dx, self._origin.height + dy)
        # Size first, then pull the origin back in if the minimum size overflows.
        return clamp_position(clamp_size(resized, self._page), self._page)
