"""Pixel-space and document-space geometry with scale-gated conversion."""

from __future__ import annotations

from dataclasses import dataclass

MIN_FIELD_SIZE = 20.0


@dataclass(frozen=True, slots=True)
class PixelPoint:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class PixelRect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, point: PixelPoint) -> bool:
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom


@dataclass(frozen=True, slots=True)
class DocumentRect:
    """Rectangle in unscaled document space (top-left origin, y down)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def moved_to(self, x: float, y: float) -> DocumentRect:
        return DocumentRect(x, y, self.width, self.height)

    def resized_to(self, width: float, height: float) -> DocumentRect:
        return DocumentRect(self.x, self.y, width, height)


@dataclass(frozen=True, slots=True)
class PageSize:
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class ViewTransform:
    """Converts between pixel space and document space at a fixed scale."""

    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError(f"Scale must be positive: {self.scale}")

    @classmethod
    def measure(cls, page: PageSize, pixel_width: float) -> ViewTransform:
        """Derive the scale from a rendered page's on-screen width."""
        if page.width <= 0:
            raise ValueError(f"Page width must be positive: {page.width}")
        return cls(pixel_width / page.width)

    def to_pixels(self, rect: DocumentRect) -> PixelRect:
        s = self.scale
        return PixelRect(rect.x * s, rect.y * s, rect.width * s, rect.height * s)

    def to_document(self, rect: PixelRect) -> DocumentRect:
        s = self.scale
        return DocumentRect(rect.x / s, rect.y / s, rect.width / s, rect.height / s)

    def point_to_document(self, point: PixelPoint) -> tuple[float, float]:
        return point.x / self.scale, point.y / self.scale

    def delta_to_document(self, dx: float, dy: float) -> tuple[float, float]:
        return dx / self.scale, dy / self.scale


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_position(rect: DocumentRect, page: PageSize) -> DocumentRect:
    max_x = max(0.0, page.width - rect.width)
    max_y = max(0.0, page.height - rect.height)
    return rect.moved_to(clamp(rect.x, 0.0, max_x), clamp(rect.y, 0.0, max_y))


def clamp_size(
    rect: DocumentRect,
    page: PageSize,
    min_size: float = MIN_FIELD_SIZE,
) -> DocumentRect:
    max_w = max(min_size, page.width - rect.x)
    max_h = max(min_size, page.height - rect.y)
    return rect.resized_to(
        clamp(rect.width, min_size, max_w),
        clamp(rect.height, min_size, max_h),
    )
