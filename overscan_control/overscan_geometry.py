"""Overscan window geometry: percent to rectangle and back."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Position = Tuple[int, int, int, int]
Axis = Tuple[int, int, int, int]

DEFAULT_OFFSET_STEP = 2
MIN_PERCENT = 80
MAX_PERCENT = 100


@dataclass(frozen=True)
class Bound:
    """Inclusive maximum coordinates of a mode's canvas."""

    max_right: int
    max_bottom: int

    @property
    def width(self) -> int:
        return self.max_right + 1

    @property
    def height(self) -> int:
        return self.max_bottom + 1

    def full_position(self) -> Position:
        return (0, 0, self.width, self.height)

    def full_rectangle(self) -> "Rectangle":
        return Rectangle(
            left=0,
            top=0,
            right=self.max_right,
            bottom=self.max_bottom,
            width=self.width,
            height=self.height,
        )


@dataclass(frozen=True)
class Rectangle:
    left: int
    top: int
    right: int
    bottom: int
    width: int
    height: int

    def position(self) -> Position:
        return (self.left, self.top, self.width, self.height)

    def axis(self) -> Axis:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class PreviousRectangle:
    """Snapshot taken at init, used only for change detection."""

    left: int = 0
    top: int = 0
    right: int = 0
    width: int = 0
    height: int = 0


def _edge_offset(percent: int, extent: int, step: int) -> int:
    return (100 - percent) * extent // (100 * 2 * step)


def apply_percent(percent: int, bound: Bound, step: int = DEFAULT_OFFSET_STEP) -> Rectangle:
    """Return the centred rectangle for ``percent`` on ``bound``.

    ``step`` divides the inset so a one-percent change moves each edge by a
    small amount. No clamping is done here; see :func:`clamp_to_bound`.
    """
    left = _edge_offset(percent, bound.max_right, step)
    top = _edge_offset(percent, bound.max_bottom, step)
    right = bound.max_right - left
    bottom = bound.max_bottom - top
    return Rectangle(
        left=left,
        top=top,
        right=right,
        bottom=bottom,
        width=right - left + 1,
        height=bottom - top + 1,
    )


def derive_initial_percent(left: int, bound: Bound, step: int = DEFAULT_OFFSET_STEP) -> int:
    """Approximate the percent that produced a persisted left offset.

    Lossy and unclamped; later zoom steps clamp the value.
    """
    scaled = (100 * 2 * step) * left
    if scaled == 0:
        return 100
    return 100 - scaled // (bound.max_right + 1) - 1


def clamp_percent(value: int, minimum: int = MIN_PERCENT, maximum: int = MAX_PERCENT) -> int:
    if value > maximum:
        return maximum
    if value < minimum:
        return minimum
    return value


def clamp_to_bound(left: int, top: int, right: int, bottom: int, bound: Bound) -> Axis:
    """Pull an axis inside the canvas: negative origins to 0, far edges to the bound."""
    return (
        max(0, left),
        max(0, top),
        min(right, bound.max_right),
        min(bottom, bound.max_bottom),
    )


def format_axis(left: int, top: int, right: int, bottom: int) -> str:
    return f"{left} {top} {right} {bottom}"
