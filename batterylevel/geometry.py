from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Point:
    x: float
    y: float


class Edge(Enum):
    MIN_X = "min_x"
    MIN_Y = "min_y"
    MAX_X = "max_x"
    MAX_Y = "max_y"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in a y-down coordinate space."""

    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.mid_x, self.mid_y)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def _clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def divide(rect: Rect, distance: float, edge: Edge = Edge.MIN_Y) -> tuple[Rect, Rect]:
    """
    Split `rect` into (slice, remainder) at `distance` from `edge`.

    The distance is clamped to the rect's extent along the split axis, so an
    oversize distance gives the whole rect as slice and a zero-size remainder
    flush with the far edge.
    """
    if edge in (Edge.MIN_Y, Edge.MAX_Y):
        extent = max(0.0, rect.height)
        d = _clamp(distance, 0.0, extent)
        if edge is Edge.MIN_Y:
            return (
                Rect(rect.x, rect.y, rect.width, d),
                Rect(rect.x, rect.y + d, rect.width, extent - d),
            )
        return (
            Rect(rect.x, rect.y + extent - d, rect.width, d),
            Rect(rect.x, rect.y, rect.width, extent - d),
        )

    extent = max(0.0, rect.width)
    d = _clamp(distance, 0.0, extent)
    if edge is Edge.MIN_X:
        return (
            Rect(rect.x, rect.y, d, rect.height),
            Rect(rect.x + d, rect.y, extent - d, rect.height),
        )
    return (
        Rect(rect.x + extent - d, rect.y, d, rect.height),
        Rect(rect.x, rect.y, extent - d, rect.height),
    )


def inset(rect: Rect, dx: float, dy: float) -> Rect:
    """
    Shrink by dx on left/right and dy on top/bottom (negative values expand).

    An extent that would go negative collapses to zero around the center.
    """
    width = rect.width - 2 * dx
    height = rect.height - 2 * dy
    x = rect.x + dx
    y = rect.y + dy
    if width < 0:
        x = rect.mid_x
        width = 0.0
    if height < 0:
        y = rect.mid_y
        height = 0.0
    return Rect(x, y, width, height)


def fit_aspect(rect: Rect, aspect: float) -> Rect:
    """Largest centered rect inside `rect` whose width/height equals `aspect`."""
    if rect.is_empty or aspect <= 0:
        return Rect(rect.mid_x, rect.mid_y, 0.0, 0.0)
    if rect.width / rect.height > aspect:
        height = rect.height
        width = height * aspect
    else:
        width = rect.width
        height = width / aspect
    return Rect(rect.mid_x - width / 2, rect.mid_y - height / 2, width, height)
