from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .geometry import Point, Rect

_EPS = 1e-9

# Flattening resolution for arcs (segments per quarter turn).
ARC_STEPS_PER_QUARTER = 16


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class ArcTo:
    """
    Circular arc in center/radius/angle form.

    Angles are radians in the y-down space; a positive sweep turns clockwise
    on screen. `end` is the arc's final point, kept exact so that following
    segments join without rounding drift.
    """

    center: Point
    radius: float
    start_angle: float
    sweep: float
    end: Point

    @property
    def start(self) -> Point:
        return Point(
            self.center.x + self.radius * math.cos(self.start_angle),
            self.center.y + self.radius * math.sin(self.start_angle),
        )


@dataclass(frozen=True)
class Close:
    pass


Segment = Union[MoveTo, LineTo, ArcTo, Close]


def _dist(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def _rotate_point(p: Point, angle: float, about: Point) -> Point:
    c, s = math.cos(angle), math.sin(angle)
    dx, dy = p.x - about.x, p.y - about.y
    return Point(about.x + dx * c - dy * s, about.y + dx * s + dy * c)


def format_number(v: float) -> str:
    """Compact decimal for SVG output: at most 3 places, no trailing zeros."""
    s = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if s in ("", "-0") else s


@dataclass(frozen=True)
class Path:
    segments: tuple[Segment, ...] = ()

    @classmethod
    def from_rect(cls, rect: Rect) -> "Path":
        b = PathBuilder()
        b.move_to(Point(rect.min_x, rect.min_y))
        b.line_to(Point(rect.max_x, rect.min_y))
        b.line_to(Point(rect.max_x, rect.max_y))
        b.line_to(Point(rect.min_x, rect.max_y))
        b.close()
        return b.build()

    def rotated(self, degrees: float, about: Point) -> "Path":
        """Rotate by `degrees` around `about`; negative turns counter-clockwise on screen."""
        angle = math.radians(degrees)
        out: list[Segment] = []
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                out.append(MoveTo(_rotate_point(seg.point, angle, about)))
            elif isinstance(seg, LineTo):
                out.append(LineTo(_rotate_point(seg.point, angle, about)))
            elif isinstance(seg, ArcTo):
                out.append(
                    ArcTo(
                        center=_rotate_point(seg.center, angle, about),
                        radius=seg.radius,
                        start_angle=seg.start_angle + angle,
                        sweep=seg.sweep,
                        end=_rotate_point(seg.end, angle, about),
                    )
                )
            else:
                out.append(seg)
        return Path(tuple(out))

    @property
    def subpath_count(self) -> int:
        return sum(1 for seg in self.segments if isinstance(seg, MoveTo))

    @property
    def is_closed(self) -> bool:
        return bool(self.segments) and isinstance(self.segments[-1], Close)

    def polygons(self) -> list[list[tuple[float, float]]]:
        """Flatten into one point list per subpath, arcs approximated by chords."""
        polys: list[list[tuple[float, float]]] = []
        current: list[tuple[float, float]] = []
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                if current:
                    polys.append(current)
                current = [(seg.point.x, seg.point.y)]
            elif isinstance(seg, LineTo):
                current.append((seg.point.x, seg.point.y))
            elif isinstance(seg, ArcTo):
                steps = max(2, math.ceil(abs(seg.sweep) / (math.pi / 2) * ARC_STEPS_PER_QUARTER))
                for i in range(1, steps):
                    a = seg.start_angle + seg.sweep * i / steps
                    current.append(
                        (seg.center.x + seg.radius * math.cos(a), seg.center.y + seg.radius * math.sin(a))
                    )
                current.append((seg.end.x, seg.end.y))
        if current:
            polys.append(current)
        return polys

    def bounding_box(self) -> Rect:
        points = [p for poly in self.polygons() for p in poly]
        if not points:
            return Rect(0.0, 0.0, 0.0, 0.0)
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    @property
    def is_empty(self) -> bool:
        return self.bounding_box().is_empty

    def svg_d(self) -> str:
        parts: list[str] = []
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                parts.append(f"M{format_number(seg.point.x)} {format_number(seg.point.y)}")
            elif isinstance(seg, LineTo):
                parts.append(f"L{format_number(seg.point.x)} {format_number(seg.point.y)}")
            elif isinstance(seg, ArcTo):
                large = 1 if abs(seg.sweep) > math.pi else 0
                sweep = 1 if seg.sweep > 0 else 0
                r = format_number(seg.radius)
                parts.append(f"A{r} {r} 0 {large} {sweep} {format_number(seg.end.x)} {format_number(seg.end.y)}")
            else:
                parts.append("Z")
        return " ".join(parts)


class PathBuilder:
    """Accumulates segments; `build()` returns an immutable Path."""

    def __init__(self) -> None:
        self._segments: list[Segment] = []
        self._start: Point | None = None
        self._current: Point | None = None

    @property
    def current_point(self) -> Point | None:
        return self._current

    def move_to(self, p: Point) -> None:
        self._segments.append(MoveTo(p))
        self._start = p
        self._current = p

    def line_to(self, p: Point) -> None:
        if self._current is None:
            self.move_to(p)
            return
        self._segments.append(LineTo(p))
        self._current = p

    def arc_to_tangent(self, tangent1_end: Point, tangent2_end: Point, radius: float) -> None:
        """
        Append an arc of `radius` tangent to the line current->tangent1_end and
        to the line tangent1_end->tangent2_end, preceded by a straight line to the
        first tangent point when needed.

        Falls back to a line to `tangent1_end` when the radius is not positive or
        the three points are collinear.
        """
        if self._current is None:
            self.move_to(tangent1_end)
            return

        p0, t1, t2 = self._current, tangent1_end, tangent2_end
        l1 = _dist(p0, t1)
        l2 = _dist(t2, t1)
        if radius <= 0 or l1 < _EPS or l2 < _EPS:
            self.line_to(t1)
            return

        u1 = ((p0.x - t1.x) / l1, (p0.y - t1.y) / l1)
        u2 = ((t2.x - t1.x) / l2, (t2.y - t1.y) / l2)
        cross = u1[0] * u2[1] - u1[1] * u2[0]
        if abs(cross) < _EPS:
            self.line_to(t1)
            return

        dot = max(-1.0, min(1.0, u1[0] * u2[0] + u1[1] * u2[1]))
        half = math.acos(dot) / 2
        tangent_len = radius / math.tan(half)
        center_len = radius / math.sin(half)

        bx, by = u1[0] + u2[0], u1[1] + u2[1]
        bl = math.hypot(bx, by)
        center = Point(t1.x + bx / bl * center_len, t1.y + by / bl * center_len)
        a = Point(t1.x + u1[0] * tangent_len, t1.y + u1[1] * tangent_len)
        b = Point(t1.x + u2[0] * tangent_len, t1.y + u2[1] * tangent_len)

        start = math.atan2(a.y - center.y, a.x - center.x)
        end = math.atan2(b.y - center.y, b.x - center.x)
        sweep = end - start
        while sweep > math.pi:
            sweep -= 2 * math.pi
        while sweep <= -math.pi:
            sweep += 2 * math.pi

        if _dist(a, p0) > _EPS:
            self._segments.append(LineTo(a))
        self._segments.append(ArcTo(center=center, radius=radius, start_angle=start, sweep=sweep, end=b))
        self._current = b

    def close(self) -> None:
        if self._current is None:
            return
        self._segments.append(Close())
        self._current = self._start

    def build(self) -> Path:
        return Path(tuple(self._segments))
