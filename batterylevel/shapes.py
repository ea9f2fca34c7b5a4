from __future__ import annotations

import math

from .geometry import Edge, Point, Rect, divide, inset
from .path import Path, PathBuilder


def _unit(n: float) -> float:
    if math.isnan(n):
        return 0.0
    return max(0.0, min(1.0, n))


def _body_frame(bounds: Rect, terminal_length_ratio: float) -> tuple[Rect, Rect]:
    terminal_length = _unit(terminal_length_ratio) * bounds.height
    return divide(bounds, terminal_length, Edge.MIN_Y)


def body_path(
    bounds: Rect,
    *,
    terminal_length_ratio: float,
    terminal_width_ratio: float,
    border_width: float,
    corner_radius: float,
) -> Path:
    """
    Closed outline of the battery body plus its terminal cap.

    The bounds are inset by half the border width so a stroke of
    `border_width` along the outline stays inside the original bounds.
    Ratios are clamped to [0, 1]; negative widths and radii count as 0.
    Radii larger than half a side are not corrected and the arcs overlap.
    """
    border_width = max(0.0, border_width)
    corner_radius = max(0.0, corner_radius)
    bounds = inset(bounds, border_width / 2, border_width / 2)
    terminal_frame, body = _body_frame(bounds, terminal_length_ratio)

    # Widen the terminal downwards by one border width so its neck overlaps the
    # body's top edge, then drop the same amount from the top.
    parallel_inset = (1 - _unit(terminal_width_ratio)) / 2 * bounds.width
    _, terminal = divide(
        inset(terminal_frame, parallel_inset, -border_width),
        border_width,
        Edge.MIN_Y,
    )

    r = corner_radius
    cap = border_width / 3
    b = PathBuilder()

    b.move_to(Point(terminal.max_x, body.min_y))
    b.line_to(Point(body.max_x - r, body.min_y))
    b.arc_to_tangent(Point(body.max_x, body.min_y), Point(body.max_x, body.min_y + r), r)
    b.line_to(Point(body.max_x, body.max_y - r))
    b.arc_to_tangent(Point(body.max_x, body.max_y), Point(body.max_x - r, body.max_y), r)
    b.line_to(Point(body.min_x + r, body.max_y))
    b.arc_to_tangent(Point(body.min_x, body.max_y), Point(body.min_x, body.max_y - r), r)
    b.line_to(Point(body.min_x, body.min_y + r))
    b.arc_to_tangent(Point(body.min_x, body.min_y), Point(body.min_x + r, body.min_y), r)
    b.line_to(Point(terminal.min_x, body.min_y))

    # terminal cap
    b.line_to(Point(terminal.min_x, terminal.min_y + cap))
    b.arc_to_tangent(Point(terminal.min_x, terminal.min_y), Point(terminal.min_x + cap, terminal.min_y), cap)
    b.line_to(Point(terminal.max_x - cap, terminal.min_y))
    b.arc_to_tangent(Point(terminal.max_x, terminal.min_y), Point(terminal.max_x, terminal.min_y + cap), cap)

    b.line_to(Point(terminal.max_x, body.min_y))
    b.close()
    return b.build()


def fill_rect(bounds: Rect, *, terminal_length_ratio: float, level: float) -> Rect:
    """
    Region of the body covered at `level`, anchored to the body's bottom edge.

    Uses the bounds as given (no border inset); the caller clips it to the
    body outline. The level is clamped to [0, 1].
    """
    level = _unit(level)
    _, body = _body_frame(bounds, terminal_length_ratio)
    return Rect(body.x, body.y + body.height * (1 - level), body.width, body.height * level)


def bolt_frame(bounds: Rect, *, terminal_length_ratio: float, border_width: float) -> Rect:
    border_width = max(0.0, border_width)
    bounds = inset(bounds, border_width / 2, border_width / 2)
    _, body = _body_frame(bounds, terminal_length_ratio)
    return inset(body, body.width / 4, body.height / 6)


def bolt_path(bounds: Rect, *, terminal_length_ratio: float, border_width: float) -> Path:
    """Seven-point lightning bolt centred in the body, unrotated."""
    f = bolt_frame(bounds, terminal_length_ratio=terminal_length_ratio, border_width=border_width)
    waist = max(0.0, border_width) / 1.3
    b = PathBuilder()
    b.move_to(Point(f.mid_x, f.min_y))
    b.line_to(Point(f.max_x, f.mid_y))
    b.line_to(Point(f.mid_x, f.mid_y + waist))
    b.line_to(Point(f.mid_x, f.max_y))
    b.line_to(Point(f.min_x, f.mid_y))
    b.line_to(Point(f.mid_x, f.mid_y - waist))
    b.line_to(Point(f.mid_x, f.min_y))
    b.close()
    return b.build()
