from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .colors import Color, select_level_color
from .config import ASPECT_RATIO, IconConfig
from .geometry import Rect, fit_aspect
from .path import Path
from .shapes import body_path, bolt_path, fill_rect

BOLT_ROTATION_DEGREES = -12.0


class LineCap(Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class LineJoin(Enum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


@dataclass(frozen=True)
class FillPath:
    path: Path
    color: Color
    # Only the part of `path` inside `clip` is painted.
    clip: Path | None = None


@dataclass(frozen=True)
class StrokePath:
    path: Path
    color: Color
    width: float
    cap: LineCap = LineCap.BUTT
    join: LineJoin = LineJoin.MITER


DrawOp = Union[FillPath, StrokePath]


def compose_battery_icon(
    bounds: Rect,
    config: IconConfig | None = None,
    level: float = 0.0,
    charging: bool = False,
) -> tuple[DrawOp, ...]:
    """
    Draw operations for one battery icon, in painting order.

    The icon keeps a 0.6 width:height ratio and is centered in `bounds`.
    Derived border width and corner radius follow the height of `bounds`
    itself, not of the fitted frame. Always returns 2 ops, or 4 when
    charging; zero-area paths are left for the renderer to skip.
    """
    config = config or IconConfig()
    palette = config.palette
    frame = fit_aspect(bounds, ASPECT_RATIO)
    border_width = config.resolved_border_width(bounds.height)
    corner_radius = config.resolved_corner_radius(bounds.height)

    body = body_path(
        frame,
        terminal_length_ratio=config.terminal_length_ratio,
        terminal_width_ratio=config.terminal_width_ratio,
        border_width=border_width,
        corner_radius=corner_radius,
    )
    fill = Path.from_rect(fill_rect(frame, terminal_length_ratio=config.terminal_length_ratio, level=level))
    level_color = select_level_color(
        level,
        low_threshold=config.low_threshold,
        second_threshold=config.gradient_threshold,
        palette=palette,
    )

    ops: list[DrawOp] = [
        FillPath(fill, level_color, clip=body),
        StrokePath(body, palette.border_color, border_width),
    ]

    if charging:
        # Turned about the center of the whole icon frame, not the bolt itself.
        bolt = bolt_path(
            frame, terminal_length_ratio=config.terminal_length_ratio, border_width=border_width
        ).rotated(BOLT_ROTATION_DEGREES, frame.center)
        ops.append(FillPath(bolt, palette.border_color))
        ops.append(
            StrokePath(bolt, palette.border_color, border_width / 1.2, cap=LineCap.ROUND, join=LineJoin.ROUND)
        )

    return tuple(ops)
