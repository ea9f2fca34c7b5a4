"""
batterylevel - vector battery level indicator.

Turns a charge level, a charging flag and an IconConfig into an ordered list
of fill/stroke operations over vector paths, plus Pillow and SVG renderers
for those operations.
"""

__version__ = "1.0.0"

from .colors import Color, Palette, select_level_color
from .config import IconConfig, load_config
from .geometry import Edge, Point, Rect, divide, inset
from .icon import DrawOp, FillPath, LineCap, LineJoin, StrokePath, compose_battery_icon
from .path import Path, PathBuilder

__all__ = [
    "Color",
    "Palette",
    "select_level_color",
    "IconConfig",
    "load_config",
    "Edge",
    "Point",
    "Rect",
    "divide",
    "inset",
    "DrawOp",
    "FillPath",
    "LineCap",
    "LineJoin",
    "StrokePath",
    "compose_battery_icon",
    "Path",
    "PathBuilder",
]
