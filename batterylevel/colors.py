from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from PIL import ImageColor

FULL_BATTERY = 100


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def from_unit(cls, r: float, g: float, b: float) -> "Color":
        return cls(*(int(round(max(0.0, min(1.0, c)) * 255)) for c in (r, g, b)))

    @classmethod
    def white(cls, level: float) -> "Color":
        return cls.from_unit(level, level, level)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
BLUE = Color(0, 122, 255)
ORANGE = Color(255, 149, 0)


def parse_color(s: str) -> Color:
    """Accepts anything Pillow understands: "#00e600", "rgb(0,230,0)", "orange"."""
    try:
        rgb = ImageColor.getrgb(s.strip())
    except ValueError as e:
        raise ValueError(f"Invalid color '{s}' (expected a name like 'red' or hex like #00e600)") from e
    return Color(*rgb[:3])


def default_border_color(appearance: str) -> Color:
    # Foreground color of the host's appearance.
    return WHITE if appearance.lower() == "dark" else BLACK


@dataclass(frozen=True)
class Palette:
    high_level_color: Color = Color.from_unit(0.0, 0.9, 0.0)
    low_level_color: Color = Color.from_unit(0.9, 0.0, 0.0)
    no_level_color: Color = Color.white(0.8)
    border_color: Color = BLACK


def _clamp(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))


def level_percent(level: float) -> int:
    if math.isnan(level):
        return 0
    if math.isinf(level):
        return FULL_BATTERY if level > 0 else 0
    return _clamp(int(round(level * FULL_BATTERY)), 0, FULL_BATTERY)


def select_level_color(
    level: float,
    *,
    low_threshold: int,
    second_threshold: int,
    palette: Palette,
) -> Color:
    """
    Fill color for `level`.

    [0, low_threshold] is low, then [second_threshold, 100] is high, anything
    left over is "no level". The no-level color is only reachable when
    second_threshold > low_threshold + 1.
    """
    pct = level_percent(level)
    low = _clamp(int(low_threshold), 0, FULL_BATTERY)
    second = _clamp(int(second_threshold), 0, FULL_BATTERY)
    if 0 <= pct <= low:
        return palette.low_level_color
    if second <= pct <= FULL_BATTERY:
        return palette.high_level_color
    return palette.no_level_color
