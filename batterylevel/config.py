from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from .colors import Color, Palette, default_border_color, parse_color

ASPECT_RATIO = 0.6


def _parse_size(s: str) -> tuple[int, int]:
    # "100x167"
    if "x" not in s.lower():
        raise ValueError(f"Invalid size '{s}' (expected like 100x167)")
    w, h = s.lower().split("x", 1)
    return int(w), int(h)


def _clamp(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))


@dataclass(frozen=True)
class IconConfig:
    # relative size of the battery terminal
    terminal_length_ratio: float = 0.1
    terminal_width_ratio: float = 0.4

    # 0 derives from the drawing height: border = h / 20, corners = h / 10
    border_width: float = 0.0
    corner_radius: float = 0.0

    # levels at or below low_threshold use the low color
    low_threshold: int = 17
    # levels at or above gradient_threshold (and above low) use the high color
    gradient_threshold: int = 0

    palette: Palette = field(default_factory=Palette)

    def resolved_border_width(self, height: float) -> float:
        return self.border_width if self.border_width > 0 else height / 20

    def resolved_corner_radius(self, height: float) -> float:
        return self.corner_radius if self.corner_radius > 0 else height / 10


def _env_float(env: Mapping[str, str], key: str, default: str) -> float:
    raw = str(env.get(key, "")).strip()
    return float(raw or default)


def _env_color(value: str | None, env: Mapping[str, str], key: str, default: Color) -> Color:
    raw = value if value is not None else str(env.get(key, "")).strip()
    return parse_color(raw) if raw else default


def load_config(
    *,
    terminal_length_ratio: float | None = None,
    terminal_width_ratio: float | None = None,
    border_width: float | None = None,
    corner_radius: float | None = None,
    low_threshold: int | None = None,
    gradient_threshold: int | None = None,
    high_level_color: str | None = None,
    low_level_color: str | None = None,
    no_level_color: str | None = None,
    border_color: str | None = None,
    appearance: str | None = None,
) -> IconConfig:
    """
    Build an IconConfig from keyword overrides, then BATTERYLEVEL_* environment
    variables, then defaults. Thresholds are clamped to 0..100.
    """
    env = os.environ
    defaults = IconConfig()

    terminal_length_ratio = float(
        terminal_length_ratio
        if terminal_length_ratio is not None
        else _env_float(env, "BATTERYLEVEL_TERMINAL_LENGTH_RATIO", str(defaults.terminal_length_ratio))
    )
    terminal_width_ratio = float(
        terminal_width_ratio
        if terminal_width_ratio is not None
        else _env_float(env, "BATTERYLEVEL_TERMINAL_WIDTH_RATIO", str(defaults.terminal_width_ratio))
    )
    border_width = float(
        border_width if border_width is not None else _env_float(env, "BATTERYLEVEL_BORDER_WIDTH", "0")
    )
    corner_radius = float(
        corner_radius if corner_radius is not None else _env_float(env, "BATTERYLEVEL_CORNER_RADIUS", "0")
    )
    low_threshold = int(
        low_threshold
        if low_threshold is not None
        else env.get("BATTERYLEVEL_LOW_THRESHOLD", "").strip() or defaults.low_threshold
    )
    gradient_threshold = int(
        gradient_threshold
        if gradient_threshold is not None
        else env.get("BATTERYLEVEL_GRADIENT_THRESHOLD", "").strip() or defaults.gradient_threshold
    )

    appearance = (appearance or env.get("BATTERYLEVEL_APPEARANCE", "") or "light").strip().lower()
    if appearance not in ("light", "dark"):
        raise ValueError(f"Invalid appearance '{appearance}' (expected light or dark)")

    base = defaults.palette
    palette = Palette(
        high_level_color=_env_color(high_level_color, env, "BATTERYLEVEL_HIGH_COLOR", base.high_level_color),
        low_level_color=_env_color(low_level_color, env, "BATTERYLEVEL_LOW_COLOR", base.low_level_color),
        no_level_color=_env_color(no_level_color, env, "BATTERYLEVEL_NO_LEVEL_COLOR", base.no_level_color),
        border_color=_env_color(
            border_color, env, "BATTERYLEVEL_BORDER_COLOR", default_border_color(appearance)
        ),
    )

    return IconConfig(
        terminal_length_ratio=terminal_length_ratio,
        terminal_width_ratio=terminal_width_ratio,
        border_width=border_width,
        corner_radius=corner_radius,
        low_threshold=_clamp(low_threshold, 0, 100),
        gradient_threshold=_clamp(gradient_threshold, 0, 100),
        palette=palette,
    )
