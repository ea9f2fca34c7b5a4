from __future__ import annotations

import pytest

from batterylevel.colors import BLACK, WHITE, Color
from batterylevel.config import IconConfig, _parse_size, load_config

ENV_KEYS = [
    "BATTERYLEVEL_TERMINAL_LENGTH_RATIO",
    "BATTERYLEVEL_TERMINAL_WIDTH_RATIO",
    "BATTERYLEVEL_BORDER_WIDTH",
    "BATTERYLEVEL_CORNER_RADIUS",
    "BATTERYLEVEL_LOW_THRESHOLD",
    "BATTERYLEVEL_GRADIENT_THRESHOLD",
    "BATTERYLEVEL_HIGH_COLOR",
    "BATTERYLEVEL_LOW_COLOR",
    "BATTERYLEVEL_NO_LEVEL_COLOR",
    "BATTERYLEVEL_BORDER_COLOR",
    "BATTERYLEVEL_APPEARANCE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_parse_size():
    assert _parse_size("100x167") == (100, 167)
    assert _parse_size("80X80") == (80, 80)

    with pytest.raises(ValueError, match="Invalid size"):
        _parse_size("100")
    with pytest.raises(ValueError):
        _parse_size("axb")


def test_load_config_defaults():
    cfg = load_config()
    assert cfg == IconConfig()
    assert cfg.terminal_length_ratio == 0.1
    assert cfg.terminal_width_ratio == 0.4
    assert cfg.border_width == 0
    assert cfg.corner_radius == 0
    assert cfg.low_threshold == 17
    assert cfg.gradient_threshold == 0
    assert cfg.palette.border_color == BLACK


def test_load_config_env_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BATTERYLEVEL_TERMINAL_LENGTH_RATIO", "0.2")
    monkeypatch.setenv("BATTERYLEVEL_BORDER_WIDTH", "3")
    monkeypatch.setenv("BATTERYLEVEL_LOW_THRESHOLD", "30")
    monkeypatch.setenv("BATTERYLEVEL_GRADIENT_THRESHOLD", "60")
    monkeypatch.setenv("BATTERYLEVEL_HIGH_COLOR", "#0000ff")

    cfg = load_config()
    assert cfg.terminal_length_ratio == 0.2
    assert cfg.border_width == 3
    assert cfg.low_threshold == 30
    assert cfg.gradient_threshold == 60
    assert cfg.palette.high_level_color == Color(0, 0, 255)


def test_load_config_arg_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BATTERYLEVEL_LOW_THRESHOLD", "30")
    monkeypatch.setenv("BATTERYLEVEL_LOW_COLOR", "orange")

    cfg = load_config(low_threshold=50, low_level_color="#ff0000")
    assert cfg.low_threshold == 50
    assert cfg.palette.low_level_color == Color(255, 0, 0)


def test_load_config_clamps_thresholds():
    cfg = load_config(low_threshold=150, gradient_threshold=-3)
    assert cfg.low_threshold == 100
    assert cfg.gradient_threshold == 0


def test_load_config_appearance(monkeypatch: pytest.MonkeyPatch):
    assert load_config(appearance="dark").palette.border_color == WHITE

    monkeypatch.setenv("BATTERYLEVEL_APPEARANCE", "dark")
    assert load_config().palette.border_color == WHITE
    # explicit border color wins over appearance
    assert load_config(border_color="blue").palette.border_color == Color(0, 0, 255)

    with pytest.raises(ValueError, match="Invalid appearance"):
        load_config(appearance="sepia")


def test_load_config_bad_color():
    with pytest.raises(ValueError, match="Invalid color"):
        load_config(border_color="nope")


def test_resolved_sizes():
    cfg = IconConfig()
    assert cfg.resolved_border_width(200) == 10
    assert cfg.resolved_corner_radius(200) == 20

    cfg = IconConfig(border_width=3, corner_radius=4)
    assert cfg.resolved_border_width(200) == 3
    assert cfg.resolved_corner_radius(200) == 4
