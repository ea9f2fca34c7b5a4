from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .colors import BLACK, BLUE, ORANGE, WHITE, Color, parse_color
from .config import IconConfig, _parse_size, load_config
from .geometry import Rect
from .icon import compose_battery_icon
from .logging_utils import setup_logging
from .render import DEFAULT_SCALE, RenderError, compose_sheet, render_image, save_image, write_icon


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--level", type=float, default=0.2, help="Charge level 0..1 (default: 0.2)")
    p.add_argument("--charging", action="store_true", help="Draw the charging bolt")
    p.add_argument("--terminal-length-ratio", type=float, default=None, help="Terminal length / height (default: 0.1)")
    p.add_argument("--terminal-width-ratio", type=float, default=None, help="Terminal width / width (default: 0.4)")
    p.add_argument("--border-width", type=float, default=None, help="Border width, 0 = height/20 (default: 0)")
    p.add_argument("--corner-radius", type=float, default=None, help="Corner radius, 0 = height/10 (default: 0)")
    p.add_argument("--low-threshold", type=int, default=None, help="Percent at or below which the low color is used (default: 17)")
    p.add_argument(
        "--gradient-threshold",
        type=int,
        default=None,
        help="Percent at or above which the high color is used (default: 0)",
    )
    p.add_argument("--high-color", default=None, help="Fill color above the thresholds (default: #00e600)")
    p.add_argument("--low-color", default=None, help="Fill color at or below low threshold (default: #e60000)")
    p.add_argument("--no-level-color", default=None, help="Fill color between thresholds (default: #cccccc)")
    p.add_argument("--border-color", default=None, help="Outline and bolt color (default: follows --appearance)")
    p.add_argument("--appearance", choices=["light", "dark"], default=None, help="Host appearance (default: light)")
    p.add_argument("--background", default=None, help="Background color (default: transparent)")
    p.add_argument("--scale", type=int, default=DEFAULT_SCALE, help=f"PNG supersampling factor (default: {DEFAULT_SCALE})")
    p.add_argument("--quiet", action="store_true", help="Reduce log verbosity (INFO level only, no DEBUG)")
    p.add_argument("--log-dir", default=None, help="Also write batterylevel.log into this directory")


def _config_from_args(args: argparse.Namespace) -> IconConfig:
    return load_config(
        terminal_length_ratio=args.terminal_length_ratio,
        terminal_width_ratio=args.terminal_width_ratio,
        border_width=args.border_width,
        corner_radius=args.corner_radius,
        low_threshold=args.low_threshold,
        gradient_threshold=args.gradient_threshold,
        high_level_color=args.high_color,
        low_level_color=args.low_color,
        no_level_color=args.no_level_color,
        border_color=args.border_color,
        appearance=args.appearance,
    )


def _background(args: argparse.Namespace) -> Color | None:
    return parse_color(args.background) if args.background else None


def _log_dir(args: argparse.Namespace) -> Path | None:
    return Path(args.log_dir).expanduser() if args.log_dir else None


def cmd_render(args: argparse.Namespace) -> int:
    logger = setup_logging(log_dir=_log_dir(args), verbose=not args.quiet)
    try:
        cfg = _config_from_args(args)
        w, h = _parse_size(args.size)
        ops = compose_battery_icon(Rect(0, 0, w, h), cfg, args.level, args.charging)
        out = Path(args.out)
        write_icon(ops, (w, h), out, scale=args.scale, background=_background(args))
    except (RenderError, ValueError) as e:
        logger.error(str(e))
        return 2
    logger.info(f"Wrote {out} (level={args.level}, charging={args.charging})")
    return 0


def _preview_samples(base: IconConfig) -> list[tuple[tuple[int, int], IconConfig, Color | None, int]]:
    """(size, config, background, rotation) for each icon of the preview sheet."""
    p = base.palette
    return [
        ((200, 200), replace(base, palette=replace(p, border_color=BLUE)), None, 0),
        ((100, 180), base, None, 0),
        ((80, 80), replace(base, low_threshold=50), None, 0),
        ((80, 80), replace(base, palette=replace(p, border_color=WHITE)), BLACK, 0),
        (
            (40, 40),
            replace(base, low_threshold=20, palette=replace(p, high_level_color=BLUE, low_level_color=ORANGE)),
            None,
            90,
        ),
        ((18, 18), base, None, 0),
    ]


def cmd_preview(args: argparse.Namespace) -> int:
    logger = setup_logging(log_dir=_log_dir(args), verbose=not args.quiet)
    try:
        base = _config_from_args(args)
        images = []
        for (w, h), cfg, bg, rotation in _preview_samples(base):
            ops = compose_battery_icon(Rect(0, 0, w, h), cfg, args.level, args.charging)
            im = render_image(ops, (w, h), scale=args.scale, background=bg)
            if rotation:
                # PIL rotates counter-clockwise
                im = im.rotate(-rotation, expand=True)
            images.append(im)
        sheet = compose_sheet(images, padding=10, background=_background(args))
        out = Path(args.out)
        save_image(sheet, out)
    except (RenderError, ValueError) as e:
        logger.error(str(e))
        return 2
    logger.info(f"Wrote preview sheet {out} ({len(images)} icons)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="batterylevel", description="Battery level icon renderer")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_render = sub.add_parser("render", help="Render a single icon to .png or .svg")
    _add_common_args(p_render)
    p_render.add_argument("--size", default="100x167", help="Drawing area like 100x167 (default: 100x167)")
    p_render.add_argument("--out", required=True, help="Output file (.png or .svg)")
    p_render.set_defaults(func=cmd_render)

    p_preview = sub.add_parser("preview", help="Render a PNG sheet of sample icons")
    _add_common_args(p_preview)
    p_preview.add_argument("--out", required=True, help="Output PNG file")
    p_preview.set_defaults(func=cmd_preview)

    return p


def main(argv: list[str] | None = None) -> None:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
