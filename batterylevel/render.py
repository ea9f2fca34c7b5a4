from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from PIL import Image, ImageChops, ImageDraw

from .colors import Color
from .icon import DrawOp, FillPath, LineCap, StrokePath
from .path import Path as IconPath
from .path import format_number

logger = logging.getLogger("batterylevel.render")

# Supersampling factor used for antialiasing raster output.
DEFAULT_SCALE = 4


class RenderError(RuntimeError):
    pass


def _scaled(poly: list[tuple[float, float]], scale: int) -> list[tuple[float, float]]:
    return [(x * scale, y * scale) for x, y in poly]


def _fill_mask(path: IconPath, size: tuple[int, int], scale: int) -> Image.Image:
    mask = Image.new("L", size, 0)
    draw = ImageDraw.Draw(mask)
    for poly in path.polygons():
        if len(poly) >= 3:
            draw.polygon(_scaled(poly, scale), fill=255)
    return mask


def _stroke_mask(op: StrokePath, size: tuple[int, int], scale: int) -> Image.Image | None:
    width = int(round(op.width * scale))
    if width < 1:
        return None
    mask = Image.new("L", size, 0)
    draw = ImageDraw.Draw(mask)
    closed = op.path.is_closed
    for poly in op.path.polygons():
        pts = _scaled(poly, scale)
        if closed and len(pts) >= 2:
            # Wrap around so the first corner gets a join as well.
            pts = pts + pts[:2]
        # Pillow only knows round ("curve") joins; miter/bevel are drawn round.
        draw.line(pts, fill=255, width=width, joint="curve")
        if not closed and op.cap is LineCap.ROUND and pts:
            r = width / 2
            for x, y in (pts[0], pts[-1]):
                draw.ellipse([x - r, y - r, x + r, y + r], fill=255)
    return mask


def _paint(canvas: Image.Image, mask: Image.Image, color: Color) -> None:
    layer = Image.new("RGBA", canvas.size, (*color, 255))
    layer.putalpha(mask)
    canvas.alpha_composite(layer)


def render_image(
    ops: Iterable[DrawOp],
    size: tuple[int, int],
    *,
    scale: int = DEFAULT_SCALE,
    background: Color | None = None,
) -> Image.Image:
    """
    Rasterize draw operations onto an RGBA image of `size`.

    Drawing happens at `scale` times the size and is downsampled with LANCZOS
    for smooth edges. Operations whose path has no area are skipped.
    """
    w, h = size
    scale = max(1, int(scale))
    big = (max(1, w * scale), max(1, h * scale))
    bg = (*background, 255) if background is not None else (0, 0, 0, 0)
    canvas = Image.new("RGBA", big, bg)

    for op in ops:
        if op.path.is_empty:
            logger.debug(f"Skipping empty {type(op).__name__}")
            continue
        if isinstance(op, FillPath):
            mask = _fill_mask(op.path, big, scale)
            if op.clip is not None:
                if op.clip.is_empty:
                    logger.debug("Skipping fill with empty clip")
                    continue
                mask = ImageChops.multiply(mask, _fill_mask(op.clip, big, scale))
            _paint(canvas, mask, op.color)
        else:
            stroke = _stroke_mask(op, big, scale)
            if stroke is None:
                logger.debug(f"Skipping stroke thinner than one pixel (width={op.width})")
                continue
            _paint(canvas, stroke, op.color)

    if scale == 1:
        return canvas
    return canvas.resize((max(1, w), max(1, h)), Image.Resampling.LANCZOS)


def render_svg(ops: Iterable[DrawOp], size: tuple[int, int], *, background: Color | None = None) -> str:
    """Serialize draw operations as a standalone SVG document."""
    w, h = size
    defs: list[str] = []
    body: list[str] = []
    if background is not None:
        body.append(f'<rect width="{w}" height="{h}" fill="{background.hex}"/>')

    for op in ops:
        if op.path.is_empty:
            continue
        d = op.path.svg_d()
        if isinstance(op, FillPath):
            attrs = ""
            if op.clip is not None:
                if op.clip.is_empty:
                    continue
                clip_id = f"clip{len(defs)}"
                defs.append(f'<clipPath id="{clip_id}"><path d="{op.clip.svg_d()}"/></clipPath>')
                attrs = f' clip-path="url(#{clip_id})"'
            body.append(f'<path d="{d}" fill="{op.color.hex}"{attrs}/>')
        else:
            if op.width <= 0:
                continue
            body.append(
                f'<path d="{d}" fill="none" stroke="{op.color.hex}" '
                f'stroke-width="{format_number(op.width)}" '
                f'stroke-linecap="{op.cap.value}" stroke-linejoin="{op.join.value}"/>'
            )

    parts = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">']
    if defs:
        parts.append("<defs>" + "".join(defs) + "</defs>")
    parts.extend(body)
    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def compose_sheet(
    images: Sequence[Image.Image],
    *,
    padding: int = 10,
    background: Color | None = None,
) -> Image.Image:
    """Lay images out left to right, bottom-aligned, with `padding` around each."""
    if not images:
        return Image.new("RGBA", (padding * 2 or 1, padding * 2 or 1), (0, 0, 0, 0))
    width = sum(im.width for im in images) + padding * (len(images) + 1)
    height = max(im.height for im in images) + padding * 2
    bg = (*background, 255) if background is not None else (0, 0, 0, 0)
    sheet = Image.new("RGBA", (width, height), bg)
    x = padding
    for im in images:
        y = height - padding - im.height
        sheet.alpha_composite(im.convert("RGBA"), (x, y))
        x += im.width + padding
    return sheet


def write_icon(
    ops: Sequence[DrawOp],
    size: tuple[int, int],
    out_path: Path,
    *,
    scale: int = DEFAULT_SCALE,
    background: Color | None = None,
) -> None:
    """
    Write draw operations to `out_path`; the suffix picks the format
    (.png or .svg).
    """
    suffix = out_path.suffix.lower()
    if suffix not in (".png", ".svg"):
        raise RenderError(
            f"Unsupported output format: {out_path.name}\n"
            f"  Try: use a .png or .svg file name"
        )
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        if suffix == ".svg":
            out_path.write_text(render_svg(ops, size, background=background), encoding="utf-8")
        else:
            render_image(ops, size, scale=scale, background=background).save(out_path, format="PNG")
    except Exception as e:  # noqa: BLE001 - we want a clean error surface
        raise RenderError(
            f"Failed to write icon: {out_path}\n"
            f"  Error type: {type(e).__name__}\n"
            f"  Original error: {e}"
        ) from e
    logger.debug(f"Wrote {out_path} ({size[0]}x{size[1]}, {len(ops)} ops)")


def save_image(im: Image.Image, out_path: Path) -> None:
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        im.save(out_path, format="PNG")
    except Exception as e:  # noqa: BLE001
        raise RenderError(
            f"Failed to write image: {out_path}\n"
            f"  Try: Check write permissions for {out_path.parent}\n"
            f"  Original error: {e}"
        ) from e
