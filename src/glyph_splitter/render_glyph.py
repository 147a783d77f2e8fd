from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, Sequence, Tuple

from svgpathtools import parse_path

from .geometry import Rect
from .path_data import PathCommand, format_number, format_path_data

SVG_NS = "http://www.w3.org/2000/svg"

# Characters that cannot appear in a file name.
FILE_NAME_OVERRIDES = {"/": "slash"}


def glyph_file_stem(char: str) -> str:
    return FILE_NAME_OVERRIDES.get(char, char)


def build_svg(commands: Sequence[PathCommand], rect: Rect, background: bool) -> str:
    width = format_number(rect.width)
    height = format_number(rect.height)
    background_rect = (
        f'<rect fill="white" x="0" y="0" width="{width}" height="{height}"/>'
        if background
        else ""
    )
    return (
        f'<svg xmlns="{SVG_NS}" viewBox="0 0 {width} {height}">'
        f"{background_rect}"
        f'<path d="{format_path_data(commands)}"/>'
        "</svg>"
    )


def outline_bounds(path_data: str) -> Dict[str, float] | None:
    """Geometric bounds of an outline, control curves included."""
    path = parse_path(path_data)
    try:
        xmin, xmax, ymin, ymax = path.bbox()
    except ValueError:
        return None
    return {"xmin": float(xmin), "xmax": float(xmax), "ymin": float(ymin), "ymax": float(ymax)}


def rasterize_svg(svg: str, output_path: Path, height_px: int, rect: Rect) -> Tuple[int, int]:
    from cairosvg import svg2png
    from PIL import Image

    scale = height_px / rect.height if rect.height else 1.0
    width_px = max(int(round(rect.width * scale)), 1)
    height_px = max(int(height_px), 1)

    png_bytes = svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=width_px,
        output_height=height_px,
    )
    image = Image.open(io.BytesIO(png_bytes)).convert("L")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path)
    return image.size


def write_glyph(
    char: str,
    commands: Sequence[PathCommand],
    rect: Rect,
    output_dir: Path,
    background: bool,
    png_height: int | None = None,
) -> Dict[str, object]:
    svg = build_svg(commands, rect, background)
    stem = glyph_file_stem(char)

    output_dir.mkdir(parents=True, exist_ok=True)
    svg_path = output_dir / f"{stem}.svg"
    svg_path.write_text(svg, encoding="utf-8")

    metadata: Dict[str, object] = {
        "char": char,
        "svg": str(svg_path),
        "background": background,
        "bounds": outline_bounds(format_path_data(commands)),
    }
    if png_height is not None:
        png_path = output_dir / f"{stem}.png"
        width_px, height_px = rasterize_svg(svg, png_path, png_height, rect)
        metadata["png"] = str(png_path)
        metadata["png_width_px"] = width_px
        metadata["png_height_px"] = height_px
    return metadata
