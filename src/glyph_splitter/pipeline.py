from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import ExportConfig
from .extract_glyphs import GlyphSpec, load_glyphs, reference_rect
from .geometry import Rect, bounding_rect, flip_and_align, horizontal_offset
from .path_data import PathCommand, parse_path_data
from .render_glyph import write_glyph

MANIFEST_NAME = "manifest.json"


@dataclass(frozen=True)
class GlyphExport:
    char: str
    advance_width: float
    commands: Tuple[PathCommand, ...]
    background: bool


def collect_letters(glyphs: Iterable[str]) -> List[str]:
    """Distinct lowercased characters, in first-seen order."""
    letters: List[str] = []
    for char in glyphs:
        lower = char.lower()
        if lower not in letters:
            letters.append(lower)
    return letters


def prepare_glyph(spec: GlyphSpec, rect: Rect, background: bool) -> GlyphExport:
    commands = parse_path_data(spec.path_data)
    # rejects relative-before-absolute outlines before anything is written
    bounding_rect(commands)
    transformed = flip_and_align(commands, rect, spec.advance_width)
    return GlyphExport(
        char=spec.char,
        advance_width=spec.advance_width,
        commands=tuple(transformed),
        background=background,
    )


def plan_exports(
    glyphs: Dict[str, GlyphSpec],
    rect: Rect,
    only: Optional[str] = None,
) -> List[GlyphExport]:
    letters = collect_letters(glyphs)
    if only is not None:
        wanted = {char.lower() for char in only}
        letters = [letter for letter in letters if letter in wanted]

    exports: List[GlyphExport] = []
    for letter in letters:
        upper = letter.upper()
        upper_spec = glyphs.get(upper)
        if upper_spec is None:
            continue
        exports.append(prepare_glyph(upper_spec, rect, background=True))
        if letter != upper:
            lower_spec = glyphs.get(letter)
            if lower_spec is not None:
                exports.append(prepare_glyph(lower_spec, rect, background=False))
    return exports


def write_exports(
    exports: Iterable[GlyphExport],
    rect: Rect,
    output_dir: Path,
    png_height: Optional[int] = None,
) -> List[Dict[str, Any]]:
    manifest: List[Dict[str, Any]] = []
    for index, export in enumerate(exports, start=1):
        metadata = write_glyph(
            export.char,
            export.commands,
            rect,
            output_dir,
            background=export.background,
            png_height=png_height,
        )
        metadata["order"] = index
        metadata["advance_width"] = export.advance_width
        metadata["offset_x"] = horizontal_offset(rect, export.advance_width)
        manifest.append(metadata)
        print(f"[{index:02d}] {export.char} -> {metadata['svg']}")
    return manifest


def export_font(config: ExportConfig) -> Dict[str, Any]:
    glyphs = load_glyphs(config.input_path)
    rect = reference_rect(glyphs)
    exports = plan_exports(glyphs, rect, only=config.chars)

    manifest = write_exports(exports, rect, config.output_dir, png_height=config.png_height)

    config.output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = config.output_dir / MANIFEST_NAME
    manifest_path.write_text(json.dumps(manifest, indent=2))

    return {
        "input": str(config.input_path),
        "output_dir": str(config.output_dir),
        "reference_rect": {
            "min": list(rect.min),
            "max": list(rect.max),
            "width": rect.width,
            "height": rect.height,
        },
        "glyphs_in_font": len(glyphs),
        "exported": len(manifest),
        "manifest_path": str(manifest_path),
    }
