"""CLI entry point for splitting an SVG font into per-letter images."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import ExportConfig
from .errors import GlyphSplitterError
from .pipeline import export_font


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Write one normalized SVG per ASCII letter of an SVG font.",
        epilog="Defaults can also be set through GLYPH_SPLITTER_* variables or a .env file.",
    )
    parser.add_argument(
        "--input",
        help="SVG font file to read (default: font.svg).",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory to write the glyph images into (default: out).",
    )
    parser.add_argument(
        "--chars",
        help="Only export these letters, e.g. 'abcXYZ' (case-insensitive).",
    )
    parser.add_argument(
        "--png-height",
        type=int,
        help="Also rasterize each glyph to a PNG of this height in pixels.",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ExportConfig:
    config = ExportConfig.from_env()
    if args.input is not None:
        config.input_path = Path(args.input)
    if args.output_dir is not None:
        config.output_dir = Path(args.output_dir)
    if args.chars is not None:
        config.chars = args.chars
    if args.png_height is not None:
        config.png_height = args.png_height
    config.input_path = config.input_path.expanduser()
    config.output_dir = config.output_dir.expanduser()
    return config


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    try:
        config = build_config(args)
        summary = export_font(config)
    except (GlyphSplitterError, OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(summary))


if __name__ == "__main__":
    main()
