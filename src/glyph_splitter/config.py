"""Run configuration, read from the environment and an optional .env file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_INPUT = "font.svg"
DEFAULT_OUTPUT_DIR = "out"


@dataclass
class ExportConfig:
    input_path: Path = Path(DEFAULT_INPUT)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    chars: Optional[str] = None  # None exports every letter in the font
    png_height: Optional[int] = None

    @classmethod
    def from_env(cls) -> "ExportConfig":
        load_dotenv(find_dotenv(usecwd=True))
        png_height = os.environ.get("GLYPH_SPLITTER_PNG_HEIGHT")
        if png_height:
            try:
                parsed_height: Optional[int] = int(png_height)
            except ValueError:
                raise ValueError(
                    f"GLYPH_SPLITTER_PNG_HEIGHT must be an integer, got {png_height!r}"
                ) from None
        else:
            parsed_height = None
        return cls(
            input_path=Path(os.environ.get("GLYPH_SPLITTER_INPUT", DEFAULT_INPUT)),
            output_dir=Path(os.environ.get("GLYPH_SPLITTER_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
            chars=os.environ.get("GLYPH_SPLITTER_CHARS") or None,
            png_height=parsed_height,
        )
