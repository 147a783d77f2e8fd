from __future__ import annotations

import re
import string
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from html.entities import html5
from pathlib import Path
from typing import Dict, Iterator

from .errors import FontFileNotFoundError, GlyphRecordError, MissingReferenceError
from .geometry import Rect, bounding_rect
from .path_data import parse_path_data

REQUIRED_ATTRIBUTES = ("unicode", "horiz-adv-x", "d")

XML_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})
NAMED_ENTITY_RE = re.compile(rb"&([A-Za-z][A-Za-z0-9]*);")


@dataclass(frozen=True)
class GlyphSpec:
    char: str
    advance_width: float
    path_data: str


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def iter_glyph_specs(root: ET.Element) -> Iterator[GlyphSpec]:
    for element in root.iter():
        if not isinstance(element.tag, str) or _local_name(element.tag) != "glyph":
            continue
        missing = [name for name in REQUIRED_ATTRIBUTES if name not in element.attrib]
        if missing:
            raise GlyphRecordError(
                f"Glyph record is missing attribute(s): {', '.join(missing)}"
            )
        decoded = element.attrib["unicode"]
        if not decoded:
            raise GlyphRecordError("Glyph record has an empty unicode attribute")
        raw_width = element.attrib["horiz-adv-x"]
        try:
            advance_width = float(raw_width)
        except ValueError:
            raise GlyphRecordError(
                f"Glyph {decoded!r} has a non-numeric horiz-adv-x: {raw_width!r}"
            ) from None
        yield GlyphSpec(
            char=decoded[0],
            advance_width=advance_width,
            path_data=element.attrib["d"],
        )


def _numeric_html_entities(data: bytes) -> bytes:
    """Rewrite HTML named entities (``&eacute;``) as numeric references.

    XML only predefines five names; the rest would be rejected by the parser.
    Names HTML does not know are left alone for the document's own DTD.
    """

    def replace(match: re.Match) -> bytes:
        name = match.group(1).decode("ascii")
        if name in XML_ENTITIES:
            return match.group(0)
        expansion = html5.get(f"{name};")
        if expansion is None:
            return match.group(0)
        return "".join(f"&#{ord(char)};" for char in expansion).encode("ascii")

    return NAMED_ENTITY_RE.sub(replace, data)


def load_glyphs(font_path: Path) -> Dict[str, GlyphSpec]:
    """Read an SVG font and key its ASCII glyphs by character.

    A later record for the same character replaces an earlier one.
    """
    if not font_path.is_file():
        raise FontFileNotFoundError(f"font file not found at {font_path}")
    try:
        root = ET.fromstring(_numeric_html_entities(font_path.read_bytes()))
    except ET.ParseError as exc:
        raise GlyphRecordError(f"Unable to parse font file {font_path}: {exc}") from exc

    glyphs: Dict[str, GlyphSpec] = {}
    for spec in iter_glyph_specs(root):
        if spec.char.isascii():
            glyphs[spec.char] = spec
    return glyphs


def reference_rect(glyphs: Dict[str, GlyphSpec]) -> Rect:
    """Shared frame for every exported glyph.

    Each uppercase letter found (A to Z) replaces the previous result, so the
    last one present decides the frame.
    """
    rect: Rect | None = None
    char_used = ""
    for char in string.ascii_uppercase:
        spec = glyphs.get(char)
        if spec is None:
            continue
        rect = bounding_rect(parse_path_data(spec.path_data))
        char_used = char
    if rect is None:
        raise MissingReferenceError("font has no uppercase A-Z glyph to derive the frame from")
    if rect.is_empty:
        raise MissingReferenceError(
            f"uppercase glyph {char_used!r} has no points to derive the frame from"
        )
    return rect
