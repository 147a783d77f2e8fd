import json

import pytest

from conftest import glyph_element
from glyph_splitter.config import ExportConfig
from glyph_splitter.errors import MissingReferenceError, RelativeBeforeAbsoluteError
from glyph_splitter.extract_glyphs import GlyphSpec
from glyph_splitter.geometry import Rect
from glyph_splitter.pipeline import collect_letters, export_font, plan_exports, write_exports
from glyph_splitter.render_glyph import build_svg, glyph_file_stem, outline_bounds

SQUARE = "M0,0 L10,0 L10,20 L0,20 Z"


def test_collect_letters_in_first_seen_order():
    assert collect_letters(["A", "b", "a", "B", "/"]) == ["a", "b", "/"]


def test_plan_pairs_upper_and_lower_forms():
    rect = Rect(min=(0.0, 0.0), max=(20.0, 20.0))
    glyphs = {
        "A": GlyphSpec("A", 10, "M0,0 L1,1"),
        "a": GlyphSpec("a", 6, "M0,0 L1,1"),
    }
    exports = plan_exports(glyphs, rect)
    assert [(e.char, e.background) for e in exports] == [("A", True), ("a", False)]
    # each form is centred with its own advance width
    assert exports[0].commands[0].parameters == (5.0, 20.0)
    assert exports[1].commands[0].parameters == (7.0, 20.0)


def test_plan_uppercase_only_when_lowercase_missing():
    rect = Rect(min=(0.0, 0.0), max=(10.0, 10.0))
    exports = plan_exports({"B": GlyphSpec("B", 10, "M0,0 L1,1")}, rect)
    assert [(e.char, e.background) for e in exports] == [("B", True)]


def test_plan_skips_letters_without_uppercase():
    rect = Rect(min=(0.0, 0.0), max=(10.0, 10.0))
    glyphs = {
        "c": GlyphSpec("c", 10, "M0,0 L1,1"),
        "A": GlyphSpec("A", 10, "M0,0 L1,1"),
    }
    assert [e.char for e in plan_exports(glyphs, rect)] == ["A"]


def test_plan_caseless_characters_export_once_with_background():
    rect = Rect(min=(0.0, 0.0), max=(10.0, 10.0))
    exports = plan_exports({"/": GlyphSpec("/", 10, "M0,0 L1,1")}, rect)
    assert [(e.char, e.background) for e in exports] == [("/", True)]


def test_plan_restricted_to_requested_letters():
    rect = Rect(min=(0.0, 0.0), max=(10.0, 10.0))
    glyphs = {
        "A": GlyphSpec("A", 10, "M0,0 L1,1"),
        "B": GlyphSpec("B", 10, "M0,0 L1,1"),
        "b": GlyphSpec("b", 10, "M0,0 L1,1"),
    }
    assert [e.char for e in plan_exports(glyphs, rect, only="B")] == ["B", "b"]


def test_plan_rejects_relative_first_glyph():
    rect = Rect(min=(0.0, 0.0), max=(10.0, 10.0))
    glyphs = {
        "A": GlyphSpec("A", 10, "M0,0 L1,1"),
        "a": GlyphSpec("a", 10, "l1,1"),
    }
    with pytest.raises(RelativeBeforeAbsoluteError):
        plan_exports(glyphs, rect)


def test_glyph_file_stem():
    assert glyph_file_stem("/") == "slash"
    assert glyph_file_stem("A") == "A"


def test_build_svg_background_only_when_requested():
    rect = Rect(min=(0.0, 0.0), max=(10.0, 20.0))
    with_background = build_svg([], rect, background=True)
    without_background = build_svg([], rect, background=False)
    assert 'viewBox="0 0 10 20"' in with_background
    assert '<rect fill="white" x="0" y="0" width="10" height="20"/>' in with_background
    assert "<rect" not in without_background


def test_outline_bounds():
    assert outline_bounds("M0,20 L10,20 L10,0 L0,0 Z") == {
        "xmin": 0.0,
        "xmax": 10.0,
        "ymin": 0.0,
        "ymax": 20.0,
    }
    assert outline_bounds("M0,0") is None


def test_export_font_writes_svgs_and_manifest(write_font, tmp_path, capsys):
    font = write_font(
        glyph_element("A", 10, SQUARE),
        glyph_element("a", 10, "M0,0 l5,5"),
        glyph_element("B", 10, "M0,0 L1,1"),
        glyph_element("/", 10, "M0,0 L10,20"),
        glyph_element("é", 10, "M0,0 L10,20"),
    )
    output_dir = tmp_path / "out"
    summary = export_font(ExportConfig(input_path=font, output_dir=output_dir))

    assert sorted(p.name for p in output_dir.iterdir()) == [
        "A.svg",
        "B.svg",
        "a.svg",
        "manifest.json",
        "slash.svg",
    ]
    # "B" is the last uppercase letter, so its box is the shared frame
    assert summary["reference_rect"]["width"] == 1.0
    assert summary["exported"] == 4

    upper = (output_dir / "A.svg").read_text(encoding="utf-8")
    assert upper == (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1 1">'
        '<rect fill="white" x="0" y="0" width="1" height="1"/>'
        '<path d="M-4.5,1 L5.5,1 L5.5,-19 L-4.5,-19 Z"/>'
        "</svg>"
    )
    lower = (output_dir / "a.svg").read_text(encoding="utf-8")
    assert "<rect" not in lower
    assert 'd="M-4.5,1 l5,-5"' in lower

    manifest = json.loads((output_dir / "manifest.json").read_text())
    assert [entry["char"] for entry in manifest] == ["A", "a", "B", "/"]
    assert manifest[0]["background"] is True
    assert manifest[1]["background"] is False
    assert manifest[0]["offset_x"] == -4.5

    out = capsys.readouterr().out
    assert "[01] A ->" in out
    assert "[04] / ->" in out


def test_export_font_writes_nothing_when_a_glyph_is_invalid(write_font, tmp_path):
    font = write_font(
        glyph_element("A", 10, SQUARE),
        glyph_element("a", 10, "l5,5"),
    )
    output_dir = tmp_path / "out"
    with pytest.raises(RelativeBeforeAbsoluteError):
        export_font(ExportConfig(input_path=font, output_dir=output_dir))
    assert not output_dir.exists()


def test_write_exports_with_png_preview(tmp_path):
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        pytest.skip("cairo is not available")

    rect = Rect(min=(0.0, 0.0), max=(10.0, 20.0))
    exports = plan_exports({"A": GlyphSpec("A", 10, SQUARE)}, rect)
    [entry] = write_exports(exports, rect, tmp_path, png_height=40)
    assert (tmp_path / "A.png").exists()
    assert (entry["png_width_px"], entry["png_height_px"]) == (20, 40)


def test_export_font_writes_nothing_when_reference_glyph_is_empty(write_font, tmp_path):
    font = write_font(
        glyph_element("A", 10, "M0,0 L10,20"),
        glyph_element("Z", 10, ""),
    )
    output_dir = tmp_path / "out"
    with pytest.raises(MissingReferenceError):
        export_font(ExportConfig(input_path=font, output_dir=output_dir))
    assert not output_dir.exists()
