from pathlib import Path

import pytest

SVG_FONT_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg">
  <defs>
    <font id="test" horiz-adv-x="10">
      <missing-glyph horiz-adv-x="10" d="M0,0 L1,1"/>
{glyphs}
    </font>
  </defs>
</svg>
"""


def glyph_element(unicode: str, width: float, d: str) -> str:
    return f'      <glyph unicode="{unicode}" horiz-adv-x="{width}" d="{d}"/>'


@pytest.fixture
def write_font(tmp_path: Path):
    def _write(*glyphs: str, name: str = "font.svg") -> Path:
        path = tmp_path / name
        path.write_text(SVG_FONT_TEMPLATE.format(glyphs="\n".join(glyphs)), encoding="utf-8")
        return path

    return _write
