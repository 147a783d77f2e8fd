"""Split an SVG font into normalized per-letter SVG images."""
