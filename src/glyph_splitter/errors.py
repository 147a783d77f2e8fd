"""Exceptions raised while splitting a font."""

from __future__ import annotations


class GlyphSplitterError(Exception):
    """Base class for every fatal condition of a run."""


class FontFileNotFoundError(GlyphSplitterError, FileNotFoundError):
    pass


class GlyphRecordError(GlyphSplitterError, ValueError):
    pass


class PathDataError(GlyphSplitterError, ValueError):
    pass


class RelativeBeforeAbsoluteError(GlyphSplitterError, ValueError):
    pass


class MissingReferenceError(GlyphSplitterError, ValueError):
    pass
