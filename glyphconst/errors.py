"""
glyphconst.errors - font parsing errors

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .base.struct import StructError


class FontFormatError(Exception):
    """Font file could not be turned into a glyph catalogue."""


class MissingRequiredTable(FontFormatError):
    """A table needed for the catalogue is absent."""

    def __init__(self, tag):
        super().__init__(f"Required '{tag}' table not found")
        self.tag = tag


class UnsupportedFormat(FontFormatError):
    """Table or file is in a format we can't read."""


class UnexpectedEndOfData(FontFormatError, StructError):
    """A read ran past the end of the available data."""


class EmptyResult(FontFormatError):
    """A table was read but yielded no entries."""


class NoGlyphsMatched(FontFormatError):
    """No glyph name survived normalisation."""
