"""
glyphconst - glyph constant catalogues from TrueType/OpenType icon fonts

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys as _sys
assert _sys.version_info >= (3, 9)

from .constants import VERSION as __version__
from .errors import (
    FontFormatError, MissingRequiredTable, UnsupportedFormat,
    UnexpectedEndOfData, EmptyResult, NoGlyphsMatched,
)
from .cursor import ByteCursor
from .glyphnames import parse_glyph_name
from .catalogue import (
    GlyphEntry, build_catalogue, sort_catalogue, read_catalogue, load_catalogue
)
from .emit import generate_csharp, generate_json
from . import config
