"""
glyphconst.glyphnames - turn PostScript glyph names into constant names

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import re


DEFAULT_STYLE = 'Regular'

# name suffix -> style, checked in this order
STYLE_SUFFIXES = (
    ('_regular', 'Regular'),
    ('_filled', 'Filled'),
    ('_rtl', 'Rtl'),
    ('_ltr', 'Ltr'),
)

# Fluent System Icons prefix
ICON_PREFIX = 'ic_fluent_'

# glyph names that never become constants
RESERVED_NAMES = ('.notdef', '.null', 'nonmarkingreturn')

# identifiers can't start with a digit
DIGIT_FILLER = 'Glyph'

_SEPARATORS = re.compile('[_.-]')


def split_style(name):
    """Split off a style suffix. Returns style name and remaining name."""
    for suffix, style in STYLE_SUFFIXES:
        if len(name) >= len(suffix) and name[-len(suffix):].lower() == suffix:
            return style, name[:-len(suffix)]
    return DEFAULT_STYLE, name


def strip_prefix(name):
    """Remove the icon-set prefix, if any."""
    if name[:len(ICON_PREFIX)].lower() == ICON_PREFIX:
        return name[len(ICON_PREFIX):]
    return name


def title_segment(segment):
    """
    Lower-case a name segment and capitalise the first letter of each word,
    then drop punctuation. Punctuation starts a new word; digits do not.
    """
    chars = []
    word_start = True
    for char in segment.lower():
        if char.isalpha():
            if word_start:
                char = char.upper()
            word_start = False
        elif not char.isdecimal():
            word_start = True
        chars.append(char)
    return ''.join(
        _c for _c in chars
        if _c.isalpha() or _c.isdecimal()
    )


def parse_glyph_name(raw_name):
    """
    Convert a glyph name to a style and a constant name.

    `ic_fluent_arrow_left_24_filled` becomes ('Filled', 'ArrowLeft24').
    Returns None if the name can't be used as a constant.
    """
    if not raw_name or not raw_name.strip() or raw_name in RESERVED_NAMES:
        return None
    style, name = split_style(raw_name)
    name = strip_prefix(name)
    identifier = ''.join(
        title_segment(_segment)
        for _segment in _SEPARATORS.split(name)
        if _segment
    )
    if not identifier:
        return None
    if identifier[0].isdecimal():
        identifier = DIGIT_FILLER + identifier
    return style, identifier
