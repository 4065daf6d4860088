"""
glyphconst.catalogue - glyph catalogue from a font file

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from collections import namedtuple
from pathlib import Path

from .cursor import ByteCursor
from .errors import MissingRequiredTable, EmptyResult, NoGlyphsMatched
from .glyphnames import parse_glyph_name
from .sfnt import open_sfnt, read_table_directory, read_glyph_names, read_codepoints


class GlyphEntry(namedtuple('GlyphEntry', 'constant_name raw_name codepoint')):
    """One glyph constant."""

    def __str__(self):
        return f'{self.constant_name} = U+{self.codepoint:04X} ({self.raw_name})'


def build_catalogue(codepoints, glyph_names):
    """
    Join codepoint -> glyph index and glyph index -> name mappings into
    a dict of style -> list of GlyphEntry.

    Glyphs are taken in the iteration order of `codepoints`; if two glyphs
    end up with the same style and constant name, the first one is kept.
    Style keys are in sorted order; the entries are not sorted.
    """
    groups = {}
    seen = set()
    for codepoint, glyph_index in codepoints.items():
        raw_name = glyph_names.get(glyph_index)
        if not raw_name or not raw_name.strip():
            continue
        parsed = parse_glyph_name(raw_name)
        if parsed is None:
            logging.debug('Glyph name `%s` not usable as constant', raw_name)
            continue
        if parsed in seen:
            logging.debug(
                'Dropping U+%04X `%s`: duplicate constant %s in style %s',
                codepoint, raw_name, parsed[1], parsed[0]
            )
            continue
        seen.add(parsed)
        style, constant_name = parsed
        groups.setdefault(style, []).append(
            GlyphEntry(constant_name, raw_name, codepoint)
        )
    return {_style: groups[_style] for _style in sorted(groups)}


def sort_catalogue(catalogue):
    """Order each style group by constant name."""
    return {
        _style: sorted(_entries, key=lambda _e: _e.constant_name)
        for _style, _entries in catalogue.items()
    }


def read_catalogue(instream):
    """
    Read a glyph catalogue from a seekable binary font stream.
    Returns dict of style -> list of GlyphEntry sorted by constant name.
    """
    cursor = ByteCursor(open_sfnt(instream))
    tables = read_table_directory(cursor)
    if 'cmap' not in tables:
        raise MissingRequiredTable('cmap')
    glyph_names = read_glyph_names(cursor, tables)
    codepoints = read_codepoints(cursor, tables)
    logging.debug(
        'Found %d glyph names and %d codepoints', len(glyph_names), len(codepoints)
    )
    if not glyph_names or not codepoints:
        raise EmptyResult('Glyph names or cmap mappings could not be extracted')
    catalogue = build_catalogue(codepoints, glyph_names)
    if not catalogue:
        raise NoGlyphsMatched('No glyphs matched the expected naming pattern')
    for style, entries in catalogue.items():
        logging.info('Style %s: %d glyphs', style, len(entries))
    return sort_catalogue(catalogue)


def load_catalogue(path):
    """Read a glyph catalogue from a font file."""
    path = Path(path)
    logging.info('Reading glyph catalogue from `%s`', path)
    with open(path, 'rb') as instream:
        return read_catalogue(instream)
