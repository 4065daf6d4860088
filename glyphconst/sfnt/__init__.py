"""
glyphconst.sfnt - TrueType/OpenType table readers

(c) 2022--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from ..errors import MissingRequiredTable, UnsupportedFormat
from .directory import TableRecord, read_table_directory
from .post import read_post_names, read_post_version, POST_VERSION_2
from .cff import read_cff_names
from .cmap import read_cmap
from .woff import WOFF_MAGIC, WOFF2_MAGIC, unwrap_woff


SFNT_MAGIC = (
    b'\0\1\0\0',
    # TrueType
    b'true',
    # OpenType with CFF outlines
    b'OTTO',
)
COLLECTION_MAGIC = b'ttcf'


def open_sfnt(instream):
    """Check the file signature; return a stream holding a plain sfnt."""
    instream.seek(0)
    magic = instream.read(4)
    instream.seek(0)
    if magic == WOFF_MAGIC:
        return unwrap_woff(instream)
    if magic == WOFF2_MAGIC:
        raise UnsupportedFormat('WOFF2 fonts are not supported.')
    if magic == COLLECTION_MAGIC:
        raise UnsupportedFormat('Font collections are not supported.')
    if magic not in SFNT_MAGIC:
        logging.debug('Unrecognised sfnt signature %r', magic)
    return instream


def read_glyph_names(cursor, tables):
    """
    Read glyph names from `post`, falling back to `CFF ` if `post` has none.
    Returns dict of glyph index -> name.
    """
    post, cff = tables.get('post'), tables.get('CFF ')
    if post is None and cff is None:
        raise MissingRequiredTable('post')
    names = {}
    if post is not None:
        names = read_post_names(cursor, post)
    if not names and cff is not None:
        logging.debug('Reading glyph names from `CFF ` table.')
        names = read_cff_names(cursor, cff)
    elif not names and read_post_version(cursor, post) != POST_VERSION_2:
        raise UnsupportedFormat(
            "'post' table holds no glyph names and there is no 'CFF ' table"
        )
    return names


def read_codepoints(cursor, tables):
    """Read the codepoint -> glyph index mapping from `cmap`."""
    try:
        cmap = tables['cmap']
    except KeyError:
        raise MissingRequiredTable('cmap') from None
    mapping = read_cmap(cursor, cmap)
    if mapping is None:
        raise UnsupportedFormat("No 'cmap' subtable in format 4 or 12")
    return mapping
