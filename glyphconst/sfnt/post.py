"""
glyphconst.sfnt.post - glyph names from the `post` table

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from ..base.struct import big_endian as be
from .names import MAC_GLYPH_NAMES


# https://learn.microsoft.com/en-us/typography/opentype/spec/post
POST_VERSION_2 = 0x00020000

_POST_HEADER = be.Struct(
    version='uint32',
    italic_angle='int32',
    underline_position='int16',
    underline_thickness='int16',
    is_fixed_pitch='uint32',
    min_mem_type42='uint32',
    max_mem_type42='uint32',
    min_mem_type1='uint32',
    max_mem_type1='uint32',
)


def read_post_names(cursor, record):
    """
    Read glyph names from a `post` table.
    Returns dict of glyph index -> name, empty if the table holds no names.
    """
    version = read_post_version(cursor, record)
    if version != POST_VERSION_2:
        logging.debug('`post` table version 0x%08x holds no glyph names.', version)
        return {}
    cursor.seek(record.offset)
    header = cursor.read_struct(_POST_HEADER)
    logging.debug('post table: %s', header)
    num_glyphs = cursor.read_u16()
    name_indices = cursor.read_array(be.uint16, num_glyphs)
    custom_names = _read_custom_names(cursor, name_indices)
    names = {}
    for glyph_index, name_index in enumerate(name_indices):
        if name_index < len(MAC_GLYPH_NAMES):
            name = MAC_GLYPH_NAMES[name_index]
        else:
            name = custom_names.get(name_index - len(MAC_GLYPH_NAMES), '')
        if name.strip():
            names[glyph_index] = name
    return names


def read_post_version(cursor, record):
    """Read the version number of a `post` table."""
    cursor.seek(record.offset)
    return cursor.read_u32()


def _read_custom_names(cursor, name_indices):
    """Read as many Pascal strings as the highest name index requires."""
    max_index = max(name_indices, default=-1)
    count = max(0, max_index - len(MAC_GLYPH_NAMES) + 1)
    custom_names = {}
    for index in range(count):
        length = cursor.read_byte()
        custom_names[index] = cursor.read_bytes(length).decode('ascii', 'replace')
    return custom_names
