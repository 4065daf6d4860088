"""
glyphconst.sfnt.cmap - codepoint mappings from the `cmap` table

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from ..base.struct import big_endian as be
from ..base.binary import wrap_uint16, wrap_uint32


# https://learn.microsoft.com/en-us/typography/opentype/spec/cmap

_CMAP_HEADER = be.Struct(
    version='uint16',
    num_tables='uint16',
)

_ENCODING_RECORD = be.Struct(
    platform_id='uint16',
    encoding_id='uint16',
    offset='uint32',
)

_FORMAT_4_HEADER = be.Struct(
    format='uint16',
    length='uint16',
    language='uint16',
    seg_count_x2='uint16',
    # binary search hints, not used
    search_range='uint16',
    entry_selector='uint16',
    range_shift='uint16',
)

_FORMAT_12_HEADER = be.Struct(
    format='uint16',
    reserved='uint16',
    length='uint32',
    language='uint32',
    num_groups='uint32',
)

_SEQUENTIAL_MAP_GROUP = be.Struct(
    start_char_code='uint32',
    end_char_code='uint32',
    start_glyph_id='uint32',
)

# largest number of codepoints a format-12 group can sensibly cover
MAX_GROUP_SPAN = 0x10ffff

# (platform, encoding) -> preference, higher is better
# unlisted subtables rank lowest
_SUBTABLE_PRIORITY = {
    # Windows, Unicode full repertoire
    (3, 10): 3,
    # Unicode, BMP only (format 4) or full repertoire (format 12)
    (0, 4): 2,
    # Windows, Unicode BMP
    (3, 1): 1,
}


def subtable_priority(platform_id, encoding_id):
    """Preference rank of a cmap subtable."""
    return _SUBTABLE_PRIORITY.get((platform_id, encoding_id), 0)


def read_cmap(cursor, record):
    """
    Read the preferred Unicode subtable of a `cmap` table.
    Returns dict of codepoint -> glyph index, or None if no subtable has a
    supported format.
    """
    cursor.seek(record.offset)
    header = cursor.read_struct(_CMAP_HEADER)
    encoding_records = cursor.read_array(_ENCODING_RECORD, header.num_tables)
    # sorted() is stable, so ties stay in table order
    ranked = sorted(
        encoding_records,
        key=lambda _rec: subtable_priority(_rec.platform_id, _rec.encoding_id),
        reverse=True,
    )
    for reader in (_read_format_12, _read_format_4):
        for encoding_record in ranked:
            cursor.seek(record.offset + encoding_record.offset)
            mapping = reader(cursor)
            if mapping is not None:
                logging.debug(
                    'Using cmap subtable platform %d encoding %d',
                    encoding_record.platform_id, encoding_record.encoding_id
                )
                return mapping
    return None


def _read_format_12(cursor):
    """Read a format-12 segmented coverage subtable at the cursor."""
    position = cursor.tell()
    if cursor.read_u16() != 12:
        return None
    cursor.seek(position)
    header = cursor.read_struct(_FORMAT_12_HEADER)
    mapping = {}
    # num_groups is untrusted, read groups singly
    for _ in range(header.num_groups):
        group = cursor.read_struct(_SEQUENTIAL_MAP_GROUP)
        start, end = group.start_char_code, group.end_char_code
        if wrap_uint32(end - start) > MAX_GROUP_SPAN:
            logging.debug(
                'Skipping malformed cmap group 0x%x--0x%x.', start, end
            )
            continue
        for code in range(start, end + 1):
            mapping[code] = wrap_uint16(group.start_glyph_id + code - start)
    return mapping


def _read_format_4(cursor):
    """Read a format-4 segment mapping subtable at the cursor."""
    position = cursor.tell()
    if cursor.read_u16() != 4:
        return None
    cursor.seek(position)
    header = cursor.read_struct(_FORMAT_4_HEADER)
    seg_count = header.seg_count_x2 // 2
    end_count = cursor.read_array(be.uint16, seg_count)
    # reserved pad
    cursor.read_u16()
    start_count = cursor.read_array(be.uint16, seg_count)
    id_delta = cursor.read_array(be.int16, seg_count)
    id_range_offset = cursor.read_array(be.uint16, seg_count)
    glyph_id_count = max(0, header.length // 2 - 8 - 4 * seg_count)
    glyph_id_array = cursor.read_array(be.uint16, glyph_id_count)
    mapping = {}
    for seg, (start, end, delta, range_offset) in enumerate(zip(
            start_count, end_count, id_delta, id_range_offset
        )):
        for code in range(start, end + 1):
            if not range_offset:
                mapping[code] = wrap_uint16(code + delta)
                continue
            index = range_offset // 2 + (code - start) - (seg_count - seg)
            if 0 <= index < len(glyph_id_array):
                glyph_index = glyph_id_array[index]
            else:
                glyph_index = 0
            # glyph index 0 means unmapped and does not get the delta
            if glyph_index:
                glyph_index = wrap_uint16(glyph_index + delta)
            mapping[code] = glyph_index
    return mapping
