"""
glyphconst.sfnt.cff - glyph names from the `CFF ` table

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from ..base.struct import big_endian as be
from ..base.binary import bytes_to_int, wrap_uint16
from ..errors import UnsupportedFormat
from .names import CFF_STANDARD_STRINGS


# Adobe Technical Note #5176, The Compact Font Format Specification
# https://adobe-type-tools.github.io/font-tech-notes/pdfs/5176.CFF.pdf

_CFF_HEADER = be.Struct(
    major='uint8',
    minor='uint8',
    hdr_size='uint8',
    off_size='uint8',
)

# charset range formats
_RANGE_1 = be.Struct(
    first='uint16',
    n_left='uint8',
)
_RANGE_2 = be.Struct(
    first='uint16',
    n_left='uint16',
)
_CHARSET_RANGES = {
    1: _RANGE_1,
    2: _RANGE_2,
}

# Top DICT operators
CHARSET_OP = 15
CHARSTRINGS_OP = 17
ESCAPE_OP = 12

# DICT operand prefixes
_SHORTINT = 28
_LONGINT = 29
_REAL = 30


def read_cff_names(cursor, record):
    """
    Read glyph names from a `CFF ` table through its charset.
    Returns dict of glyph index -> name.
    """
    base = record.offset
    cursor.seek(base)
    header = cursor.read_struct(_CFF_HEADER)
    logging.debug('CFF header: %s', header)
    cursor.seek(base + header.hdr_size)
    # Name INDEX
    skip_index(cursor)
    top_dicts = read_index(cursor)
    if not top_dicts:
        logging.debug('Empty Top DICT INDEX in `CFF ` table.')
        return {}
    if len(top_dicts) > 1:
        logging.info('CFF font set holds %d fonts; using the first.', len(top_dicts))
    strings = read_index(cursor)
    # Global Subr INDEX
    skip_index(cursor)
    offsets = parse_dict_offsets(top_dicts[0])
    charset_offset = offsets.get(CHARSET_OP, 0)
    charstrings_offset = offsets.get(CHARSTRINGS_OP, 0)
    if charset_offset < 0 or charstrings_offset < 0:
        raise UnsupportedFormat('Negative offset in CFF Top DICT.')
    if not charstrings_offset:
        logging.debug('No CharStrings offset in CFF Top DICT.')
        return {}
    cursor.seek(base + charstrings_offset)
    num_glyphs = cursor.read_u16()
    logging.debug('CFF font has %d glyphs', num_glyphs)
    if not num_glyphs:
        return {}
    names = {0: '.notdef'}
    if not charset_offset:
        # predefined ISOAdobe charset, no custom glyph names
        logging.debug('CFF font uses the ISOAdobe charset.')
        return names
    cursor.seek(base + charset_offset)
    sids = read_charset(cursor, num_glyphs)
    names.update(
        (_gid, resolve_sid(_sid, strings))
        for _gid, _sid in sids.items()
    )
    return names


###############################################################################
# INDEX structure

def _read_index_offsets(cursor):
    """Read the count and offset array of an INDEX."""
    count = cursor.read_u16()
    if not count:
        return ()
    off_size = cursor.read_byte()
    if not off_size:
        logging.debug('Zero offset size in INDEX.')
        return (0,) * (count + 1)
    data = cursor.read_bytes(off_size * (count + 1))
    return tuple(
        bytes_to_int(data[_i:_i+off_size])
        for _i in range(0, len(data), off_size)
    )


def read_index(cursor):
    """Read an INDEX into a list of bytes objects."""
    offsets = _read_index_offsets(cursor)
    return [
        cursor.read_bytes(_end - _start)
        for _start, _end in zip(offsets, offsets[1:])
    ]


def skip_index(cursor):
    """Move past an INDEX without reading its data."""
    offsets = _read_index_offsets(cursor)
    if offsets:
        # offsets are 1-based from the byte before the data
        cursor.skip(offsets[-1] - 1)


###############################################################################
# DICT operand interpreter

def parse_dict_offsets(data, operators=(CHARSET_OP, CHARSTRINGS_OP)):
    """
    Run through DICT data and capture the last operand given to each of
    `operators`. Returns dict of operator -> operand.
    """
    captured = {}
    operands = []
    pos = 0
    while pos < len(data):
        b0 = data[pos]
        if 32 <= b0 <= 246:
            operands.append(b0 - 139)
            pos += 1
        elif 247 <= b0 <= 254:
            if pos + 1 >= len(data):
                break
            if b0 <= 250:
                operands.append((b0 - 247) * 256 + data[pos+1] + 108)
            else:
                operands.append(-(b0 - 251) * 256 - data[pos+1] - 108)
            pos += 2
        elif b0 == _SHORTINT:
            if pos + 2 >= len(data):
                break
            operands.append(bytes_to_int(data[pos+1:pos+3], signed=True))
            pos += 3
        elif b0 == _LONGINT:
            if pos + 4 >= len(data):
                break
            operands.append(bytes_to_int(data[pos+1:pos+5], signed=True))
            pos += 5
        elif b0 == _REAL:
            pos += 1
            while pos < len(data):
                nibbles = data[pos]
                pos += 1
                if (nibbles & 0x0f) == 0x0f or (nibbles >> 4) == 0x0f:
                    break
            # value not needed
            operands.append(0)
        elif b0 == ESCAPE_OP:
            pos += 2
            operands.clear()
        else:
            if b0 in operators and operands:
                captured[b0] = operands[-1]
            operands.clear()
            pos += 1
    if pos < len(data):
        logging.debug('Truncated operand at offset %d in DICT data.', pos)
    return captured


###############################################################################
# charset

def read_charset(cursor, num_glyphs):
    """Read a charset into a dict of glyph index -> SID; glyph 0 is implied."""
    charset_format = cursor.read_byte()
    sids = {}
    if charset_format == 0:
        sids.update(enumerate(cursor.read_array(be.uint16, num_glyphs - 1), 1))
    elif charset_format in _CHARSET_RANGES:
        range_struct = _CHARSET_RANGES[charset_format]
        gid = 1
        while gid < num_glyphs:
            charset_range = cursor.read_struct(range_struct)
            for sid in range(charset_range.first, charset_range.first + charset_range.n_left + 1):
                if gid >= num_glyphs:
                    break
                sids[gid] = wrap_uint16(sid)
                gid += 1
    else:
        logging.warning('Unsupported CFF charset format %d.', charset_format)
    return sids


def resolve_sid(sid, strings):
    """Get the name for a String ID."""
    if sid < len(CFF_STANDARD_STRINGS):
        return CFF_STANDARD_STRINGS[sid]
    index = sid - len(CFF_STANDARD_STRINGS)
    if index < len(strings):
        return strings[index].decode('ascii', 'replace')
    return f'glyph{sid}'
