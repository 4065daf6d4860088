"""
glyphconst.sfnt.directory - sfnt table directory

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from collections import namedtuple

from ..base.struct import big_endian as be


# https://learn.microsoft.com/en-us/typography/opentype/spec/otff#table-directory
_OFFSET_TABLE = be.Struct(
    sfnt_version='uint32',
    num_tables='uint16',
    # binary search hints, not used
    search_range='uint16',
    entry_selector='uint16',
    range_shift='uint16',
)

_TABLE_RECORD = be.Struct(
    tag='4s',
    checksum='uint32',
    offset='uint32',
    length='uint32',
)


class TableRecord(namedtuple('TableRecord', 'offset length')):
    """Location of a table in the font file."""

    def __str__(self):
        return f'offset={self.offset} length={self.length}'


def read_table_directory(cursor):
    """Read the table directory into a dict of tag -> TableRecord."""
    cursor.seek(0)
    header = cursor.read_struct(_OFFSET_TABLE)
    logging.debug(
        'sfnt version 0x%08x with %d tables', header.sfnt_version, header.num_tables
    )
    records = cursor.read_array(_TABLE_RECORD, header.num_tables)
    tables = {}
    for record in records:
        tag = record.tag.decode('latin-1')
        if tag in tables:
            logging.debug('Duplicate table record `%s`, last one wins.', tag)
        tables[tag] = TableRecord(record.offset, record.length)
    logging.debug('Tables: %s', ', '.join(f"'{_t}'" for _t in tables))
    return tables
