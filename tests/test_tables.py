"""
glyphconst test suite
sfnt table reader tests
"""

import unittest

from glyphconst.cursor import ByteCursor
from glyphconst.errors import UnexpectedEndOfData
from glyphconst.base.struct import big_endian as be, StructError
from glyphconst.sfnt import read_table_directory
from glyphconst.sfnt.directory import TableRecord
from glyphconst.sfnt.post import read_post_names
from glyphconst.sfnt.cmap import read_cmap, subtable_priority
from glyphconst.sfnt.cff import (
    read_cff_names, read_index, skip_index, parse_dict_offsets, resolve_sid,
)

from tests.base import (
    BaseTester, build_font, build_post, build_cmap, build_cff, build_index,
    build_format_4, build_format_6, build_format_12, END_SEGMENT,
)


def _table(data):
    """Cursor and table record for a table at the start of a stream."""
    return ByteCursor(BaseTester.stream(data)), TableRecord(0, len(data))


class TestCursor(BaseTester):

    def test_read_values(self):
        """Test big-endian reads advance the position."""
        cursor = ByteCursor(self.stream(b'\x01\x02\x03\x04\x05\x06\x07'))
        self.assertEqual(cursor.read_byte(), 1)
        self.assertEqual(cursor.read_u16(), 0x0203)
        self.assertEqual(cursor.read_u32(), 0x04050607)
        self.assertEqual(cursor.tell(), 7)

    def test_seek_skip(self):
        """Test absolute and relative moves."""
        cursor = ByteCursor(self.stream(bytes(range(10))))
        cursor.seek(4)
        cursor.skip(2)
        self.assertEqual(cursor.read_byte(), 6)

    def test_read_array(self):
        """Test reading an array of signed values."""
        cursor = ByteCursor(self.stream(be.int16.array(3)(-1, 0, 300)))
        self.assertEqual(cursor.read_array(be.int16, 3), (-1, 0, 300))
        self.assertEqual(cursor.read_array(be.int16, 0), ())

    def test_read_nothing(self):
        """Test zero-length read at end of data."""
        cursor = ByteCursor(self.stream(b''))
        self.assertEqual(cursor.read_bytes(0), b'')

    def test_read_past_end(self):
        """Test short read raises with offset information."""
        cursor = ByteCursor(self.stream(b'\x01\x02\x03'))
        cursor.skip(2)
        with self.assertRaises(UnexpectedEndOfData) as cm:
            cursor.read_u16()
        self.assertIn('offset 2', str(cm.exception))

    def test_end_of_data_is_struct_error(self):
        """Test UnexpectedEndOfData can be caught as StructError."""
        cursor = ByteCursor(self.stream(b''))
        with self.assertRaises(StructError):
            cursor.read_u32()


class TestStruct(BaseTester):

    def test_named_types(self):
        """Test struct fields declared by type name."""
        record = be.Struct(tag='4s', a='uint8', b='int16', c='uint32')
        self.assertEqual(record.size, 11)
        value = record.from_bytes(b'abcd\x01\xff\xfe\x00\x00\x01\x00')
        self.assertEqual((value.tag, value.a, value.b, value.c), (b'abcd', 1, -2, 256))

    def test_unknown_type(self):
        """Test type letters are not accepted as field types."""
        with self.assertRaises(ValueError):
            be.Struct(a='H')


class TestTableDirectory(BaseTester):

    def test_directory(self):
        """Test table tags and locations."""
        data = build_font([('cmap', b'abcd'), ('post', b'efghijkl')])
        tables = read_table_directory(ByteCursor(self.stream(data)))
        self.assertEqual(list(tables), ['cmap', 'post'])
        self.assertEqual(tables['cmap'], TableRecord(44, 4))
        self.assertEqual(tables['post'], TableRecord(48, 8))
        self.assertEqual(data[48:56], b'efghijkl')

    def test_duplicate_tag(self):
        """Test last record for a tag wins."""
        data = build_font([('post', b'1234'), ('post', b'56789')])
        tables = read_table_directory(ByteCursor(self.stream(data)))
        self.assertEqual(tables, {'post': TableRecord(48, 5)})

    def test_truncated_directory(self):
        """Test table directory running past end of file."""
        data = build_font([('cmap', b'abcd'), ('post', b'efgh')])
        with self.assertRaises(UnexpectedEndOfData):
            read_table_directory(ByteCursor(self.stream(data[:30])))


class TestPost(BaseTester):

    def test_standard_and_custom_names(self):
        """Test standard Macintosh names and custom Pascal strings."""
        post = build_post((0, 3, 259, 258, 36), ('ic_fluent_add_24_regular', 'home'))
        names = read_post_names(*_table(post))
        self.assertEqual(names, {
            0: '.notdef',
            1: 'space',
            2: 'home',
            3: 'ic_fluent_add_24_regular',
            4: 'A',
        })

    def test_standard_names_only(self):
        """Test no custom names are read if no index needs them."""
        # no string data after the index array
        post = build_post((0, 1, 2))
        names = read_post_names(*_table(post))
        self.assertEqual(names, {0: '.notdef', 1: '.null', 2: 'nonmarkingreturn'})

    def test_blank_custom_name(self):
        """Test blank custom names are left out."""
        post = build_post((0, 258, 259), ('', 'star'))
        names = read_post_names(*_table(post))
        self.assertEqual(names, {0: '.notdef', 2: 'star'})

    def test_max_index_governs_count(self):
        """Test the number of custom names is set by the highest index."""
        # 260 requires three strings; trailing data is not read
        post = build_post((0, 260), ('a', 'b', 'c', 'd'))
        names = read_post_names(*_table(post))
        self.assertEqual(names, {0: '.notdef', 1: 'c'})

    def test_missing_custom_names(self):
        """Test custom names running past end of data."""
        post = build_post((0, 259), ('only',))
        with self.assertRaises(UnexpectedEndOfData):
            read_post_names(*_table(post))

    def test_version_3(self):
        """Test post table without glyph names."""
        post = build_post(version=0x00030000)
        self.assertEqual(read_post_names(*_table(post)), {})

    def test_no_glyphs(self):
        """Test version 2 table with zero glyphs."""
        self.assertEqual(read_post_names(*_table(build_post())), {})


class TestCmap(BaseTester):

    # start, end, delta, range offset
    segments = [
        # direct mapping with delta
        (0x20, 0x22, -0x1f, 0),
        # through glyphIdArray[0:3]
        (0xe700, 0xe702, 0, 6),
        # through glyphIdArray[3:5] with delta; third code out of bounds
        (0xf000, 0xf002, 5, 10),
        END_SEGMENT,
    ]
    glyph_ids = (10, 0, 12, 20, 0xfffe)

    def test_format_4(self):
        """Test format 4 segments with deltas and glyph id array."""
        cmap = build_cmap([(3, 1, build_format_4(self.segments, self.glyph_ids))])
        mapping = read_cmap(*_table(cmap))
        self.assertEqual(mapping, {
            0x20: 1, 0x21: 2, 0x22: 3,
            0xe700: 10, 0xe701: 0, 0xe702: 12,
            0xf000: 25, 0xf001: 3, 0xf002: 0,
            0xffff: 0,
        })

    def test_format_4_delta_wraps(self):
        """Test idDelta arithmetic is modulo 65536."""
        cmap = build_cmap([(3, 1, build_format_4([(0xfff0, 0xfff1, 0x20, 0)]))])
        self.assertEqual(read_cmap(*_table(cmap)), {0xfff0: 0x10, 0xfff1: 0x11})

    def test_format_12(self):
        """Test format 12 groups, skipping malformed ones."""
        cmap = build_cmap([(3, 10, build_format_12([
            (0x41, 0x43, 5),
            (0x1f600, 0x1f601, 100),
            # spans more than the Unicode range
            (0x10, 0x110010, 1),
            # end before start
            (0x50, 0x40, 1),
        ]))])
        self.assertEqual(read_cmap(*_table(cmap)), {
            0x41: 5, 0x42: 6, 0x43: 7,
            0x1f600: 100, 0x1f601: 101,
        })

    def test_format_12_group_count_past_end(self):
        """Test format 12 group count beyond the table data."""
        subtable = build_format_12([(0x41, 0x41, 1)])
        subtable = subtable[:12] + be.uint32(0xffffffff) + subtable[16:]
        cmap = build_cmap([(3, 10, subtable)])
        with self.assertRaises(UnexpectedEndOfData):
            read_cmap(*_table(cmap))

    def test_priority_order(self):
        """Test preference ranks of encoding records."""
        self.assertGreater(subtable_priority(3, 10), subtable_priority(0, 4))
        self.assertGreater(subtable_priority(0, 4), subtable_priority(3, 1))
        self.assertGreater(subtable_priority(3, 1), subtable_priority(0, 3))
        self.assertEqual(subtable_priority(1, 0), subtable_priority(0, 3))

    def test_prefers_windows_full(self):
        """Test (3,10) format 12 wins over (0,3) format 4."""
        cmap = build_cmap([
            (0, 3, build_format_4([(0x41, 0x41, 1, 0), END_SEGMENT])),
            (3, 10, build_format_12([(0x41, 0x41, 7)])),
        ])
        self.assertEqual(read_cmap(*_table(cmap)), {0x41: 7})

    def test_format_12_first(self):
        """Test any format 12 subtable is used before format 4."""
        cmap = build_cmap([
            (3, 10, build_format_4([(0x41, 0x41, 1, 0), END_SEGMENT])),
            (0, 3, build_format_12([(0x41, 0x41, 9)])),
        ])
        self.assertEqual(read_cmap(*_table(cmap)), {0x41: 9})

    def test_ties_keep_table_order(self):
        """Test equally ranked subtables are tried in table order."""
        cmap = build_cmap([
            (1, 0, build_format_12([(0x41, 0x41, 1)])),
            (1, 0, build_format_12([(0x41, 0x41, 2)])),
        ])
        self.assertEqual(read_cmap(*_table(cmap)), {0x41: 1})

    def test_unsupported_formats(self):
        """Test cmap without format 4 or 12 subtables."""
        cmap = build_cmap([(3, 1, build_format_6(0x41, (1, 2, 3)))])
        self.assertIsNone(read_cmap(*_table(cmap)))

    def test_unsupported_format_skipped(self):
        """Test a format 6 subtable of higher rank is passed over."""
        cmap = build_cmap([
            (3, 10, build_format_6(0x41, (1,))),
            (3, 1, build_format_4([(0x41, 0x41, 3, 0), END_SEGMENT])),
        ])
        self.assertEqual(read_cmap(*_table(cmap)), {0x41: 0x44, 0xffff: 0})


class TestCff(BaseTester):

    names = ['ic_fluent_home_24_regular', 'space', 'ic_fluent_add_24_filled']
    expected = {
        0: '.notdef',
        1: 'ic_fluent_home_24_regular',
        2: 'space',
        3: 'ic_fluent_add_24_filled',
    }

    def test_charset_format_0(self):
        """Test glyph names through a format 0 charset."""
        cff = build_cff(self.names, charset_format=0)
        self.assertEqual(read_cff_names(*_table(cff)), self.expected)

    def test_charset_format_1(self):
        """Test glyph names through a format 1 charset."""
        cff = build_cff(self.names, charset_format=1)
        self.assertEqual(read_cff_names(*_table(cff)), self.expected)

    def test_charset_format_2(self):
        """Test glyph names through a format 2 charset."""
        cff = build_cff(self.names, charset_format=2)
        self.assertEqual(read_cff_names(*_table(cff)), self.expected)

    def test_charset_range(self):
        """Test a single range covering several glyphs."""
        cff = build_cff(['A', 'B', 'C'], charset_format=1)
        self.assertEqual(
            read_cff_names(*_table(cff)),
            {0: '.notdef', 1: 'A', 2: 'B', 3: 'C'}
        )

    def test_predefined_charset(self):
        """Test predefined ISOAdobe charset yields only .notdef."""
        cff = build_cff(self.names, predefined_charset=True)
        self.assertEqual(read_cff_names(*_table(cff)), {0: '.notdef'})

    def test_undefined_sid(self):
        """Test SID beyond the String INDEX gets a placeholder name."""
        cff = build_cff(['x'], sids=[500])
        self.assertEqual(read_cff_names(*_table(cff)), {0: '.notdef', 1: 'glyph500'})

    def test_offset_in_table(self):
        """Test CFF table not at the start of the file."""
        cff = build_cff(self.names)
        cursor = ByteCursor(self.stream(bytes(16) + cff))
        self.assertEqual(read_cff_names(cursor, TableRecord(16, len(cff))), self.expected)

    def test_resolve_sid(self):
        """Test standard and custom string lookup."""
        strings = [b'first', b'second']
        self.assertEqual(resolve_sid(0, strings), '.notdef')
        self.assertEqual(resolve_sid(390, strings), 'Semibold')
        self.assertEqual(resolve_sid(391, strings), 'first')
        self.assertEqual(resolve_sid(392, strings), 'second')
        self.assertEqual(resolve_sid(393, strings), 'glyph393')

    def test_index(self):
        """Test reading and skipping INDEX structures."""
        data = build_index([b'ab', b'', b'cde']) + build_index([b'f']) + b'\xff'
        cursor = ByteCursor(self.stream(data))
        self.assertEqual(read_index(cursor), [b'ab', b'', b'cde'])
        skip_index(cursor)
        self.assertEqual(cursor.read_byte(), 0xff)

    def test_empty_index(self):
        """Test INDEX with zero count is two bytes long."""
        cursor = ByteCursor(self.stream(build_index([]) + b'\x01'))
        self.assertEqual(read_index(cursor), [])
        self.assertEqual(cursor.read_byte(), 1)


class TestDictOperands(BaseTester):

    def test_small_integer(self):
        """Test single-byte operands."""
        self.assertEqual(parse_dict_offsets(bytes((149, 15))), {15: 10})
        self.assertEqual(parse_dict_offsets(bytes((32, 17))), {17: -107})

    def test_two_byte_integers(self):
        """Test positive and negative two-byte operands."""
        self.assertEqual(parse_dict_offsets(bytes((247, 0, 15))), {15: 108})
        self.assertEqual(parse_dict_offsets(bytes((250, 255, 15))), {15: 1131})
        self.assertEqual(parse_dict_offsets(bytes((251, 0, 15))), {15: -108})
        self.assertEqual(parse_dict_offsets(bytes((254, 255, 15))), {15: -1131})

    def test_long_integers(self):
        """Test 3-byte and 5-byte operands."""
        self.assertEqual(parse_dict_offsets(bytes((28, 0x80, 0, 15))), {15: -32768})
        self.assertEqual(parse_dict_offsets(bytes((28, 0x12, 0x34, 15))), {15: 0x1234})
        self.assertEqual(parse_dict_offsets(bytes((29, 0, 1, 0, 0, 17))), {17: 65536})

    def test_last_operand(self):
        """Test the last operand before the operator is captured."""
        self.assertEqual(parse_dict_offsets(bytes((149, 150, 17))), {17: 11})

    def test_real_operand(self):
        """Test real number is skipped and stands in as zero."""
        self.assertEqual(parse_dict_offsets(bytes((149, 30, 0x1a, 0x5f, 15))), {15: 0})

    def test_escaped_operator(self):
        """Test two-byte operator clears the operand stack."""
        self.assertEqual(parse_dict_offsets(bytes((149, 12, 7, 15))), {})

    def test_other_operators(self):
        """Test operators not asked for are ignored."""
        self.assertEqual(parse_dict_offsets(bytes((149, 16, 150, 17))), {17: 11})

    def test_truncated_operand(self):
        """Test decoding stops at a truncated operand."""
        self.assertEqual(parse_dict_offsets(bytes((149, 17, 28, 0))), {17: 10})
        self.assertEqual(parse_dict_offsets(bytes((29, 0, 0, 15))), {})


if __name__ == '__main__':
    unittest.main()
