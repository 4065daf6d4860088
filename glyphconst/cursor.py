"""
glyphconst.cursor - big-endian reader over a seekable binary stream

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .base.struct import big_endian as be
from .errors import UnexpectedEndOfData


class ByteCursor:
    """Read big-endian fixed-width values from a seekable binary stream."""

    def __init__(self, stream):
        self._stream = stream

    def __repr__(self):
        return f'{type(self).__name__}({self._stream!r}, at={self.tell()})'

    def tell(self):
        """Current absolute position."""
        return self._stream.tell()

    def seek(self, position):
        """Move to absolute position."""
        self._stream.seek(position, 0)

    def skip(self, count):
        """Move forward by `count` bytes."""
        self._stream.seek(count, 1)

    def read_bytes(self, count):
        """Read exactly `count` bytes."""
        if count <= 0:
            return b''
        position = self.tell()
        data = self._stream.read(count)
        if len(data) < count:
            raise UnexpectedEndOfData(
                f'Expected {count} bytes at offset {position}, '
                f'found {len(data)}.'
            )
        return data

    def read_byte(self):
        return self.read_bytes(1)[0]

    def read_u16(self):
        return self.read_struct(be.uint16)

    def read_u32(self):
        return self.read_struct(be.uint32)

    def read_struct(self, struct_type):
        """Read a fixed-size structure or scalar at the current position."""
        return struct_type.from_bytes(self.read_bytes(struct_type.size))

    def read_array(self, element_type, count):
        """Read `count` consecutive elements as a tuple."""
        if count <= 0:
            return ()
        return self.read_struct(element_type.array(count))
