"""
glyphconst.base.binary - binary utilities

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


def bytes_to_int(in_bytes, byteorder='big', signed=False):
    """Convert bytes to integer."""
    return int.from_bytes(bytes(in_bytes), byteorder, signed=signed)


def wrap_uint16(value):
    """Reduce an integer modulo 2**16."""
    return value & 0xffff


def wrap_uint32(value):
    """Reduce an integer modulo 2**32."""
    return value & 0xffffffff
