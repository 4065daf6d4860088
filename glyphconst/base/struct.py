"""
glyphconst.base.struct - big-endian binary structures

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import ctypes
from types import SimpleNamespace
from functools import partial


class StructError(ValueError):
    """Binary data does not fit structure."""


##############################################################################
# binary structs


# type strings
TYPES = {
    'uint8': ctypes.c_uint8,
    'uint16': ctypes.c_uint16,
    'int16': ctypes.c_int16,
    'uint32': ctypes.c_uint32,
    'int32': ctypes.c_int32,
}


def _parse_type(atype):
    """Convert struct member type specification to ctypes base type."""
    if isinstance(atype, _WrappedCType):
        return atype._ctype
    try:
        return TYPES[atype]
    except KeyError:
        pass
    if isinstance(atype, str) and atype.endswith('s'):
        # uint8 array rather than c_char, which would cut at the first NUL
        return ctypes.c_uint8 * int(atype[:-1])
    raise ValueError('Field type `{}` not understood'.format(atype))


class _WrappedCType:
    """Wrapper for ctypes type, factory for values."""

    def from_cvalue(self, cvalue):
        raise NotImplementedError

    def from_bytes(self, data, offset=0):
        """Read a value from a bytes-like object."""
        try:
            cvalue = self._ctype.from_buffer_copy(data, offset)
        except ValueError as e:
            raise StructError(e) from e
        return self.from_cvalue(cvalue)

    def array(self, count):
        return ArrayType(self, count)

    @property
    def size(self):
        return ctypes.sizeof(self._ctype)


class ScalarType(_WrappedCType):
    """Wrapper for scalar types. Scalar values come out as int."""

    def __init__(self, endian, ctype):
        if endian[:1].lower() in ('b', '>'):
            self._ctype = ctype.__ctype_be__
        elif endian[:1].lower() in ('l', '<'):
            self._ctype = ctype.__ctype_le__
        else:
            raise ValueError(f"Endianness '{endian}' not recognised.")

    def from_cvalue(self, cvalue):
        return cvalue.value

    def __call__(self, value=0):
        """Create a scalar value as bytes."""
        return bytes(self._ctype(value))


class StructValue:
    """Wrapper for ctypes Structure."""

    def __init__(self, cvalue, struct_type):
        self._cvalue = cvalue
        self._type = struct_type

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        value = getattr(self._cvalue, attr)
        if isinstance(value, ctypes.Array):
            return bytes(value)
        if isinstance(value, ctypes.Structure):
            return self._type.element_types[attr].from_cvalue(value)
        return value

    def __bytes__(self):
        return bytes(self._cvalue)

    @property
    def __dict__(self):
        return {
            _field: getattr(self, _field)
            for _field, *_ in self._cvalue._fields_
        }

    def __repr__(self):
        return type(self).__name__ + '({})'.format(
            ', '.join(
                '{}={}'.format(_fld, _val)
                for _fld, _val in vars(self).items()
            )
        )


class StructType(_WrappedCType):
    """
    Represent a structured type.

    mystruct = StructType('big', first='uint8', second='uint16')
    s = mystruct(first=1, second=2)

    assert bytes(s) == b'\1\0\2'
    assert mystruct.from_bytes(b'\1\0\2').second == 2
    """

    def __init__(self, endian, /, **description):
        """Create a structured type."""
        if endian[:1].lower() in ('b', '>'):
            parent = ctypes.BigEndianStructure
        elif endian[:1].lower() in ('l', '<'):
            parent = ctypes.LittleEndianStructure
        else:
            raise ValueError(f"Endianness '{endian}' not recognised.")

        class _CStruct(parent):
            _fields_ = tuple(
                (_field, _parse_type(_type))
                for _field, _type in description.items()
            )
            _pack_ = True
            _layout_ = 'ms'

        self._ctype = _CStruct
        self.element_types = description

    def from_cvalue(self, cvalue):
        return StructValue(cvalue, self)

    def __call__(self, **kwargs):
        """Instantiate a struct variable."""
        kwargs = {
            _k: (
                (ctypes.c_uint8 * len(_v))(*_v)
                if isinstance(_v, (bytes, bytearray)) else _v
            )
            for _k, _v in kwargs.items()
        }
        return self.from_cvalue(self._ctype(**kwargs))


class ArrayType(_WrappedCType):
    """Wrapper for ctypes array type. Array values come out as tuple."""

    def __init__(self, element_type, count):
        self.element_type = element_type
        self._ctype = element_type._ctype * count

    def from_cvalue(self, cvalue):
        return tuple(
            self.element_type.from_cvalue(_elem)
            if isinstance(_elem, ctypes.Structure) else _elem
            for _elem in cvalue
        )

    def __call__(self, *values):
        """Create an array of scalars as bytes."""
        return bytes(self._ctype(*values))


big_endian = SimpleNamespace(
    Struct=partial(StructType, '>'),
    uint8=ScalarType('>', ctypes.c_uint8),
    uint16=ScalarType('>', ctypes.c_uint16),
    int16=ScalarType('>', ctypes.c_int16),
    uint32=ScalarType('>', ctypes.c_uint32),
    int32=ScalarType('>', ctypes.c_int32),
)
