"""
glyphconst.base - supporting functions and classes

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from . import struct
from . import binary
from .struct import StructError, big_endian
from .imports import safe_import
