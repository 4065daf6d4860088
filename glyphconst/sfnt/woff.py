"""
glyphconst.sfnt.woff - unwrap WOFF fonts through fontTools

(c) 2022--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import zlib
import struct
import logging
from io import BytesIO

from ..base.imports import safe_import
from ..errors import FontFormatError


WOFF_MAGIC = b'wOFF'
WOFF2_MAGIC = b'wOF2'

sfnt = safe_import('fontTools.ttLib.sfnt')
TTLibError = safe_import('fontTools.ttLib', 'TTLibError')
loaded = sfnt is not None


if not loaded:
    def check_fonttools(*args, **kwargs):
        raise FontFormatError(
            'Reading WOFF fonts requires package `fontTools`, '
            'which is not available.'
        )
else:
    def check_fonttools(*args, **kwargs):
        pass


def unwrap_woff(instream):
    """Convert a WOFF 1.0 stream to a seekable stream holding a plain sfnt."""
    check_fonttools()
    try:
        reader = sfnt.SFNTReader(instream, checkChecksums=0)
        tags = sorted(reader.keys())
        outstream = BytesIO()
        writer = sfnt.SFNTWriter(outstream, len(tags), reader.sfntVersion)
        for tag in tags:
            writer[tag] = reader[tag]
        writer.close()
    except (TTLibError, AssertionError, struct.error, zlib.error) as e:
        raise FontFormatError(f'Could not read WOFF file: {e}') from e
    logging.debug('Unwrapped WOFF font with %d tables', len(tags))
    outstream.seek(0)
    return outstream
