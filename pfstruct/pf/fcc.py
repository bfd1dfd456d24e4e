'''
Four-character codes.

Both the content type of a PackFile and the identifier of its chunks are four
ASCII characters stored as a little-endian 32 bits integer, so that b'AMAT' in
the file reads as the integer 0x54414d41.
'''
import struct
from enum import IntEnum


def fourcc(code) -> int:
    '''Convert a four-character code (str or bytes) into its integer value.
    Integers in the 32 bits range are returned unchanged.'''
    if isinstance(code, int):
        if not 0 <= code <= 0xffffffff:
            raise ValueError(f'a four-character code can\'t be {code}')
        return int(code)

    if isinstance(code, str):
        code = code.encode('latin1')

    if len(code) > 4:
        raise ValueError(f'a four-character code can\'t be {len(code)} characters long')

    return struct.unpack('<I', code.ljust(4, b'\x00'))[0]


def to_string(value: int) -> str:
    '''The printable form of a four-character code; trailing NULs are dropped.'''
    return struct.pack('<I', value).rstrip(b'\x00').decode('latin1')


class FourCC(IntEnum):
    '''Known codes, in alphabetic order.'''
    # content types
    AMAT = fourcc(b'AMAT')
    ASND = fourcc(b'ASND')
    MODL = fourcc(b'MODL')
    # chunk identifiers
    DX9S = fourcc(b'DX9S')
    GEOM = fourcc(b'GEOM')
    GRMT = fourcc(b'GRMT')
    PROP = fourcc(b'PROP')
    SKEL = fourcc(b'SKEL')

    def __str__(self):
        return to_string(self.value)
