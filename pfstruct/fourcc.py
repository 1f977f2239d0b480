'''
Four character codes.

On disk a fourcc is four ASCII bytes, read by the format as a little-endian
``uint32``: ``b'MODL'`` is stored as ``4d 4f 44 4c`` and compares equal to
``0x4c444f4d``. Everywhere pfstruct expects an identifier it accepts the
integer, the four bytes or the four characters.
'''
import struct


def fourcc(value) -> int:
    '''Normalize ``value`` to the integer form of the fourcc.'''
    if isinstance(value, bool):
        raise TypeError('a fourcc cannot be a bool')

    if isinstance(value, int):
        if not 0 <= value <= 0xffffffff:
            raise ValueError(f'fourcc 0x{value:x} does not fit in 32 bits')
        return value

    if isinstance(value, str):
        value = value.encode('latin1')

    if isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value)
        if len(value) != 4:
            raise ValueError(f'a fourcc must be 4 bytes long, got {value!r}')
        return struct.unpack('<I', value)[0]

    raise TypeError(f"'{value.__class__.__name__}' cannot be used as a fourcc")


def fourcc_to_bytes(value) -> bytes:
    return struct.pack('<I', fourcc(value))


def fourcc_to_str(value) -> str:
    '''Printable rendition, non printable bytes are escaped.'''
    raw = fourcc_to_bytes(value)
    if all(0x20 <= _ < 0x7f for _ in raw):
        return raw.decode('ascii')

    return ''.join(chr(_) if 0x20 <= _ < 0x7f else '\\x%02x' % _ for _ in raw)
