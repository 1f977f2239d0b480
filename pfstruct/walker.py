'''
Sequential walk over the chunks of a PF container.

There is no index in the format: the only way to find a chunk is to start
right after the outer header and jump from a chunk to the next one using the
size written in each chunk header.
'''
import logging
from collections import namedtuple
from typing import Iterator, Optional, Tuple

from .exceptions import MalformedChunkFraming
from .fourcc import fourcc, fourcc_to_str
from .headers import ChunkHeader, FILE_HEADER_SIZE, CHUNK_HEADER_SIZE
from .streams import as_stream


logger = logging.getLogger(__name__)


ChunkEntry = namedtuple('ChunkEntry', ['offset', 'header', 'payload_offset', 'payload_length'])
ChunkEntry.__doc__ = '''A chunk found by the walk: offsets are absolute in the buffer.'''


def iter_chunks(buffer, start=FILE_HEADER_SIZE) -> Iterator[ChunkEntry]:
    '''Yield the chunks of buffer in file order.

    The walk stops when less than a chunk header is left; it raises
    MalformedChunkFraming as soon as a chunk header declares sizes that
    would make the walk stall, go backwards or read past the end of buffer.
    '''
    stream = as_stream(buffer)
    end = len(stream)
    position = start

    while end - position >= CHUNK_HEADER_SIZE:
        header = ChunkHeader(stream.seek(position))
        total_size = header.total_size
        header_size = header.header_size.value

        logger.debug('chunk %s at offset 0x%x (size %d, header size %d)' % (
            fourcc_to_str(header.magic.value), position, total_size, header_size))

        if total_size < CHUNK_HEADER_SIZE or total_size < header_size:
            raise MalformedChunkFraming(
                message=f'chunk {fourcc_to_str(header.magic.value)} at offset 0x{position:x} '
                        f'declares size {total_size} with a header of {header_size} bytes')

        if total_size > end - position:
            raise MalformedChunkFraming(
                message=f'chunk {fourcc_to_str(header.magic.value)} at offset 0x{position:x} '
                        f'declares size {total_size} but only {end - position} bytes are left')

        payload_length = total_size - header_size
        if CHUNK_HEADER_SIZE + payload_length > end - position:
            raise MalformedChunkFraming(
                message=f'payload of chunk {fourcc_to_str(header.magic.value)} at offset 0x{position:x} '
                        f'runs past the end of the buffer')

        yield ChunkEntry(
            offset=position,
            header=header,
            payload_offset=position + CHUNK_HEADER_SIZE,
            payload_length=payload_length,
        )

        position += total_size


def find_chunk(buffer, identifier, start=FILE_HEADER_SIZE) -> Optional[ChunkEntry]:
    '''Return the first chunk with the given identifier or None if the walk
    ends without finding it. Framing errors are propagated.'''
    identifier = fourcc(identifier)

    for entry in iter_chunks(buffer, start=start):
        if entry.header.magic.value == identifier:
            return entry

    return None


def locate(buffer, identifier, start=FILE_HEADER_SIZE) -> Optional[Tuple[int, int]]:
    '''Return (offset, length) of the payload of the first chunk with the
    given identifier, None if it's missing or the chunks are malformed.

    The offset is absolute in buffer, not relative to the chunk: the payload
    of the first chunk after the 12 bytes header is at offset 28.'''
    try:
        entry = find_chunk(buffer, identifier, start=start)
    except MalformedChunkFraming as e:
        logger.warning('stopping the walk looking for %s: %s' % (fourcc_to_str(identifier), e))
        return None

    if entry is None:
        return None

    return entry.payload_offset, entry.payload_length
