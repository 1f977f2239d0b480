import struct

import pytest

from pfstruct.fourcc import fourcc


def pf_header(content_type, magic=b'PF', descriptor_type=1, header_size=12):
    return magic + struct.pack('<HHHI', descriptor_type, 0, header_size, fourcc(content_type))


def pf_chunk(identifier, payload, version=0, header_size=16, descriptor_offset=0, next_chunk_offset=None):
    '''Chunk with the given payload; next_chunk_offset is computed unless
    indicated, counting from the end of the field to the end of the chunk.'''
    if next_chunk_offset is None:
        next_chunk_offset = 16 + len(payload) - 8
    return struct.pack(
        '<IIHHI',
        fourcc(identifier),
        next_chunk_offset,
        version,
        header_size,
        descriptor_offset,
    ) + payload


def pf_file(content_type, chunks, **kwargs):
    return pf_header(content_type, **kwargs) + b''.join(pf_chunk(_id, _payload) for _id, _payload in chunks)


@pytest.fixture
def build_header():
    return pf_header


@pytest.fixture
def build_chunk():
    return pf_chunk


@pytest.fixture
def build_file():
    return pf_file


@pytest.fixture
def model_data():
    return pf_file(b'MODL', [
        (b'ABCD', b'hello'),
        (b'GEOM', struct.pack('<I', 2) + struct.pack('<2f', 1.0, 2.0) + struct.pack('<2f', 3.0, 4.0)),
        (b'ABCD', b'other'),
    ])
