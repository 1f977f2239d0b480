import pytest

from pfstruct.exceptions import UnpackException
from pfstruct.streams import ByteSource, ChunkView, Stream, read_file


def test_bytesource_is_readonly():
    data = bytearray(b'abcdef')
    source = ByteSource(data)

    # the source has its own copy
    data[0] = ord('z')
    assert source.tobytes() == b'abcdef'

    with pytest.raises(TypeError):
        source.data[0] = 0


def test_chunkview():
    source = ByteSource(b'0123456789')
    view = source.view(2, 5)

    assert len(view) == 5
    assert view.tobytes() == b'23456'
    assert view == b'23456'
    assert view.source is source

    with pytest.raises(TypeError):
        view.data[0] = 0

    with pytest.raises(ValueError):
        source.view(8, 5)

    with pytest.raises(ValueError):
        source.view(-1, 2)


def test_chunkview_empty():
    view = ChunkView.empty()

    assert len(view) == 0
    assert not view
    assert view.tobytes() == b''


def test_chunkview_bits():
    view = ByteSource(b'\x00\xa5').view(1, 1)

    bits = view.bits()

    assert len(bits) == 8
    assert bits[0:4].uint == 0xa
    assert bits[4:8].uint == 0x5


def test_stream():
    stream = Stream(b'abcdef')

    assert stream.read(2) == b'ab'
    assert stream.tell() == 2
    assert stream.remaining() == 4

    assert stream.read_all() == b'cdef'
    assert stream.seek(2).tell() == 2

    with pytest.raises(UnpackException):
        stream.read(5)

    with pytest.raises(ValueError):
        Stream(1234)


def test_stream_from_path(tmp_path):
    path = tmp_path / 'data.bin'
    path.write_bytes(b'\x01\x02\x03')

    assert read_file(str(path)) == b'\x01\x02\x03'
    assert Stream(str(path)).read_all() == b'\x01\x02\x03'


def test_bytesource_from_view():
    source = ByteSource(b'0123456789')
    copied = ByteSource(source.view(3, 4))

    assert copied.tobytes() == b'3456'
    assert len(copied) == 4
