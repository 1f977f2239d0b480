import struct

import pytest

from pfstruct.core import Chunk
from pfstruct.exceptions import ChunkUnpackException
from pfstruct.fields import StructField, StringField, ArrayField
from pfstruct.properties import Dependency
from pfstruct.streams import ByteSource


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = StringField(0x10)
        c = StructField('I', default=0xdeadbeef)

    dummy = Dummy()

    assert dummy.a.value == 0xbad
    assert dummy.a.father == dummy
    assert dummy.size == 0x18

    data = b'\xad\x0b\x00\x00' + b'A' * 0x10 + b'\xef\xbe\xad\xde'
    dummy = Dummy(data)

    assert dummy.a.value == 0xbad
    assert dummy.b.value == b'A' * 0x10
    assert dummy.c.value == 0xdeadbeef

    assert dummy.layout == {
        'a': (0, 4),
        'b': (4, 0x10),
        'c': (0x14, 4),
    }


def test_chunk_fields_are_per_instance():
    class Dummy(Chunk):
        a = StructField('I')

    first = Dummy(b'\x01\x00\x00\x00')
    second = Dummy(b'\x02\x00\x00\x00')

    assert first.a is not second.a
    assert (first.a.value, second.a.value) == (1, 2)


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'))

    example = Example(b'\x05\x00\x00\x00kebab and more')

    assert example.sz.value == 5
    assert example.data.value == b'kebab'
    assert example.size == 9


def test_nested_chunk():
    class Point(Chunk):
        x = StructField('f')
        y = StructField('f')

    class Polygon(Chunk):
        n = StructField('H')
        points = ArrayField(Point(), n=Dependency('.n'))

    data = struct.pack('<H', 3) + struct.pack('<6f', 0, 0, 1, 0, 0, 1)
    polygon = Polygon(data)

    assert len(polygon.points) == 3
    assert [(_.x.value, _.y.value) for _ in polygon.points] == [(0, 0), (1, 0), (0, 1)]
    assert polygon.points[1].offset == 10


def test_inheritance():
    class Base(Chunk):
        magic = StructField('I')

    class Derived(Base):
        extra = StructField('H')

    derived = Derived(b'\x01\x00\x00\x00\x02\x00')

    assert derived.get_ordered_fields_name() == ['magic', 'extra']
    assert derived.magic.value == 1
    assert derived.extra.value == 2


def test_unpack_error_chain():
    class Inner(Chunk):
        a = StructField('I')
        b = StructField('I')

    class Outer(Chunk):
        head = StructField('H')
        inner = Inner()

    with pytest.raises(ChunkUnpackException) as e:
        Outer(b'\x00\x00\x01\x00\x00\x00')

    assert e.value.chain == ['b', 'inner']


def test_chunk_from_source():
    class Dummy(Chunk):
        a = StructField('H')

    source = ByteSource(b'\x00\x00\x07\x00')
    dummy = Dummy(source.view(2, 2))

    assert dummy.a.value == 7
