from enum import Enum, auto

import pytest

from pfstruct.enum import Compliant
from pfstruct.exceptions import UnpackException, MagicException
from pfstruct.fields import StructField, StringField, FourCCField, ArrayField, PaddingField
from pfstruct.meta import Endianess
from pfstruct.streams import Stream


def test_structfield_unpack():
    """Check that the integers are read little endian unless told otherwise."""
    field = StructField('I')

    assert field.size == 4
    assert field.value == 0

    stream = Stream(b'\xfe\xca\x00\x00\x00\x00\xca\xfe')
    field.unpack(stream)

    assert field.value == 0xcafe
    assert stream.tell() == 4

    field = StructField('I', endianess=Endianess.BIG_ENDIAN)
    field.unpack(stream)

    assert field.value == 0xcafe


def test_structfield_short_stream():
    field = StructField('I')

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x01\x02'))


def test_structfield_enum():
    class DummyEnum(Enum):
        NONE = 0
        FIRST = auto()
        SECOND = auto()

    field = StructField('I', enum=DummyEnum, compliant=Compliant.ENUM)

    assert field.value == DummyEnum.NONE

    field.unpack(Stream(b'\x02\x00\x00\x00'))

    assert field.value == DummyEnum.SECOND

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x04\x00\x00\x00'))

    # not compliant: the raw value is kept
    field = StructField('I', enum=DummyEnum)
    field.unpack(Stream(b'\x04\x00\x00\x00'))

    assert field.value == 4


def test_structfield_magic():
    field = StructField('H', default=0xcafe, is_magic=True, compliant=Compliant.MAGIC)

    field.unpack(Stream(b'\xfe\xca'))
    assert field.value == 0xcafe

    with pytest.raises(MagicException):
        field.unpack(Stream(b'\xca\xfe'))


def test_fourccfield():
    field = FourCCField(default=b'MODL')

    assert field.size == 4
    assert field.value == 0x4c444f4d
    assert str(field) == 'MODL'

    field.unpack(Stream(b'GEOM'))

    assert str(field) == 'GEOM'
    assert repr(field) == "<FourCCField('GEOM')>"


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert field.value == b'\x00' * 0x10

    data = bytes(range(0x20))

    field.unpack(Stream(data))

    assert field.value == data[:0x10]
    assert len(field) == 0x10

    with pytest.raises(ValueError):
        StringField()


def test_arrayfield():
    length = 10
    array = ArrayField(StructField('I'), n=length)

    assert isinstance(array.value, list)
    assert len(array) == 0

    data = b''.join(_.to_bytes(4, 'little') for _ in range(length + 2))
    stream = Stream(data)
    array.unpack(stream)

    assert len(array) == length
    assert stream.remaining() == 8

    # check that the elements are not duplicated
    assert array[0] is not array[1]

    assert [_.value for _ in array] == list(range(length))
    assert array[0].offset == 0
    assert array[9].offset == 36
    assert array.size == 40


def test_arrayfield_canary():
    array = ArrayField(StructField('B'), canary=lambda x: x.value == 0)

    array.unpack(Stream(b'\x03\x02\x01\x00\x05'))

    assert [_.value for _ in array] == [3, 2, 1, 0]


def test_arrayfield_until_exhausted():
    array = ArrayField(StructField('H'))

    array.unpack(Stream(b'\x01\x00\x02\x00'))

    assert [_.value for _ in array] == [1, 2]


def test_paddingfield():
    field = PaddingField()
    stream = Stream(b'abcdef')
    stream.seek(2)

    field.unpack(stream)

    assert field.value == b'cdef'
    assert field.size == 4
