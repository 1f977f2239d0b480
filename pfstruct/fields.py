"""
A Field is "fundamental" datatype from the format point of view, something
directly unpackable from a stream without knowing anything about the fields
around it.
"""
import logging
import struct
from enum import Enum

from .enum import Compliant
from .fourcc import fourcc, fourcc_to_str
from .meta import FieldBase, Endianess
from .properties import Dependency
from .exceptions import UnpackException, MagicException, ChunkUnpackException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def is_compliant(self, level):
        '''Tell if this field, or the fields it inherits the compliance from,
        requires the given level.'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def resolve(self, attribute):
        '''Return attribute or, if it is a Dependency, its value with
        respect to this field.'''
        if isinstance(attribute, Dependency):
            return attribute.resolve(self)

        return attribute

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes, in little endian unless told otherwise.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=0, equals_to=None, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default if equals_to is None else equals_to, **kw)

    def _get_encoder(self):
        return repr if isinstance(self.value, bytes) else hex

    def __repr__(self):
        if not self.enum or not isinstance(self.value, Enum):
            return '<%s(%s)>' % (self.__class__.__name__, self._get_encoder()(self.value))

        return f'<{self.__class__.__name__}({self.value!r})>'

    def __str__(self):
        if self.enum and isinstance(self.value, Enum):
            return self.value.name
        width = self.size * 2
        formatter = '0x%%0%dx' % width
        return formatter % self.value

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _unpack_struct(self, raw: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            self.logger.error(e)
            exc = MagicException if self.is_compliant(Compliant.MAGIC) else UnpackException
            raise exc(chain=[]) from e

        return unpacked_value

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError as e:
            if self.is_compliant(Compliant.ENUM):
                raise UnpackException(chain=[], message=f'{value:#x} is not a valid {self.enum.__name__}') from e

            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def _unpack(self, raw):
        value = self._unpack_struct(raw)
        if self.enum:
            value = self._unpack_enum(value)

        if self.is_magic and value != self.default:
            self.logger.warning('the magic doesn\'t correspond')
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(chain=[])

        return value

    def unpack(self, stream):
        self.value = self._unpack(stream.read(self.size))


class FourCCField(StructField):
    """A four character code stored as a little endian uint32.

    The value is the integer, the default can be given as four bytes."""

    def __init__(self, default=0, **kw):
        kw.pop('endianess', None)
        super().__init__('I', default=fourcc(default), endianess=Endianess.LITTLE_ENDIAN, **kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({fourcc_to_str(self.value)!r})>'

    def __str__(self):
        return fourcc_to_str(self.value)


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be an integer or a Dependency on another field."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        if self.default:
            return self.default

        return b'\x00' * self.length if isinstance(self.length, int) else b''

    def _get_size(self):
        return len(self.value)

    def unpack(self, stream):
        self.value = stream.read(self.resolve(self.length))

        if self.is_magic and self.value != self.default:
            self.logger.warning('the magic doesn\'t correspond')
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(chain=[])


class ArrayField(Field):
    '''Unpack an array of fields.

    You can indicate an explicit number of elements via the parameter named "n"
    (an integer or a Dependency) or you can indicate with a callable returning True
    which element is the terminator for the list via the parameter named "canary".
    Without both the array takes elements until the stream is exhausted.
    '''

    def __init__(self, field, n=None, canary=None, **kw):
        if n is not None and not isinstance(n, (Dependency, int)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self.field = field
        self._n = n
        self._canary = canary

        kw.setdefault('default', [])

        super().__init__(**kw)

    def value_from_default(self):
        return list(self.default)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def _get_size(self):
        return sum(_.size for _ in self.value)

    def instance_element(self):
        return self.field.create(father=self)  # pass the father so that we don't lose the hierarchy

    def _is_done(self, stream, n, element):
        if n is not None:
            return len(self.value) >= n
        if self._canary:
            return element is not None and self._canary(element)

        return stream.remaining() == 0

    def unpack(self, stream):
        self.value = []
        n = self.resolve(self._n)
        element = None

        while not self._is_done(stream, n, element):
            element = self.instance_element()
            element.offset = stream.tell()
            try:
                element.unpack(stream)
            except (UnpackException, ChunkUnpackException) as e:
                chain = e.chain
                chain.append('[%d]' % len(self.value))
                raise ChunkUnpackException(chain=chain, message=e.message) from e

            self.value.append(element)


class PaddingField(Field):
    '''Takes as much stream as possible'''

    def init(self):
        self.value = b''

    def _get_size(self):
        return len(self.value)

    def unpack(self, stream):
        self.value = stream.read_all()
