import logging
import os

from bitstring import BitArray

from .exceptions import UnpackException


logger = logging.getLogger(__name__)


def read_file(path) -> bytes:
    '''Return the whole content of the file at ``path``.

    It raises OSError if the file cannot be read.'''
    logger.debug('reading \'%s\'' % path)
    with open(path, 'rb') as f:
        return f.read()


class ByteSource(object):
    '''Immutable buffer holding the raw bytes of a whole container.

    It's shared between all the containers copied from the one that created
    it and between all the views obtained from them: nobody can write into it
    and it's never replaced in place.'''

    __slots__ = ('_data', '_view')

    def __init__(self, data=b''):
        if isinstance(data, ChunkView):
            data = data.data
        # bytes() copies everything that is not already an immutable bytes
        self._data = data if type(data) is bytes else bytes(data)
        self._view = memoryview(self._data)

    def __len__(self):
        return len(self._data)

    def __bool__(self):
        return len(self._data) > 0

    def __repr__(self):
        return f'<{self.__class__.__name__}(size={len(self)})>'

    @property
    def data(self) -> memoryview:
        return self._view

    def tobytes(self) -> bytes:
        return self._data

    def view(self, offset, length) -> "ChunkView":
        return ChunkView(self, offset, length)


class ChunkView(object):
    '''Read-only (offset, length) window into a ByteSource.

    The view keeps a reference to its source so the bytes it points to stay
    alive as long as the view does.'''

    __slots__ = ('source', 'offset', 'length')

    def __init__(self, source: ByteSource, offset: int, length: int):
        if offset < 0 or length < 0 or offset + length > len(source):
            raise ValueError(
                f'view [{offset}:{offset + length}] outside of a source of size {len(source)}')
        self.source = source
        self.offset = offset
        self.length = length

    @classmethod
    def empty(cls) -> "ChunkView":
        return cls(ByteSource(), 0, 0)

    def __len__(self):
        return self.length

    def __bool__(self):
        return self.length > 0

    def __eq__(self, other):
        if isinstance(other, ChunkView):
            return self.data == other.data
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.data == other
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f'<{self.__class__.__name__}(offset=0x{self.offset:x}, length={self.length})>'

    @property
    def data(self) -> memoryview:
        return self.source.data[self.offset:self.offset + self.length]

    def tobytes(self) -> bytes:
        return self.data.tobytes()

    def bits(self) -> BitArray:
        '''Bit level reader over the payload, for the decoders that need
        to read fields not aligned to bytes.'''
        return BitArray(self.tobytes())


class Stream(object):
    '''Simple cursor over the bytes a Chunk is unpacked from: it uniforms
    paths, raw bytes, sources and views so that the fields only need
    read(), seek() and tell().'''

    def __init__(self, obj):
        self._type = type(obj)
        self.obj = obj
        self.position = 0

        init_method_name = 'init_%s' % self._type.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError(f"cannot build a {self.__class__.__name__} from '{self._type.__name__}'")

        init_method()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__}, size={len(self.data)}, position={self.position})>'

    def init_str(self):
        '''We think this is a path'''
        self.data = memoryview(read_file(self.obj))

    def init_bytes(self):
        self.data = memoryview(self.obj)

    def init_bytearray(self):
        self.data = memoryview(self.obj).toreadonly()

    def init_memoryview(self):
        self.data = self.obj.toreadonly()

    def init_ByteSource(self):
        self.data = self.obj.data

    def init_ChunkView(self):
        self.data = self.obj.data

    def __len__(self):
        return len(self.data)

    def remaining(self) -> int:
        return max(len(self.data) - self.position, 0)

    def tell(self) -> int:
        return self.position

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.position = offset

        return self

    def read(self, size) -> bytes:
        '''Read exactly size bytes or raise UnpackException.'''
        if size < 0 or size > self.remaining():
            raise UnpackException(
                message=f'asked {size} bytes at offset {self.position} but {self.remaining()} are available')
        raw = self.data[self.position:self.position + size].tobytes()
        self.position += size

        return raw

    def read_all(self) -> bytes:
        return self.read(self.remaining())


def as_stream(obj) -> Stream:
    if isinstance(obj, Stream):
        return obj
    if isinstance(obj, os.PathLike):
        obj = os.fsdecode(obj)
    return Stream(obj)
