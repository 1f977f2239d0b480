'''
# PF containers

A PackFile is bound, once for all, to the content type written in the outer
header of the files it accepts; subclass it declaring the fourcc and the
decoders of its chunks:

    class ModelPackFile(PackFile):
        content_type = b'MODL'
        decoders = {
            b'GEOM': Geometry,
        }

    model = ModelPackFile('some.modl')
    if model.is_loaded:
        geometry = model.typed_chunk(b'GEOM')

The raw bytes are kept in a ByteSource that is never written: copies of a
container share it and keep it when the original loads something else.
'''
import logging
import os
from collections import namedtuple
from typing import Iterator, Optional, Tuple

from .enum import Absent
from .exceptions import (
    PFStructException,
    MalformedInput,
    BadMagic,
    TypeMismatch,
    MalformedChunkFraming,
    ChunkNotFound,
    NotLoaded,
)
from .factory import ChunkFactory
from .fourcc import fourcc, fourcc_to_str
from .headers import FileHeader, ChunkHeader, PF_MAGIC, FILE_HEADER_SIZE
from .meta import MetaPackFile
from .streams import ByteSource, ChunkView, read_file
from .walker import iter_chunks, find_chunk, locate


logger = logging.getLogger(__name__)


def validate_header(data, expected) -> FileHeader:
    '''Decode the outer header of data checking that it belongs to a PF
    container with the expected content type.

    The checks are done in order: size, magic and content type; the other
    fields are not checked.'''
    if data is None or len(data) == 0:
        raise MalformedInput(message='no data')

    if len(data) < FILE_HEADER_SIZE:
        raise MalformedInput(message=f'{len(data)} bytes are not enough for a header of {FILE_HEADER_SIZE}')

    raw = data.data if isinstance(data, (ByteSource, ChunkView)) else memoryview(data)
    header = FileHeader(raw[:FILE_HEADER_SIZE])

    if header.magic.value != PF_MAGIC:
        raise BadMagic(message=f'magic is {header.magic.value!r} instead of {PF_MAGIC!r}')

    if header.content_type.value != fourcc(expected):
        raise TypeMismatch(message='content type is %s instead of %s' % (
            fourcc_to_str(header.content_type.value), fourcc_to_str(expected)))

    return header


_State = namedtuple('_State', ['source', 'header'])

_EMPTY = _State(ByteSource(), None)


class PackFile(object, metaclass=MetaPackFile):
    '''Container of chunks for a specific content type.

    The constructor accepts a path, some bytes-like data, a ByteSource or
    another PackFile of the same class to share the data with.'''
    content_type = None
    absent = Absent.NONE

    def __init__(self, source=None):
        if self.content_type is None:
            raise TypeError(f"{self.__class__.__name__} doesn't declare a content type")

        self.logger = logging.getLogger(__name__)
        self._state = _EMPTY
        self.last_error = None

        if source is None:
            return

        if isinstance(source, PackFile):
            self._share(source)
        elif isinstance(source, (str, os.PathLike)):
            self.load(source)
        else:
            self.assign(source)

    def __setattr__(self, name, value):
        if name == 'content_type':
            raise AttributeError(f'the content type of {self.__class__.__name__} cannot be changed')
        super().__setattr__(name, value)

    def __repr__(self):
        return '<%s(%s, %s)>' % (
            self.__class__.__name__,
            fourcc_to_str(self.content_type),
            'size=%d' % self.size if self.is_loaded else 'empty',
        )

    def _share(self, other: "PackFile"):
        if not isinstance(other, self.__class__):
            raise TypeError(f'cannot share data of a {other.__class__.__name__} with a {self.__class__.__name__}')
        self._state = other._state

    def copy(self) -> "PackFile":
        '''A new container sharing the same bytes.'''
        return self.__class__(self)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    @classmethod
    def validate(cls, data) -> FileHeader:
        return validate_header(data, cls.content_type)

    def load(self, path) -> bool:
        '''Load the container from the file at path.

        It returns False, leaving the container as it was, if the file can't
        be read or it's not a valid container.'''
        try:
            data = read_file(path)
        except OSError as e:
            self.logger.warning('cannot read \'%s\': %s' % (path, e))
            self.last_error = e
            return False

        return self.assign(data)

    def assign(self, data) -> bool:
        '''Replace the content of the container with data.

        Nothing changes if data is not a valid container of this type.'''
        try:
            header = self.validate(data)
        except PFStructException as e:
            self.logger.warning('rejecting data for %s: %s' % (self.__class__.__name__, e))
            self.last_error = e
            return False

        source = data if isinstance(data, ByteSource) else ByteSource(data)

        # a single store, the readers see either the old or the new state
        self._state = _State(source, header)
        self.last_error = None

        self.logger.debug('assigned %d bytes to %r' % (len(source), self))

        return True

    @property
    def is_loaded(self) -> bool:
        return self._state.header is not None

    @property
    def type(self) -> int:
        '''The content type if some data is loaded, zero otherwise.'''
        return self.content_type if self.is_loaded else 0

    @property
    def header(self) -> Optional[FileHeader]:
        return self._state.header

    @property
    def source(self) -> ByteSource:
        return self._state.source

    @property
    def size(self) -> int:
        return len(self._state.source)

    def chunk(self, identifier) -> Optional[ChunkView]:
        '''Return the payload of the first chunk with the given identifier or
        None if there is no such chunk (or the chunks are malformed).

        The view borrows the bytes of the container, it stays valid even if
        the container is reassigned.'''
        state = self._state
        if state.header is None:
            return None

        location = locate(state.source, identifier)
        if location is None:
            return None

        return ChunkView(state.source, *location)

    locate_chunk = chunk

    def require_chunk(self, identifier) -> ChunkView:
        '''Like chunk() but raising instead of returning None.'''
        state = self._state
        if state.header is None:
            raise NotLoaded(message=f'{self.__class__.__name__} has no data')

        entry = find_chunk(state.source, identifier)
        if entry is not None:
            return ChunkView(state.source, entry.payload_offset, entry.payload_length)

        raise ChunkNotFound(message=f'no chunk {fourcc_to_str(identifier)} in {self!r}')

    def chunks(self) -> Iterator[Tuple[ChunkHeader, ChunkView]]:
        '''Iterate over the well formed chunks in file order.'''
        state = self._state
        if state.header is None:
            return

        try:
            for entry in iter_chunks(state.source):
                yield entry.header, ChunkView(state.source, entry.payload_offset, entry.payload_length)
        except MalformedChunkFraming as e:
            self.logger.warning('stopping the walk of %r: %s' % (self, e))

    def identifiers(self):
        return [header.magic.value for header, _ in self.chunks()]

    def __contains__(self, identifier):
        return self.chunk(identifier) is not None

    def typed_chunk(self, identifier, absent: Absent = None):
        '''Decode the payload of the chunk with the decoder bound to the
        content type of this container and identifier.

        If the chunk is missing the result depends on absent (by default the
        policy of the class): None for Absent.NONE, the decoder applied to an
        empty view for Absent.EMPTY.

        A payload the decoder cannot unpack is reported as None too.'''
        decoder = ChunkFactory.get(self.content_type, identifier)

        view = self.chunk(identifier)

        if view is None:
            policy = absent if absent is not None else self.absent
            if policy is Absent.NONE:
                return None

            view = ChunkView.empty()

        try:
            return decoder(view)
        except PFStructException as e:
            self.logger.warning('cannot decode chunk %s of %r: %s' % (fourcc_to_str(identifier), self, e))
            return None
