"""
Core module for the declarative description of a binary structure.

"""
from typing import Tuple, List, Dict

from .fields import Field
from .enum import Compliant
from .meta import MetaChunk
from .streams import as_stream
from .exceptions import (
    ChunkUnpackException,
    UnpackException,
    MagicException,
)
from .properties import get_root_from_chunk


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk is
    an ordered sequence of fields (and of other Chunks) laid out one after
    the other.

    Passing a source to the constructor unpacks the chunk from it: a source
    can be a path, bytes-like data, a ByteSource or a ChunkView, so that any
    Chunk subclass can be used directly as a decoder of a chunk payload.

        class Vertex(Chunk):
            x = fields.StructField('f')
            y = fields.StructField('f')

        vertex = Vertex(b'\\x00\\x00\\x80\\x3f\\x00\\x00\\x00\\x40')
    """

    def __init__(self, source=None, **kwargs):
        super().__init__(**kwargs)

        if source is not None:
            self.logger.debug('unpacking \'%s\' from %r' % (self.__class__.__name__, source))
            self.unpack(as_stream(source))

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, str(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    @property
    def value(self):
        return self

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    def _get_size(self):
        return sum(field.size for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        return {name: (field.offset, field.size) for name, field in self.get_fields()}

    def unpack(self, stream):
        '''Read each field in order from the actual position of the stream.

        Errors coming from a field are re-raised as ChunkUnpackException with
        the name of the field appended to the chain, so that the caller can
        tell which part of the structure was broken.
        '''
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, stream.tell()))

            offset = stream.tell()

            try:
                field.unpack(stream)
            except (UnpackException, ChunkUnpackException) as e:
                chain = e.chain if isinstance(e, ChunkUnpackException) else []
                chain.append(field_name)
                raise ChunkUnpackException(chain=chain, message=e.message) from e
            except MagicException as e:
                e.chain.append(field_name)
                raise
            field.offset = offset

        if hasattr(self, 'validate'):
            ret = self.validate()
            if not ret:
                self.logger.warning(f'validation for \'{self.__class__.__name__}\' failed')
                if self.is_compliant(Compliant.MAGIC):
                    raise MagicException(chain=[])
