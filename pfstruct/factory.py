'''
Binding between chunks and the decoders of their payload.

Different container types can reuse the same chunk identifier for unrelated
payloads, so a decoder is bound to the pair (content type, chunk identifier).
The bindings are made once, when the modules describing the formats are
imported, and a lookup is a plain dictionary access:

    @ChunkFactory.register(b'MODL', b'GEOM')
    class Geometry(Chunk):
        n_vertices = fields.StructField('I')
        ...

A decoder is any callable accepting a ChunkView; Chunk subclasses unpack
themselves from it.
'''
import logging
from typing import Callable, Dict, Tuple

from .exceptions import DuplicateDecoder, UnknownChunk
from .fourcc import fourcc, fourcc_to_str


logger = logging.getLogger(__name__)


class ChunkFactory(object):
    _registry: Dict[Tuple[int, int], Callable] = {}

    @classmethod
    def bind(cls, content_type, identifier, decoder):
        key = (fourcc(content_type), fourcc(identifier))

        if key in cls._registry:
            raise DuplicateDecoder(message='a decoder for %s/%s is already bound (%r)' % (
                fourcc_to_str(key[0]), fourcc_to_str(key[1]), cls._registry[key]))

        logger.debug('binding %s/%s to %r' % (fourcc_to_str(key[0]), fourcc_to_str(key[1]), decoder))
        cls._registry[key] = decoder

        return decoder

    @classmethod
    def register(cls, content_type, identifier):
        '''Decorator version of bind().'''
        def _register(decoder):
            return cls.bind(content_type, identifier, decoder)

        return _register

    @classmethod
    def unbind(cls, content_type, identifier):
        return cls._registry.pop((fourcc(content_type), fourcc(identifier)), None)

    @classmethod
    def get(cls, content_type, identifier) -> Callable:
        key = (fourcc(content_type), fourcc(identifier))
        try:
            return cls._registry[key]
        except KeyError:
            raise UnknownChunk(message='no decoder bound to %s/%s' % (
                fourcc_to_str(key[0]), fourcc_to_str(key[1]))) from None

    @classmethod
    def is_bound(cls, content_type, identifier) -> bool:
        return (fourcc(content_type), fourcc(identifier)) in cls._registry

    @classmethod
    def identifiers(cls, content_type):
        '''The chunk identifiers with a decoder for the given content type.'''
        content_type = fourcc(content_type)
        return sorted(_id for _type, _id in cls._registry if _type == content_type)
