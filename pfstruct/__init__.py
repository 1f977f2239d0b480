"""
# pfstruct: reader of PF chunk containers.

A PF container is a fixed outer header declaring the type of the content,
followed by a sequence of chunks each one tagged with a fourcc identifier.

The reading is done in three steps:

 1. the outer header is validated against the content type the container
    class is bound to (PackFile.assign() and PackFile.load());
 2. the chunks are walked in file order, without an index, to find the
    payload of a given identifier (PackFile.chunk());
 3. the payload is handed to the decoder bound in the ChunkFactory to the
    pair (content type, identifier) (PackFile.typed_chunk()).

Decoders are usually Chunk subclasses, i.e. declarative descriptions of
binary structures made of fields.
"""
from .core import Chunk
from .enum import Absent, Compliant
from .factory import ChunkFactory
from .fourcc import fourcc, fourcc_to_str
from .headers import FileHeader, ChunkHeader
from .packfile import PackFile, validate_header
from .streams import ByteSource, ChunkView
