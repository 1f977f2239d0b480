'''
# PF container headers

A PF file starts with a fixed 12 bytes header followed by a sequence of
chunks, each one starting with a 16 bytes header; everything is little endian.

    Outer header                      Chunk header
    0x00 magic            'PF'        0x00 magic              fourcc
    0x02 descriptor_type  uint16      0x04 next_chunk_offset  uint32
    0x04 reserved         uint16      0x08 version            uint16
    0x06 header_size      uint16      0x0a header_size        uint16
    0x08 content_type     fourcc      0x0c descriptor_offset  uint32

next_chunk_offset counts the bytes from the end of the field itself to the
end of the chunk, so the total size of a chunk is next_chunk_offset plus the
8 bytes of magic and next_chunk_offset.
'''
from .core import Chunk
from . import fields


PF_MAGIC = b'PF'


class FileHeader(Chunk):
    magic           = fields.StringField(2, default=PF_MAGIC, is_magic=True)
    descriptor_type = fields.StructField('H')
    reserved        = fields.StructField('H')
    header_size     = fields.StructField('H')
    content_type    = fields.FourCCField()


class ChunkHeader(Chunk):
    magic             = fields.FourCCField()
    next_chunk_offset = fields.StructField('I')
    version           = fields.StructField('H')
    header_size       = fields.StructField('H')
    descriptor_offset = fields.StructField('I')

    @property
    def total_size(self) -> int:
        return self.magic.size + self.next_chunk_offset.size + self.next_chunk_offset.value


FILE_HEADER_SIZE = FileHeader().size
CHUNK_HEADER_SIZE = ChunkHeader().size
