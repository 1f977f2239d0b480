#!/usr/bin/env python3
import sys
import os
import logging

from pfstruct import PackFile, fourcc_to_str
from pfstruct.fourcc import fourcc


if 'DEBUG' in os.environ:
    logging.basicConfig()
    logger = logging.getLogger('pfstruct')
    logger.setLevel(logging.DEBUG)


def usage(progname):
    print('usage: %s <content type fourcc> <pf file>' % progname)
    sys.exit(1)


def dump_header(hdr):
    print(f'''PF Header:
  Magic:                             {hdr.magic.value.decode('latin1')}
  Descriptor type:                   {hdr.descriptor_type}
  Reserved:                          {hdr.reserved}
  Size of this header:               {hdr.header_size.value} (bytes)
  Content type:                      {hdr.content_type}''')


def dump_chunks(pf):
    print('''Chunks:
  [Nr] Magic  Offset     Size       Version  HdrSize  DescOff''')
    for idx, (header, view) in enumerate(pf.chunks()):
        print(f'''  [{idx: >2d}] {str(header.magic):<6} 0x{view.offset - header.size:08x} 0x{header.total_size:08x} {header.version.value:<8d} {header.header_size.value:<8d} 0x{header.descriptor_offset.value:08x}''')


if __name__ == '__main__':
    if len(sys.argv) < 3:
        usage(sys.argv[0])

    content_type = fourcc(sys.argv[1])
    path = sys.argv[2]

    AnyPackFile = type('AnyPackFile', (PackFile,), {'content_type': content_type})

    pf = AnyPackFile(path)

    if not pf.is_loaded:
        print(f'{path}: not a {fourcc_to_str(content_type)} PF file ({pf.last_error})')
        sys.exit(1)

    dump_header(pf.header)
    dump_chunks(pf)
