#!/usr/bin/env python3
import sys
import os
import logging

from pfstruct.pf import PackFile, FileHeader
from pfstruct.pf.fcc import fourcc, to_string
from pfstruct.enum import Compliant
from pfstruct.streams import Stream
from pfstruct.exceptions import PFStructException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} <packfile> [chunk fourcc]

Without a chunk identifier dumps the header and the chunk table, otherwise
the hexdump of the payload of the first chunk with that identifier.''')
    sys.exit(1)


def dump_header(hdr):
    print(f'''PackFile Header:
  Magic:                             {hdr.magic.decode('latin1')}
  Descriptor type:                   {hdr.descriptor_type}
  Zero:                              {hdr.zero}
  Size of this header:               {hdr.header_size} (bytes)
  Content type:                      {to_string(hdr.content_type)}''')


def dump_chunks(pf):
    print('''Chunks:
  [Nr] Id     Offset     Size       Version  HdrSize  Descriptor''')
    for idx, view in enumerate(pf.iter_chunks()):
        print(f'''  [{idx: >2d}] {to_string(view.identifier):<6} 0x{view.offset:08x} 0x{view.size:08x} {view.version:<8d} {view.header_size:<8d} 0x{view.descriptor_offset:08x}''')


def dump_payload(view, width=16):
    for offset in range(0, view.size, width):
        line = view.data[offset:offset + width].tobytes()
        printable = ''.join(chr(_) if 0x20 <= _ < 0x7f else '.' for _ in line)
        print(f'{view.offset + offset:08x}  {line.hex(" "):<{width * 3}} {printable}')


def open_packfile(path):
    '''The content type is taken from the file itself.'''
    data = Stream(path).read_all()

    if not FileHeader.fits(data):
        raise ValueError(f'\'{path}\' is too short to be a PackFile')

    cls = PackFile.for_type(FileHeader(data).content_type)

    return cls(data, compliant=Compliant.CHUNKS if 'STRICT' in os.environ else Compliant.NONE)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    try:
        pf = open_packfile(path)
    except (PFStructException, ValueError) as e:
        logger.error(f'failed to open \'{path}\': {e}')
        sys.exit(2)

    if len(sys.argv) < 3:
        dump_header(pf.header)
        dump_chunks(pf)
        sys.exit(0)

    view = pf.find_chunk(fourcc(sys.argv[2]))
    if view is None:
        logger.error(f'chunk {sys.argv[2]} not found')
        sys.exit(1)

    print(f'{view!r}')
    dump_payload(view)
