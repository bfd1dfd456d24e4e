'''
# PackFile

Chunk based container used to store game assets. The file starts with a fixed
header followed by the chunk table, a sequence of chunks each one prefixed by
its own header:

  .------------------------------.
  | file header (12 bytes)       |  magic 'PF', content type
  | chunk header 1 (16 bytes)    |  identifier, next chunk offset, version
  | payload 1                    |
  | chunk header 2               |
  | payload 2                    |
    ...
  '------------------------------'

The offset to the next chunk is counted from the end of the field holding it,
not from the start of the chunk header.

The whole file is kept in memory as an immutable buffer: copies of a PackFile
share it and reassigning one of them replaces its buffer without touching the
others.
'''
import logging
import os
from typing import Iterator, List, Optional

from .. import fields
from ..core import Layout
from ..enum import Compliant
from ..streams import Stream
from ..exceptions import (
    InvalidFormatException,
    MagicException,
    ContentTypeException,
    MalformedChunkException,
)
from .fcc import FourCC, fourcc, to_string
from .factory import Record, ChunkFactory, factory as default_factory


class FileHeader(Layout):
    magic           = fields.StringField(2, default=b'PF', is_magic=True)
    descriptor_type = fields.StructField('H')
    zero            = fields.StructField('H')
    header_size     = fields.StructField('H')
    content_type    = fields.StructField('I', enum=FourCC)


class ChunkHeader(Layout):
    magic             = fields.StructField('I', enum=FourCC)
    next_chunk_offset = fields.StructField('I')
    version           = fields.StructField('H')
    header_size       = fields.StructField('H')
    descriptor_offset = fields.StructField('I')

    @property
    def span(self) -> int:
        '''Size of the chunk, header included: the offset to the next chunk
        is relative to the end of its own field.'''
        field = self.get_field('next_chunk_offset')
        return self.next_chunk_offset + field.offset + field.size


class ChunkView(object):
    '''Payload of a chunk, borrowed from the buffer of the PackFile.

    The data is a read-only memoryview: call bytes() on the view to own a copy.'''

    def __init__(self, header: ChunkHeader, buffer, offset: int, size: int):
        self.identifier = int(header.magic)
        self.version = header.version
        self.header_size = header.header_size
        self.descriptor_offset = header.descriptor_offset
        self.header_offset = header.offset
        self.offset = offset
        self.size = size
        self.data = memoryview(buffer)[offset:offset + size]

    def __repr__(self):
        return '<%s(%s, offset=0x%x, size=%d, version=%d)>' % (
            self.__class__.__name__, to_string(self.identifier), self.offset, self.size, self.version)

    def __len__(self):
        return self.size

    def __bytes__(self):
        return self.data.tobytes()


class PackFile(object):
    '''Opens and handles a PackFile.

    The expected content type is fixed per class by the attribute "file_type":
    use one of the subclasses (like MaterialPackFile) or PackFile.for_type().'''
    file_type: Optional[int] = None

    _types = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.file_type is not None:
            cls.file_type = fourcc(cls.file_type)
            PackFile._types.setdefault(cls.file_type, cls)

    @classmethod
    def for_type(cls, file_type) -> type:
        '''Return the PackFile class handling the given content type.'''
        file_type = fourcc(file_type)
        if file_type not in PackFile._types:
            # __init_subclass__ takes care of caching it
            type('PackFile%s' % to_string(file_type), (PackFile,), {'file_type': file_type})

        return PackFile._types[file_type]

    def __init__(self, source=None, size=None, compliant=Compliant.NONE, factory: ChunkFactory = None):
        if self.file_type is None:
            raise TypeError(f'{self.__class__.__name__} has no file_type: use a subclass or PackFile.for_type()')

        self.logger = logging.getLogger(__name__)
        self.compliant = compliant
        self.factory = factory if factory is not None else default_factory
        self._data = b''
        self._header: Optional[FileHeader] = None

        if source is None:
            return

        if isinstance(source, (str, os.PathLike)):
            self.load(source)
        else:
            self.assign(source, size=size)

    def __repr__(self):
        return '<%s(%s, size=%d)>' % (self.__class__.__name__, to_string(self.file_type), len(self))

    def __copy__(self):
        other = self.__class__.__new__(self.__class__)
        other.__dict__.update(self.__dict__)
        return other

    def __deepcopy__(self, memo):
        # the buffer is immutable, so also a deep copy shares it
        return self.__copy__()

    def __len__(self):
        return len(self._data)

    def __bool__(self):
        return self._header is not None

    def __contains__(self, identifier):
        return self.find_chunk(identifier) is not None

    @property
    def header(self) -> Optional[FileHeader]:
        return self._header

    @property
    def raw(self) -> bytes:
        return self._data

    def load(self, path):
        '''Loads this packfile's data from the given file.'''
        self.logger.debug('loading \'%s\' as %s' % (path, to_string(self.file_type)))
        self.assign(Stream(path).read_all())

    def assign(self, data, size=None):
        '''Assigns this PackFile the contents of the given data, after having
        checked it is a PackFile of the expected content type.

        On failure the previous content is retained.'''
        if isinstance(data, PackFile):
            return self._share(data)

        if isinstance(data, (str, os.PathLike)):
            raise TypeError("assign() takes bytes-like data, use load() for paths")

        data = Stream(data).read_all()

        if size is not None:
            if size < 0 or size > len(data):
                raise InvalidFormatException(
                    chain=['size'], msg=f'size {size} is not valid for {len(data)} bytes of data')
            data = data[:size]

        if not FileHeader.fits(data):
            raise InvalidFormatException(
                chain=['header'], msg=f'{len(data)} bytes are not enough for the file header')

        header = FileHeader(data)

        if not header.validate():
            raise MagicException(chain=['header', 'magic'], msg=f'bad magic {header.magic!r}')

        if header.content_type != self.file_type:
            raise ContentTypeException(
                chain=['header', 'content_type'],
                msg='expected content type %s, found %s' % (to_string(self.file_type), to_string(header.content_type)))

        self.logger.debug('assigned %d bytes of %s data' % (len(data), to_string(self.file_type)))

        self._data = data
        self._header = header

        return self

    def _share(self, other: 'PackFile'):
        if other.file_type != self.file_type:
            raise ContentTypeException(
                chain=['content_type'],
                msg='can\'t assign a %s PackFile to a %s one' % (to_string(other.file_type), to_string(self.file_type)))

        self._data = other._data
        self._header = other._header

        return self

    def container_type(self) -> int:
        '''The content type of the data in this PackFile, or zero if no data is loaded.'''
        return self.file_type if self._header is not None else 0

    def _malformed(self, chain, msg):
        self.logger.warning('%s: stopping the scan' % msg)
        if self.compliant & Compliant.CHUNKS:
            raise MalformedChunkException(chain=chain, msg=msg)

    def _scan(self) -> Iterator[ChunkHeader]:
        '''Walk the chunk table, yielding the header of each chunk in storage order.

        A chunk not consistent with the buffer ends the scan.'''
        if self._header is None:
            return

        data = self._data
        position = FileHeader.get_size()
        end = len(data)

        while position < end:
            if not ChunkHeader.fits(data, position):
                self.logger.debug('%d trailing bytes at offset 0x%x' % (end - position, position))
                if self.compliant & Compliant.TRAILING:
                    raise MalformedChunkException(
                        chain=['trailing'], msg=f'{end - position} trailing bytes at offset 0x{position:x}')
                break

            chunk_header = ChunkHeader(data, position)
            span = chunk_header.span
            name = to_string(chunk_header.magic)

            if position + span > end:
                self._malformed([name, 'next_chunk_offset'],
                                'chunk %s at offset 0x%x spans %d bytes past the end of the data' % (
                                    name, position, position + span - end))
                break

            if chunk_header.header_size > span:
                self._malformed([name, 'header_size'],
                                'chunk %s at offset 0x%x has header size %d larger than the chunk (%d bytes)' % (
                                    name, position, chunk_header.header_size, span))
                break

            payload_end = position + ChunkHeader.get_size() + span - chunk_header.header_size
            if payload_end > end:
                self._malformed([name, 'header_size'],
                                'payload of chunk %s at offset 0x%x ends past the data' % (name, position))
                break

            yield chunk_header

            position += span

    def _view(self, chunk_header: ChunkHeader) -> ChunkView:
        size = chunk_header.span - chunk_header.header_size
        return ChunkView(chunk_header, self._data, chunk_header.offset + ChunkHeader.get_size(), size)

    def iter_chunks(self) -> Iterator[ChunkView]:
        for chunk_header in self._scan():
            yield self._view(chunk_header)

    def chunk_ids(self) -> List[int]:
        return [_.identifier for _ in self.iter_chunks()]

    def find_chunk(self, identifier) -> Optional[ChunkView]:
        '''Looks for a chunk with the given identifier and returns its data if
        found. This data is still owned by the PackFile.'''
        identifier = fourcc(identifier)
        for chunk_header in self._scan():
            if chunk_header.magic == identifier:
                view = self._view(chunk_header)
                self.logger.debug('found %r' % view)
                return view

        self.logger.debug('chunk %s not found' % to_string(identifier))

        return None

    def chunk(self, identifier) -> Optional[Record]:
        '''Looks for a chunk with the given identifier and returns the record
        built from its data by the factory, or None if the chunk is absent or no
        record is registered for it.'''
        identifier = fourcc(identifier)
        if self.factory.get(self.file_type, identifier) is None:
            self.logger.warning('no record registered for chunk %s of %s' % (
                to_string(identifier), to_string(self.file_type)))
            return None

        view = self.find_chunk(identifier)
        if view is None:
            return None

        return self.factory.create(self.file_type, identifier, bytes(view), view.size, version=view.version)


# FourCC names, in alphabetic order
class AmatPackFile(PackFile):
    file_type = FourCC.AMAT


class ModlPackFile(PackFile):
    file_type = FourCC.MODL


# Descriptive names, in alphabetic order
MaterialPackFile = AmatPackFile
ModelPackFile = ModlPackFile
