'''
Registry of the record types that can be built out of a chunk.

The same chunk identifier can be used by different kinds of PackFile with a
different meaning, so a record type is selected by the pair
(content type, chunk identifier):

    @factory.register(FourCC.AMAT, FourCC.GRMT)
    class MaterialRecord(Record):
        def unpack(self, stream):
            self.flags, self.texture_count = stream.readlist('uintle:32, uintle:8')
'''
import logging
from typing import Dict, Optional, Tuple, Type

from bitstring import ConstBitStream

from .fcc import fourcc, to_string


class Record(object):
    '''Structured form of the payload of a chunk.

    A record owns its data: it never refers to the buffer of the PackFile it
    was extracted from.'''

    def __init__(self, data: bytes, size: int, version: int = 0):
        self.logger = logging.getLogger(__name__)
        self.data = bytes(data[:size])
        self.size = len(self.data)
        self.version = version

        self.unpack(self.stream())

    def __repr__(self):
        return '<%s(size=%d, version=%d)>' % (self.__class__.__name__, self.size, self.version)

    def stream(self) -> ConstBitStream:
        return ConstBitStream(bytes=self.data)

    def unpack(self, stream: ConstBitStream):
        '''Override to decode the fields of the record.'''
        pass


class ChunkFactory(object):

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._registry: Dict[Tuple[int, int], Type[Record]] = {}

    def __contains__(self, key):
        file_type, chunk_id = key
        return (fourcc(file_type), fourcc(chunk_id)) in self._registry

    def __len__(self):
        return len(self._registry)

    def register(self, file_type, chunk_id):
        '''Class decorator adding a record type to the registry.'''
        key = (fourcc(file_type), fourcc(chunk_id))

        def _register(record_cls: Type[Record]) -> Type[Record]:
            if key in self._registry:
                raise ValueError('chunk %s of %s is already handled by %s' % (
                    to_string(key[1]), to_string(key[0]), self._registry[key].__name__))

            self.logger.debug('registering %s for chunk %s of %s' % (
                record_cls.__name__, to_string(key[1]), to_string(key[0])))
            self._registry[key] = record_cls

            return record_cls

        return _register

    def unregister(self, file_type, chunk_id):
        del self._registry[(fourcc(file_type), fourcc(chunk_id))]

    def get(self, file_type, chunk_id) -> Optional[Type[Record]]:
        return self._registry.get((fourcc(file_type), fourcc(chunk_id)))

    def create(self, file_type, chunk_id, data: bytes, size: int, version: int = 0) -> Record:
        record_cls = self.get(file_type, chunk_id)
        if record_cls is None:
            raise KeyError('no record registered for chunk %s of %s' % (to_string(fourcc(chunk_id)), to_string(fourcc(file_type))))

        return record_cls(data, size, version=version)


# the default registry used by the PackFiles
factory = ChunkFactory()
