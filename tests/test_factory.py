import pytest

from pfstruct.pf.factory import ChunkFactory, Record
from pfstruct.pf.fcc import FourCC


def test_record_owns_data():
    data = bytearray(b'\x01\x02\x03\x04\x05')
    record = Record(data, 4, version=2)

    data[0] = 0xff

    assert record.data == b'\x01\x02\x03\x04'
    assert record.size == 4
    assert record.version == 2


def test_record_unpack():
    class Dummy(Record):
        def unpack(self, stream):
            self.a, self.b = stream.readlist('uintle:16, uintle:16')

    record = Dummy(b'\xad\x0b\xfe\xca', 4)

    assert record.a == 0xbad
    assert record.b == 0xcafe


def test_register():
    factory = ChunkFactory()

    @factory.register(FourCC.AMAT, b'GRMT')
    class Dummy(Record):
        pass

    assert factory.get(FourCC.AMAT, FourCC.GRMT) is Dummy
    assert factory.get('AMAT', 'GRMT') is Dummy
    assert (FourCC.AMAT, FourCC.GRMT) in factory
    assert len(factory) == 1

    # the same chunk identifier is free for other content types
    assert factory.get(FourCC.MODL, FourCC.GRMT) is None

    with pytest.raises(ValueError):
        factory.register(FourCC.AMAT, FourCC.GRMT)(Record)

    factory.unregister(FourCC.AMAT, FourCC.GRMT)
    assert factory.get(FourCC.AMAT, FourCC.GRMT) is None


def test_create():
    factory = ChunkFactory()
    factory.register(FourCC.MODL, FourCC.GEOM)(Record)

    record = factory.create(FourCC.MODL, FourCC.GEOM, b'geometry', 8, version=5)

    assert isinstance(record, Record)
    assert record.data == b'geometry'
    assert record.version == 5

    with pytest.raises(KeyError):
        factory.create(FourCC.MODL, FourCC.SKEL, b'', 0)
