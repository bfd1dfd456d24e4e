import struct

import pytest


def _chunk(identifier, payload, version=1, header_size=16, descriptor_offset=0, next_chunk_offset=None):
    if next_chunk_offset is None:
        # the offset is counted from the end of its own field
        next_chunk_offset = 16 + len(payload) - 8
    return struct.pack('<4sIHHI', identifier, next_chunk_offset, version, header_size, descriptor_offset) + payload


def _packfile(content_type, chunks=(), magic=b'PF', descriptor_type=0, header_size=12):
    data = struct.pack('<2sHHH4s', magic, descriptor_type, 0, header_size, content_type)
    for chunk in chunks:
        data += chunk if isinstance(chunk, bytes) else _chunk(*chunk)
    return data


@pytest.fixture
def build_chunk():
    '''Build a chunk: build_chunk(b'GRMT', b'payload', version=1, header_size=16)'''
    return _chunk


@pytest.fixture
def build_packfile():
    '''Build the data of a PackFile: build_packfile(b'AMAT', [(b'GRMT', b'payload'), ...])'''
    return _packfile


@pytest.fixture
def material_data(build_packfile):
    return build_packfile(b'AMAT', [
        (b'GRMT', b'\x01\x02\x03\x04\x05\x06\x07\x08', 3),
        (b'DX9S', b'shader data', 12),
        (b'GRMT', b'second'),
    ])
