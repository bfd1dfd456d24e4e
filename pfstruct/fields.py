"""
A Field is the "fundamental" datatype from the format point of view: something
directly unpackable from a buffer at a given offset, with a size known in advance.

Fields are declared as class attributes of a Layout; the metaclass assigns to each
of them its offset inside the packed structure.
"""
import logging
import struct

from .meta import FieldBase, Endianess
from .exceptions import UnpackException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, default=None, offset=None, endianess=Endianess.LITTLE_ENDIAN, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.is_magic = is_magic

    def __repr__(self):
        return '<%s(name=%s, offset=%s, size=%d)>' % (self.__class__.__name__, self.name, self.offset, self.size)

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _check_bounds(self, buffer, offset):
        if offset < 0 or offset + self.size > len(buffer):
            self.logger.debug('field %s of size %d does not fit at offset %d (buffer is %d bytes)' % (
                self.name, self.size, offset, len(buffer)))
            raise UnpackException(chain=[self.name])

    def unpack_from(self, buffer, offset=0):
        raise NotImplementedError('you need to implement this in the subclass')

    def is_valid(self, value):
        '''Magic fields must hold their default value'''
        return not self.is_magic or value == self.default


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.

    The "enum" argument takes some subclass of enum.Enum so to have directly a
    representation of the integer value of the field itself; values not in the enum
    are returned as plain integers.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            self.logger.debug(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def unpack_from(self, buffer, offset=0):
        self._check_bounds(buffer, offset)

        try:
            value = struct.unpack_from(self.get_format(), buffer, offset)[0]
        except struct.error as e:
            self.logger.error(e)
            raise UnpackException(chain=[self.name]) from e

        if self.enum:
            value = self._unpack_enum(value)

        return value


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n or len(kw['default'])

        super().__init__(**kw)

    def __len__(self):
        return self.length

    def _get_size(self):
        return self.length

    def unpack_from(self, buffer, offset=0):
        self._check_bounds(buffer, offset)

        return bytes(buffer[offset:offset + self.length])
