"""
Core module for the abstraction of a packed binary structure

"""
import logging
from typing import Dict, List, Tuple

from .fields import Field
from .meta import MetaLayout
from .exceptions import UnpackException


class Layout(metaclass=MetaLayout):
    """
    Together with Field is the main class that defines a format: a Layout is a
    sequence of fields packed one after the other without padding.

    An instance is a view over a buffer at a given offset: nothing is copied, the
    fields are decoded from the buffer when accessed, so the view lives as long as
    the buffer it refers to.

        class Example(Layout):
            magic = fields.StringField(2, default=b'EX', is_magic=True)
            size  = fields.StructField('I')

        example = Example(data, offset=0x10)
        example.size
    """

    def __init__(self, buffer, offset=0):
        self.logger = logging.getLogger(__name__)
        self.buffer = buffer
        self.offset = offset

        if not self.fits(buffer, offset):
            raise UnpackException(
                chain=[self.__class__.__name__],
                msg='%s needs %d bytes at offset %d but the buffer is %d bytes' % (
                    self.__class__.__name__, self.get_size(), offset, len(buffer)),
            )

    @classmethod
    def get_size(cls) -> int:
        return cls._meta.size

    @classmethod
    def get_ordered_fields_name(cls) -> List[str]:
        return cls._meta.fields

    @classmethod
    def get_field(cls, name) -> Field:
        if name not in cls._meta.fields:
            raise AttributeError(f"{cls.__name__} has no field named '{name}'")

        return getattr(cls, name)

    @classmethod
    def offset_of(cls, name) -> int:
        '''The offset of the field with respect to the start of the structure.'''
        return cls.get_field(name).offset

    @classmethod
    def fits(cls, buffer, offset=0) -> bool:
        return 0 <= offset and offset + cls.get_size() <= len(buffer)

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, value) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name in self.get_ordered_fields_name():
            field = self.get_field(name)
            result[name] = (self.offset + field.offset, field.size)

        return result

    @property
    def raw(self) -> bytes:
        return bytes(self.buffer[self.offset:self.offset + self.get_size()])

    def validate(self) -> bool:
        for name, value in self.get_fields():
            if not self.get_field(name).is_valid(value):
                self.logger.warning(f'magic for field \'{name}\' failed')
                return False

        return True

    def __repr__(self):
        msg = []
        for field_name, value in self.get_fields():
            msg.append('%s=%s' % (field_name, hex(value) if isinstance(value, int) else repr(value)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, value in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(value))
        return msg
