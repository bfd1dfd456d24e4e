import logging
from enum import Enum, auto


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Wrapper around field access of a Layout related class."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        # accessed from the class we want the declaration itself
        if instance is None:
            return self.field

        return self.field.unpack_from(instance.buffer, instance.offset + self.field.offset)

    def __set__(self, instance, value):
        raise AttributeError(f"field '{self.field.name}' of {instance.__class__.__name__} is read-only")


class FieldBase(object):

    def contribute_to_layout(self, cls, name, offset):
        self.offset = offset
        setattr(cls, name, FieldDescriptor(self, name))


class Meta(object):
    """Class containing metadata about the layout"""

    def __init__(self):
        self.fields = []
        self.size = 0


class MetaLayout(type):

    def __new__(cls, names, bases, attrs):
        '''Collect the fields in the order they are declared and pack them
        one after the other, without padding.'''
        declared = []
        new_attrs = {}
        for obj_name, obj in attrs.items():
            if isinstance(obj, FieldBase):
                declared.append((obj_name, obj))
            else:
                new_attrs[obj_name] = obj

        new_cls = super(MetaLayout, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()

        # handle inheritance
        parents = [_ for _ in bases if isinstance(_, MetaLayout)]
        for parent in parents:
            new_cls._meta.fields.extend(parent._meta.fields)
            new_cls._meta.size += parent._meta.size

        for obj_name, obj in declared:
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        if name in cls._meta.fields:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        logging.getLogger(__name__).debug('adding field \'%s\' to %s at offset %d' % (name, cls.__name__, cls._meta.size))
        value.contribute_to_layout(cls, name, cls._meta.size)
        cls._meta.fields.append(name)
        cls._meta.size += value.size
