import copy
import logging
from enum import Enum, auto

from .factory import ChunkFactory
from .fourcc import fourcc


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Give each Chunk instance its own copy of a field declared in the class body."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self.field

        data = instance.__dict__

        if self.field.name not in data:
            self.logger.debug("create new field for field named '%s'", self.field.name)
            data[self.field.name] = self.field.create(father=instance)

        return data[self.field.name]

    def __set__(self, instance, value):
        data = instance.__dict__

        # a field of the same type replaces the declared one
        if isinstance(value, self.field.__class__):
            value.father = instance
            value.name = self.field.name
            data[self.field.name] = value
        # otherwise it's the value of the field
        else:
            self.__get__(instance).value = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Metadata of a Chunk class: the names of its fields, in declaration order."""

    def __init__(self):
        self.fields = []


class MetaChunk(type):
    logger = logging.getLogger(__name__)

    def __new__(cls, name, bases, attrs):
        '''Fields are moved out of the class body and replaced by descriptors,
        keeping note of the order they are declared in.'''
        fields = {_k: _v for _k, _v in attrs.items() if hasattr(_v, 'contribute_to_chunk')}
        new_attrs = {_k: _v for _k, _v in attrs.items() if _k not in fields}

        new_cls = super().__new__(cls, name, bases, new_attrs)

        new_cls._meta = Meta()

        # handle inheritance
        for parent in [_ for _ in bases if isinstance(_, MetaChunk)]:
            for obj_name in parent._meta.fields:
                if obj_name in fields or obj_name in new_cls._meta.fields:
                    continue
                setattr(new_cls, obj_name, parent.__dict__[obj_name])
                new_cls._meta.fields.append(obj_name)

        for obj_name, obj in fields.items():
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        cls.logger.debug('contribute_to_chunk() found for field \'%s\'' % name)
        cls._meta.fields.append(name)
        value.contribute_to_chunk(cls, name)


class MetaPackFile(type):
    '''Bind a PackFile class to its content type.

    The content type is declared in the class body and is read-only from then
    on; the optional "decoders" mapping of the class body is moved into the
    ChunkFactory, keyed with the content type of the class.'''

    def __new__(cls, name, bases, attrs):
        decoders = attrs.pop('decoders', {})

        if attrs.get('content_type') is not None:
            attrs['content_type'] = fourcc(attrs['content_type'])

        new_cls = super().__new__(cls, name, bases, attrs)

        if decoders and new_cls.content_type is None:
            raise TypeError(f'{name} declares decoders without a content type')

        for identifier, decoder in decoders.items():
            ChunkFactory.bind(new_cls.content_type, identifier, decoder)

        return new_cls

    def __setattr__(cls, name, value):
        if name == 'content_type':
            raise AttributeError(f'the content type of {cls.__name__} cannot be changed')
        super().__setattr__(name, value)
