"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct

from .meta import FieldBase, Endianess
from .properties import Dependency
from .exceptions import (
    MagicException,
    MalformedInputException,
    UnpackException,
)


class Field(FieldBase):
    """Base class to subclass from"""
    logger = logging.getLogger(__name__)

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.BIG_ENDIAN, is_magic=False):
        super().__init__()
        self._frozen = False
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.is_magic = is_magic

        self.init()

    def init(self):
        self._value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def is_read_only(self):
        '''A field is read-only when it or any of its fathers is frozen.'''
        instance = self
        while instance is not None:
            if instance._frozen:
                return True

            instance = instance.father

        return False

    def _check_writable(self):
        if self.is_read_only():
            raise AttributeError(f"field '{self.name}' belongs to a read-only chunk")

    def _check_magic(self, value):
        if self.is_magic and value != self.default:
            self.logger.debug(f'the magic for field \'{self.name}\' doesn\'t correspond')
            raise MagicException(chain=[], msg=f'expected {self.default!r}, found {value!r}')

    def _read(self, stream, n):
        '''Read exactly n bytes; a magic that is cut short is a wrong magic.'''
        try:
            return stream.read_exact(n)
        except MalformedInputException as e:
            if self.is_magic:
                raise MagicException(chain=[], msg=e.msg) from e
            raise

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._check_writable()
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def relayout(self, offset=0):
        self.offset = offset

        return self.size

    def _update_value(self):
        '''This is used to update the binary value before packing'''
        pass

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, formatter=None, **kw):
        self.format = format
        self.formatter = formatter
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        if self.formatter:
            return self.formatter % self.value
        width = self.size * 2  # we want to be as large as possible
        formatter = '0x%%0%dx' % width
        return formatter % self.value

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def _set_value(self, value) -> None:
        try:
            struct.pack(self.get_format(), value)
        except struct.error as e:
            raise ValueError(f"value {value!r} doesn't fit field '{self.name}' with format '{self.format}': {e}")

        super()._set_value(value)

    def unpack(self, stream):
        raw = self._read(stream, self.size)
        value = struct.unpack(self.get_format(), raw)[0]
        self._check_magic(value)

        self._value = value


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be fixed or a Dependency on another field: in the latter
    case assigning a value writes its length back where the Dependency points."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self._length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    @property
    def length(self):
        if isinstance(self._length, Dependency):
            if self.father is None:
                return len(self.value)
            return self._length.resolve(self)

        return self._length

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'' if isinstance(self._length, Dependency) else b'\x00' * self._length

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        """The StringField has the size as a parameter and we must follow that indication
        unless it's a Dependency, in that case we are going to write back the length where necessary."""
        if not isinstance(value, (bytes, bytearray)):
            raise ValueError(f"field '{self.name}' accepts only binary strings, not {value.__class__.__name__}")

        self._check_writable()

        length = len(value)
        if isinstance(self._length, Dependency):
            if self.father is not None:
                self._length.resolve_and_set(self, length)
        elif length != self._length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self._length} bytes)')

        super()._set_value(bytes(value))

    def _get_raw(self):
        return self.value

    def unpack(self, stream):
        value = self._read(stream, self.length)
        self._check_magic(value)

        self._value = value


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    The elements are unpacked one after the other until the stream is exhausted:
    a stream ending exactly at the end of an element is fine, a stream with some
    bytes left but not enough for another element is not.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, **kw):
        self.field_cls = field_cls

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default) if self.default else []

    def _set_value(self, value):
        value = list(value)
        for element in value:
            element.father = self

        super()._set_value(value)

    def _get_raw(self):
        return b''.join(element.raw for element in self.value)

    def _get_size(self):
        return sum(element.size for element in self.value)

    def _update_value(self):
        for element in self.value:
            element._update_value()

    def relayout(self, offset=0):
        super().relayout(offset=offset)
        size = 0
        for element in self.value:
            size += element.relayout(offset=offset + size)

        return size

    def instance_element(self):
        return self.field_cls(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        self._value = []

        while not stream.at_end():
            idx = len(self._value)
            self.logger.debug('unpacking element #%d of \'%s\' at offset %d' % (idx, self.name, stream.tell()))
            element = self.instance_element()

            try:
                element.unpack(stream)
            except UnpackException as e:
                e.chain.append(str(idx))
                raise

            self._value.append(element)

    def append(self, element):
        if not isinstance(element, self.field_cls):
            raise ValueError(f"'{self.name}' can contain only {self.field_cls.__name__}, not {element.__class__.__name__}")

        self._check_writable()

        element.father = self
        self.value.append(element)

    def pop(self, index=-1):
        self._check_writable()

        element = self.value.pop(index)
        element.father = None

        return element
