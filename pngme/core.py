"""
Core module for the abstraction of a file format

"""
import logging
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import UnpackException


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks.

    Passing raw bytes to the constructor unpacks them, passing keyword arguments
    named after the fields sets their values. A subclass with read_only set to
    True cannot be modified once built.
    """
    logger = logging.getLogger(__name__)
    read_only = False

    def __init__(self, raw=None, **kwargs):
        values = {_: kwargs.pop(_) for _ in self.get_ordered_fields_name() if _ in kwargs}

        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if raw is not None:
            if values:
                raise ValueError(f"you can't unpack '{self.__class__.__name__}' and set its fields at the same time")

            self.logger.debug('unpacking \'%s\' from %d bytes' % (self.__class__.__name__, len(raw)))
            self.unpack(Stream(raw))
        else:
            for field_name, value in values.items():
                setattr(self, field_name, value)

            self.update()
            self.relayout()

        self._frozen = self.read_only

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented

        return self.value == other.value

    __hash__ = None

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self) -> Dict[str, object]:
        return {name: field.value for name, field in self.get_fields()}

    def _set_value(self, value) -> None:
        for field_name, field_value in value.items():
            if field_name not in self._meta.fields:
                raise AttributeError(f"'{self.__class__.__name__}' has no field named '{field_name}'")
            setattr(self, field_name, field_value)

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    def _get_raw(self):
        return b''.join(field.raw for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def update(self):
        '''Give each field the chance to recalculate values depending on other fields.'''
        for _, field in self.get_fields():
            field._update_value()

    _update_value = update

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets.

        In practice it's like packing() but it's only interested in the sizes
        of the chunks.'''
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            self.logger.debug('relayouting %s.%s' % (self.__class__.__name__, field_name))
            size += field_instance.relayout(offset=offset + size)

        return size

    def pack(self):
        '''Encode the chunk: it implies updating the derived values and relayouting.'''
        self.update()
        self.relayout()

        return self.raw

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read in order and each one records the offset it was found at;
        when a field fails its name is appended to the chain of the exception so that
        the caller knows where the data went wrong.
        '''
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, stream.tell()))

            field.offset = stream.tell()

            try:
                field.unpack(stream)
            except UnpackException as e:
                e.chain.append(field_name)
                raise
