from ... import fields
from .types import ChunkType


class ChunkTypeField(fields.Field):
    '''The four bytes of the type of a chunk, represented as a ChunkType.

    Assigning a str goes through the validation of ChunkType.from_str(),
    while unpacking accepts whatever four bytes are in the stream.'''

    def __init__(self, **kw):
        kw.setdefault('default', ChunkType(b'\x00' * 4))
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value})>'

    def _set_value(self, value):
        if isinstance(value, str):
            value = ChunkType.from_str(value)
        elif isinstance(value, (bytes, bytearray)):
            value = ChunkType.from_bytes(value)
        elif not isinstance(value, ChunkType):
            raise ValueError(f"field '{self.name}' accepts only ChunkType, str or bytes, not {value.__class__.__name__}")

        super()._set_value(value)

    def _get_size(self):
        return 4

    def _get_raw(self):
        return self.value.bytes()

    def unpack(self, stream):
        self._value = ChunkType.from_bytes(self._read(stream, self.size))
