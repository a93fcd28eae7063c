'''
The chunk type is a sequence of four bytes restricted to the ASCII letters.

Each letter carries a property via its case (bit 5 of the byte):

 1. ancillary bit (first byte): uppercase means critical
 2. private bit (second byte): uppercase means public
 3. reserved bit (third byte): must be uppercase in files conforming to this version of PNG
 4. safe-to-copy bit (fourth byte): lowercase means safe to copy

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
from ...exceptions import InvalidFormatException


class ChunkType(object):
    '''Immutable value for the type of a chunk.

    Building it from bytes never fails (whatever is in a file is accepted),
    building it from a string is allowed only for four ASCII letters.'''
    __slots__ = ('_code',)

    def __init__(self, code):
        if not isinstance(code, (bytes, bytearray, memoryview)):
            raise ValueError(f'a chunk type is built from bytes, not {code.__class__.__name__}')

        code = bytes(code)
        if len(code) != 4:
            raise ValueError(f'a chunk type is 4 bytes long, not {len(code)}')

        self._code = code

    @classmethod
    def from_bytes(cls, code):
        return cls(code)

    @classmethod
    def from_str(cls, text):
        if not isinstance(text, str) or len(text) != 4 or not (text.isascii() and text.isalpha()):
            raise InvalidFormatException(msg=f'{text!r} is not a valid chunk type: it must be 4 ASCII letters')

        return cls(text.encode('ascii'))

    def bytes(self):
        return self._code

    def _is_upper(self, index):
        return self._code[index:index + 1].isupper()

    def is_critical(self):
        return self._is_upper(0)

    def is_public(self):
        return self._is_upper(1)

    def is_reserved_bit_valid(self):
        return self._is_upper(2)

    def is_safe_to_copy(self):
        return self._code[3:4].islower()

    def is_valid(self):
        return self._code.isalpha() and self.is_reserved_bit_valid()

    def __str__(self):
        return self._code.decode('ascii', errors='backslashreplace')

    def __repr__(self):
        return f'{self.__class__.__name__}({str(self)!r})'

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._code == other._code

    def __hash__(self):
        return hash(self._code)

    # immutable, so a copy is the value itself
    def __deepcopy__(self, memo):
        return self
