'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

Here the file is handled as a signature followed by an ordered list of chunks,
without looking inside the image data: that's enough to add, find and remove
chunks of our own while keeping the file a valid PNG.
'''
from .fields import ChunkTypeField
from .types import ChunkType
from ...core import Chunk
from ...common.crc import CRCField
from ...exceptions import EncodingException, NotFoundException
from ...properties import Dependency
from ... import fields


PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class PNGHeader(Chunk):
    read_only = True

    magic = fields.StringField(8, default=PNG_SIGNATURE, is_magic=True)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    Build one with

        PNGChunk(type='ruSt', data=b'secret')

    or unpack it with PNGChunk(raw); in both cases it can't be modified afterwards.
    '''
    read_only = True

    length = fields.StructField('I')
    type   = ChunkTypeField()
    data   = fields.StringField(Dependency('.length'))
    crc    = CRCField(['type', 'data'])

    def __str__(self):
        return f'{self.type.value} length={self.length.value} crc={self.crc}'

    def is_critical(self):
        return self.type.value.is_critical()

    def is_public(self):
        return self.type.value.is_public()

    def is_reserved_bit_valid(self):
        return self.type.value.is_reserved_bit_valid()

    def is_safe_to_copy(self):
        return self.type.value.is_safe_to_copy()

    def data_as_string(self):
        try:
            return self.data.value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingException(msg=f'data of chunk \'{self.type.value}\' is not valid UTF-8: {e}') from e


class PNGFile(Chunk):
    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk)

    def __str__(self):
        return '\n'.join(str(chunk) for chunk in self.chunks)

    @staticmethod
    def _type_name(name):
        '''The type to look for can be a string, a ChunkType or its raw bytes.'''
        if isinstance(name, (bytes, bytearray)):
            name = ChunkType.from_bytes(name)

        return str(name)

    def chunks_by_type(self, name):
        name = self._type_name(name)

        return [chunk for chunk in self.chunks if str(chunk.type.value) == name]

    def chunk_by_type(self, name):
        '''Return the first chunk with the given type, None if there is not one.'''
        name = self._type_name(name)

        for chunk in self.chunks:
            if str(chunk.type.value) == name:
                return chunk

        return None

    def append_chunk(self, chunk):
        self.logger.debug('appending chunk %s' % chunk)
        self.chunks.append(chunk)

    def remove_chunk(self, name):
        '''Remove and return the first chunk with the given type.'''
        name = self._type_name(name)

        for idx, chunk in enumerate(self.chunks):
            if str(chunk.type.value) == name:
                self.logger.debug('removing chunk #%d %s' % (idx, chunk))
                return self.chunks.pop(idx)

        raise NotFoundException(msg=f'no chunk with type \'{name}\'')


__all__ = [
    'PNG_SIGNATURE',
    'ChunkType',
    'PNGHeader',
    'PNGChunk',
    'PNGFile',
]
