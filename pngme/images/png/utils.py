'''
Helpers to hide messages into a PNG file: they work on the whole content
of the file, taking and returning bytes, so the caller decides where the data
comes from and where it goes.
'''
import logging

from . import PNG_SIGNATURE, PNGChunk, PNGFile
from .types import ChunkType
from ...exceptions import EncodingException, NotFoundException


logger = logging.getLogger(__name__)


def encode_message(data, chunk_type, message):
    '''Append a chunk with the given type containing the message.

    An empty data is treated as a PNG without chunks at all.'''
    png = PNGFile(data or PNG_SIGNATURE)

    if isinstance(message, str):
        try:
            message = message.encode('utf-8')
        except UnicodeEncodeError as e:
            raise EncodingException(msg=f'the message can\'t be encoded as UTF-8: {e}') from e

    chunk = PNGChunk(type=ChunkType.from_str(chunk_type), data=message)
    png.append_chunk(chunk)

    logger.info(f'encoded {len(message)} bytes into chunk \'{chunk_type}\' (#{len(png.chunks) - 1})')

    return png.pack()


def decode_message(data, chunk_type):
    png = PNGFile(data)

    chunk = png.chunk_by_type(ChunkType.from_str(chunk_type))

    if chunk is None:
        raise NotFoundException(msg=f'no chunk with type \'{chunk_type}\'')

    return chunk.data_as_string()


def remove_message(data, chunk_type):
    '''Remove the first chunk with the given type, it returns the new content
    of the file and the chunk removed.'''
    png = PNGFile(data)

    chunk = png.remove_chunk(ChunkType.from_str(chunk_type))

    return png.pack(), chunk


def iter_chunks_description(data):
    png = PNGFile(data)
    png.relayout()

    for idx, chunk in enumerate(png.chunks):
        chunk_type = chunk.type.value
        flags = ''.join([
            'C' if chunk_type.is_critical() else 'a',
            'P' if chunk_type.is_public() else 'p',
            'R' if chunk_type.is_reserved_bit_valid() else 'r',
            's' if chunk_type.is_safe_to_copy() else 'S',
        ])
        yield f'[{idx:02d}] 0x{chunk.offset:08x} {str(chunk_type):<4} {flags} length={chunk.length.value} crc={chunk.crc}'


def describe_chunks(data):
    return list(iter_chunks_description(data))
