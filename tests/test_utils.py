import pytest

from pngme.exceptions import (
    EncodingException,
    InvalidFormatException,
    MagicException,
    NotFoundException,
)
from pngme.images.png import PNG_SIGNATURE, PNGChunk, PNGFile
from pngme.images.png.utils import (
    encode_message,
    decode_message,
    remove_message,
    describe_chunks,
)


def test_encode_decode(png_data):
    data = encode_message(png_data, 'ruSt', 'this is a secret')

    assert data.startswith(png_data)
    assert decode_message(data, 'ruSt') == 'this is a secret'


def test_encode_into_nothing():
    data = encode_message(b'', 'ruSt', 'hello')

    assert data == PNG_SIGNATURE + PNGChunk(type='ruSt', data=b'hello').pack()


def test_encode_unicode_message():
    data = encode_message(PNG_SIGNATURE, 'ruSt', 'ciao 🍕')

    assert PNGFile(data).chunk_by_type('ruSt').data.value == 'ciao 🍕'.encode('utf-8')
    assert decode_message(data, 'ruSt') == 'ciao 🍕'


def test_encode_invalid_type(png_data):
    with pytest.raises(InvalidFormatException):
        encode_message(png_data, 'ru5t', 'hello')


def test_encode_not_a_png():
    with pytest.raises(MagicException):
        encode_message(b'GIF89a', 'ruSt', 'hello')


def test_decode_missing(png_data):
    with pytest.raises(NotFoundException):
        decode_message(png_data, 'ruSt')


def test_decode_binary():
    data = PNG_SIGNATURE + PNGChunk(type='ruSt', data=b'\xff\xff').pack()

    with pytest.raises(EncodingException):
        decode_message(data, 'ruSt')


def test_remove(png_data):
    data = encode_message(png_data, 'ruSt', 'this is a secret')

    data, chunk = remove_message(data, 'ruSt')

    assert data == png_data
    assert chunk.data.value == b'this is a secret'

    with pytest.raises(NotFoundException):
        remove_message(data, 'ruSt')


def test_describe_chunks():
    data = encode_message(PNG_SIGNATURE, 'ruSt', 'hello')
    data = encode_message(data, 'IEND', '')

    lines = describe_chunks(data)

    assert len(lines) == 2
    assert lines[0].startswith('[00] 0x00000008 ruSt apRs length=5 crc=')
    assert lines[1] == '[01] 0x00000019 IEND CPRS length=0 crc=ae426082'


def test_encode_message_not_utf8(png_data):
    # what a non UTF-8 command line argument looks like on POSIX
    with pytest.raises(EncodingException):
        encode_message(png_data, 'ruSt', 'a\udcffb')
