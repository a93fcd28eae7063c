"""
# pngme: hide messages into PNG files.

A PNG file is a signature followed by a list of chunks, each one made of

 1. length: 4 bytes big-endian, the size of the data
 2. type: 4 ASCII letters, their case encodes some properties of the chunk
 3. data: length bytes
 4. crc: 4 bytes big-endian, CRC-32 of type and data

The format is described declaratively: a Chunk subclass lists its fields in
order as class attributes, and two basic operations are defined on it

 1. unpack(): reading the binary data and building a high-level
    representation of that; the fields are read one after the other
    from a stream and each one knows how many bytes it needs.

 2. pack(): encode the high-level representation into binary data,
    updating the values derived from other fields (the crc) and
    relayouting the offsets.

Unpacking fails with a specific exception from pngme.exceptions whose chain
tells which field was at fault.

    >>> from pngme.images.png import PNGFile, PNGChunk
    >>> png = PNGFile(open('image.png', 'rb').read())
    >>> png.append_chunk(PNGChunk(type='ruSt', data=b'secret'))
    >>> png.chunk_by_type('ruSt').data_as_string()
    'secret'
    >>> data = png.pack()
"""
