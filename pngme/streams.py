import io
import logging

from .exceptions import MalformedInputException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around an in-memory buffer to
    uniform its properties: mainly we need a read() that fails loudly
    when the data is not there.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to stream from' % self._type.__name__)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%d/%d)>' % (self.__class__.__name__, self.tell(), self.size)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    @property
    def size(self):
        return len(self.obj.getbuffer())

    def remaining(self):
        return self.size - self.tell()

    def at_end(self):
        return self.remaining() <= 0

    def read_exact(self, n):
        '''Read exactly n bytes or complain.'''
        offset = self.tell()
        data = self.obj.read(n)

        if len(data) != n:
            logger.debug('short read at offset %d: wanted %d bytes, got %d' % (offset, n, len(data)))
            raise MalformedInputException(
                chain=[],
                msg=f'expected {n} bytes at offset {offset}, only {len(data)} available')

        return data

