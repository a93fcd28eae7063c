class PNGmeException(Exception):
    '''Base class to extend in order to throw exception in pngme.

    It takes as first argument the chain of the layers that caused the
    exception, innermost first, so that 'chunks.2.crc' is stored as
    ['crc', '2', 'chunks'].
    '''

    def __init__(self, chain=None, msg=None):
        self.chain = chain if chain is not None else []
        self.msg = msg
        super().__init__(msg)

    @property
    def path(self):
        return '.'.join(reversed(self.chain))

    def __str__(self):
        msg = self.msg or self.__class__.__name__
        if not self.chain:
            return msg

        return f'{self.path}: {msg}'


class UnpackException(PNGmeException):
    pass


class MalformedInputException(UnpackException):
    '''The data ends before a field or a declared length is satisfied.'''
    pass


class MagicException(UnpackException):
    pass


class ChecksumException(UnpackException):

    def __init__(self, chain=None, expected=None, found=None):
        self.expected = expected
        self.found = found
        super().__init__(chain=chain, msg=f'crc is 0x{found:08x} but the data says 0x{expected:08x}')


class InvalidFormatException(PNGmeException):
    pass


class NotFoundException(PNGmeException):
    pass


class EncodingException(PNGmeException):
    pass
