class PFStructException(Exception):
    '''Base class to extend in order to throw exception in pfstruct.

    It takes a single argument that represents the chain of the layer that
    caused the exception.
    '''

    def __init__(self, chain=None, msg=None):
        self.chain = chain if chain is not None else []
        super().__init__(msg or '.'.join(str(_) for _ in self.chain))


class UnpackException(PFStructException):
    pass


class InvalidFormatException(PFStructException):
    '''The data is not a PackFile of the expected kind.'''
    pass


class MagicException(InvalidFormatException):
    pass


class ContentTypeException(InvalidFormatException):
    pass


class MalformedChunkException(PFStructException):
    '''An entry of the chunk table is not consistent with the buffer.'''
    pass


class IOException(PFStructException):
    '''The source of the data could not be read.'''
    pass
