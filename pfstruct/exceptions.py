class PFStructException(Exception):
    '''Base class for every error raised by pfstruct.

    It takes a single argument that represents the chain of the fields
    that caused the exception, outermost last.
    '''

    def __init__(self, chain=None, message=None):
        self.chain = chain if chain is not None else []
        self.message = message
        super().__init__(*([message] if message else []))

    def __str__(self):
        msg = self.message or self.__class__.__name__
        if self.chain:
            return '%s (at %s)' % (msg, '.'.join(reversed(self.chain)))
        return msg


class UnpackException(PFStructException):
    pass


class MagicException(PFStructException):
    pass


class ChunkUnpackException(PFStructException):
    pass


class MalformedInput(UnpackException):
    '''The buffer is absent or shorter than the outer header.'''
    pass


class BadMagic(MagicException):
    pass


class TypeMismatch(PFStructException):
    '''The declared content type is not the one the container expects.'''
    pass


class MalformedChunkFraming(UnpackException):
    '''The length fields of a chunk header are inconsistent: the walk cannot
    advance safely past it.'''
    pass


class ChunkNotFound(PFStructException):
    pass


class NotLoaded(PFStructException):
    pass


class UnknownChunk(PFStructException, KeyError):
    '''No decoder is bound to the (content type, chunk identifier) pair.'''

    def __str__(self):
        return PFStructException.__str__(self)


class DuplicateDecoder(PFStructException):
    pass
