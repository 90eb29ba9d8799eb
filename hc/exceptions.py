# hc/exceptions.py


class HuffmanError(Exception):
    """Base class for everything the codec and the wire layer raise."""


class TransportError(HuffmanError):
    """The connection broke, timed out or ended in the middle of a frame."""


class CodecError(HuffmanError):
    """A received frame could not be decoded."""


class InvalidCodeTable(CodecError):
    pass


class MalformedBitstream(CodecError):
    pass
