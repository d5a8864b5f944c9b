"""
Exceptions raised while decoding and encoding Bencode data.
"""
__all__ = [
    "BencodeError",
    "BencodeDecodeError",
    "UnknownTagError",
    "MalformedIntegerError",
    "UnterminatedIntegerError",
    "IntegerOverflowError",
    "MalformedStringLengthError",
    "InsufficientDataError",
    "UnterminatedContainerError",
    "InvalidDictKeyError",
    "DuplicateKeyError",
    "ExhaustedStreamError",
    "TrailingDataError",
    "LimitExceededError",
    "NestingTooDeepError",
    "StringTooLongError",
    "BufferTooLargeError",
    "BencodeEncodeError",
    "UnsupportedValueKindError",
    "DuplicateKeyInvariantError",
    "ValueTooDeepError",
]


class BencodeError(Exception):
    """Base class for every Bencode error."""


# --------------------------
# Decoding
# --------------------------

class BencodeDecodeError(BencodeError, ValueError):
    """Custom exception for Bencode decoding errors."""
    def __init__(self, message: str, position: int = None):
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (at index {position})"
        super().__init__(message)


class UnknownTagError(BencodeDecodeError):
    """The byte at the cursor does not start any Bencode value."""


class MalformedIntegerError(BencodeDecodeError):
    """Bad sign, leading zero, non-digit or empty digit run in i...e."""


class UnterminatedIntegerError(MalformedIntegerError):
    """Input ended before the closing 'e' of an integer."""


class IntegerOverflowError(BencodeDecodeError, OverflowError):
    """Integer does not fit in a signed 64-bit value."""


class MalformedStringLengthError(BencodeDecodeError):
    """The length prefix of a string is not a valid decimal followed by ':'."""


class InsufficientDataError(BencodeDecodeError):
    """A string declares more bytes than the buffer has left."""


class UnterminatedContainerError(BencodeDecodeError):
    """Input ended before the closing 'e' of a list or dictionary."""


class InvalidDictKeyError(BencodeDecodeError):
    """A dictionary key is not a byte string."""


class DuplicateKeyError(BencodeDecodeError):
    """A dictionary repeats a key and the decoder is set to reject that."""


class ExhaustedStreamError(BencodeDecodeError):
    """Decode was called with nothing left in the buffer."""


class TrailingDataError(BencodeDecodeError):
    """Bytes remain after the single value that should span the buffer."""


class LimitExceededError(BencodeDecodeError):
    """Input went past one of the configured DecoderLimits."""


class NestingTooDeepError(LimitExceededError):
    pass


class StringTooLongError(LimitExceededError):
    pass


class BufferTooLargeError(LimitExceededError):
    pass


# --------------------------
# Encoding
# --------------------------

class BencodeEncodeError(BencodeError):
    """Custom exception for Bencode encoding errors."""


class UnsupportedValueKindError(BencodeEncodeError, TypeError):
    """The value is not an integer, byte string, list or dictionary."""


class DuplicateKeyInvariantError(BencodeEncodeError, ValueError):
    """Two dictionary keys map to the same bytes."""


class ValueTooDeepError(BencodeEncodeError, ValueError):
    """A value tree nests deeper than the interpreter stack allows."""
