"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
import re

from .config import DEFAULT_LIMITS, DecoderLimits, DuplicateKeyPolicy
from .errors import (
    BencodeDecodeError,
    BufferTooLargeError,
    DuplicateKeyError,
    ExhaustedStreamError,
    InsufficientDataError,
    IntegerOverflowError,
    InvalidDictKeyError,
    MalformedIntegerError,
    MalformedStringLengthError,
    NestingTooDeepError,
    StringTooLongError,
    TrailingDataError,
    UnknownTagError,
    UnterminatedContainerError,
    UnterminatedIntegerError,
)
from .structure import INT64_MAX, INT64_MIN, BencodeDict, BencodeInt, BencodeList, BencodeString

__all__ = ["BencodeDecoder", "BencodeDecodeError", "decode", "decode_one", "decode_all"]

_INT_RE = re.compile(rb"(-?)([0-9]*)")
_DIGITS_RE = re.compile(rb"[0-9]*")
_INT64_DIGITS = len(str(INT64_MAX))


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Bencode value trees.

    A decoder owns its cursor: each call to decode() reads one top-level value
    and leaves the cursor right after it. After a failed decode the cursor is
    undefined and the decoder should be thrown away.
    """
    def __init__(self, data: bytes, limits: DecoderLimits = None, start: int = 0):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Bencode data must be bytes, not {type(data).__name__}")
        self.limits = limits if limits is not None else DEFAULT_LIMITS
        self.data = bytes(data)

        max_size = self.limits.max_buffer_size
        if max_size is not None and len(self.data) > max_size:
            raise BufferTooLargeError(
                f"Buffer of {len(self.data)} bytes exceeds the limit of {max_size}"
            )
        if not 0 <= start <= len(self.data):
            raise ValueError(f"Start position {start} is outside the buffer")

        self._pos = start  # cursor index
        self._depth = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def consumed(self) -> bool:
        """True once every byte of the buffer has been decoded."""
        return self._pos >= len(self.data)

    def decode(self):
        """Decodes the next top-level value from the buffer."""
        if self.consumed:
            raise ExhaustedStreamError("Nothing left to decode", self._pos)
        self._depth = 0
        try:
            return self._parse_value()
        except RecursionError as exc:
            # only reachable with max_depth=None or above the interpreter's limit
            raise NestingTooDeepError("Nesting too deep for the interpreter stack", self._pos) from exc

    def decode_all(self) -> list:
        """Decodes values until the buffer is fully consumed."""
        results = [self.decode()]
        while not self.consumed:
            results.append(self.decode())
        return results

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self):
        """Returns the byte at the cursor, or None at the end of input."""
        return self.data[self._pos:self._pos+1] or None

    def _consume(self, n=1):
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        chunk = self.data[self._pos:self._pos+n]
        self._pos += n
        return chunk

    def _enter_container(self):
        self._depth += 1
        max_depth = self.limits.max_depth
        if max_depth is not None and self._depth > max_depth:
            raise NestingTooDeepError(f"Nesting deeper than {max_depth} levels", self._pos)

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self):
        ch = self._peek()

        if ch == b'i':
            return self._parse_int()

        if ch is not None and ch.isdigit():  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == b'l':
            return self._parse_list()

        if ch == b'd':
            return self._parse_dict()

        if ch is None:
            raise ExhaustedStreamError("Unexpected end of input", self._pos)
        raise UnknownTagError(f"Invalid token {ch!r}", self._pos)

    def _parse_int(self):
        """Parses an integer from the Bencoded data."""
        start = self._pos
        self._consume(1)  # skip 'i'

        match = _INT_RE.match(self.data, self._pos)
        sign, digits = match.group(1), match.group(2)
        end = match.end()

        if end >= len(self.data):
            raise UnterminatedIntegerError("No terminating 'e' found for integer", start)
        if self.data[end:end+1] != b'e':
            raise MalformedIntegerError(f"Invalid byte {self.data[end:end+1]!r} in integer", end)
        if not digits:
            raise MalformedIntegerError("Integer has no digits", start)
        if digits[:1] == b'0' and len(digits) > 1:
            raise MalformedIntegerError("Leading zeros are not allowed in integers", start)
        if sign and digits == b'0':
            raise MalformedIntegerError("Negative zero is not allowed", start)
        if len(digits) > _INT64_DIGITS:
            raise IntegerOverflowError(f"Integer of {len(digits)} digits does not fit in 64 bits", start)

        num = int(sign + digits)
        if not INT64_MIN <= num <= INT64_MAX:
            raise IntegerOverflowError(f"Integer {num} does not fit in 64 bits", start)

        self._pos = end + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self):
        """Parses a byte string from the Bencoded data."""
        start = self._pos

        # read length until ':'
        colon = _DIGITS_RE.match(self.data, self._pos).end()
        length_bytes = self.data[self._pos:colon]

        if colon >= len(self.data):
            raise MalformedStringLengthError("No ':' found after string length", start)
        if self.data[colon:colon+1] != b':':
            raise MalformedStringLengthError(
                f"Invalid byte {self.data[colon:colon+1]!r} in string length", colon
            )
        if not length_bytes:
            raise MalformedStringLengthError("String length is empty", start)
        if length_bytes[:1] == b'0' and len(length_bytes) > 1:
            raise MalformedStringLengthError("Leading zeros are not allowed in string lengths", start)

        max_length = self.limits.max_string_length
        # no leading zeros, so more digits than a bound means a larger value
        if max_length is not None and len(length_bytes) > len(str(max_length)):
            raise StringTooLongError(
                f"String of {len(length_bytes)}-digit length exceeds the limit of {max_length}", start
            )
        if len(length_bytes) > len(str(len(self.data))):
            raise InsufficientDataError(
                f"String declares a {len(length_bytes)}-digit length, longer than the whole buffer", start
            )

        length = int(length_bytes)
        if max_length is not None and length > max_length:
            raise StringTooLongError(
                f"String of {length} bytes exceeds the limit of {max_length}", start
            )

        self._pos = colon + 1
        remaining = len(self.data) - self._pos
        if length > remaining:
            raise InsufficientDataError(
                f"String declares {length} bytes but only {remaining} remain", start
            )

        string_bytes = self._consume(length)
        return BencodeString(string_bytes)

    def _parse_list(self):
        """Parses a list from the Bencoded data."""
        start = self._pos
        self._enter_container()
        self._consume(1)  # skip 'l'
        items = []

        while self._peek() != b'e':
            if self._peek() is None:
                raise UnterminatedContainerError("No terminating 'e' found for list", start)
            items.append(self._parse_value())

        self._consume(1)  # skip 'e'
        self._depth -= 1
        return BencodeList(items)

    def _parse_dict(self):
        """Parses a dictionary from the Bencoded data."""
        start = self._pos
        self._enter_container()
        self._consume(1)  # skip 'd'
        obj = {}

        while self._peek() != b'e':
            ch = self._peek()
            if ch is None:
                raise UnterminatedContainerError("No terminating 'e' found for dictionary", start)
            # keys MUST be strings
            if not ch.isdigit():
                raise InvalidDictKeyError(f"Dictionary key must be a byte string, found {ch!r}", self._pos)

            key_pos = self._pos
            key = self._parse_string().value
            if self._peek() is None:
                raise UnterminatedContainerError(f"Dictionary key {key!r} has no value", start)

            value = self._parse_value()
            if key in obj and self.limits.duplicate_keys is DuplicateKeyPolicy.REJECT:
                raise DuplicateKeyError(f"Duplicate dictionary key {key!r}", key_pos)
            obj[key] = value

        self._consume(1)  # skip 'e'
        self._depth -= 1
        return BencodeDict(obj)


def decode(data: bytes, limits: DecoderLimits = None):
    """
    Convenience function to decode Bencoded data.

    The buffer must hold exactly one value; anything after it is an error.
    """
    decoder = BencodeDecoder(data, limits)
    result = decoder.decode()
    if not decoder.consumed:
        raise TrailingDataError(
            f"{len(decoder.data) - decoder.position} bytes left after the value", decoder.position
        )
    return result


def decode_one(data: bytes, start: int = 0, limits: DecoderLimits = None):
    """Decodes one value starting at `start`. Returns (value, next position)."""
    decoder = BencodeDecoder(data, limits, start=start)
    result = decoder.decode()
    return result, decoder.position


def decode_all(data: bytes, limits: DecoderLimits = None) -> list:
    """Decodes every value in a buffer of back-to-back Bencoded values."""
    return BencodeDecoder(data, limits).decode_all()
