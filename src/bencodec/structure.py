"""
Data structures for representing Bencoded types.

The four classes below are the only Bencode values. Instances are immutable
once built, so a decoded tree can be shared freely between readers.
"""
from types import MappingProxyType

from .errors import DuplicateKeyInvariantError, UnsupportedValueKindError

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "from_python",
    "INT64_MIN",
    "INT64_MAX",
]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("_value",)

    def __init__(self, value):
        object.__setattr__(self, "_value", value)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash((type(self).__name__, self._value))

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"

    def to_python(self):
        """Converts the value into plain int / bytes / list / dict."""
        raise NotImplementedError


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    __slots__ = ()

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("BencodeInt requires an integer.")
        if not INT64_MIN <= value <= INT64_MAX:
            raise OverflowError(f"BencodeInt {value} does not fit in a signed 64-bit integer.")
        super().__init__(value)

    def to_python(self) -> int:
        return self._value


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        super().__init__(bytes(value))

    def __len__(self):
        return len(self._value)

    def to_python(self) -> bytes:
        return self._value

    def decode(self, encoding="utf-8", errors="strict") -> str:
        return self._value.decode(encoding, errors)


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode values, not {type(item).__name__}.")
        super().__init__(tuple(value))

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __getitem__(self, index):
        return self._value[index]

    def to_python(self) -> list:
        return [item.to_python() for item in self._value]


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys are raw bytes and unique. Insertion order is kept for iteration but
    carries no meaning: equality ignores it and the encoder always writes
    keys in sorted byte order.
    """
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        items = {}
        for k, v in value.items():
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError(f"BencodeDict values must be Bencode values, not {type(v).__name__}.")
            items[bytes(k)] = v
        super().__init__(MappingProxyType(items))

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return dict(self._value) == dict(other._value)

    def __hash__(self):
        return hash((type(self).__name__, frozenset(self._value.items())))

    def __repr__(self):
        return f"BencodeDict({dict(self._value)!r})"

    @staticmethod
    def _key(key) -> bytes:
        return key.encode() if isinstance(key, str) else key

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __contains__(self, key):
        return self._key(key) in self._value

    def __getitem__(self, key):
        return self._value[self._key(key)]

    def get(self, key, default=None):
        return self._value.get(self._key(key), default)

    def keys(self):
        return self._value.keys()

    def items(self):
        return self._value.items()

    def to_python(self) -> dict:
        return {k: v.to_python() for k, v in self._value.items()}


def from_python(obj) -> BencodeType:
    """
    Builds a Bencode value tree from plain Python objects.

    int -> BencodeInt, bytes/str -> BencodeString (str as UTF-8),
    list/tuple -> BencodeList, dict -> BencodeDict (bytes or str keys).
    Bencode values are returned unchanged.
    """
    if isinstance(obj, BencodeType):
        return obj

    # bool is an int subclass but has no Bencode form
    if isinstance(obj, bool):
        raise UnsupportedValueKindError(f"Cannot bencode object of type {type(obj)}")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, str):
        return BencodeString(obj.encode())

    if isinstance(obj, (list, tuple)):
        return BencodeList([from_python(x) for x in obj])

    if isinstance(obj, dict):
        items = {}
        for key, value in obj.items():
            if isinstance(key, str):
                key = key.encode()
            elif isinstance(key, (bytes, bytearray)):
                key = bytes(key)
            else:
                raise UnsupportedValueKindError(f"Dictionary keys must be bytes or str, not {type(key)}")
            if key in items:
                raise DuplicateKeyInvariantError(f"Dictionary key {key!r} appears more than once")
            items[key] = from_python(value)
        return BencodeDict(items)

    raise UnsupportedValueKindError(f"Cannot bencode object of type {type(obj)}")
