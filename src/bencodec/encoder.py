"""
Bencode encoder for BitTorrent metainfo and tracker responses.

Output is canonical: dictionary keys are always written in ascending raw-byte
order, so equal values encode to identical bytes no matter how they were built.
"""
from .errors import DuplicateKeyInvariantError, UnsupportedValueKindError, ValueTooDeepError
from .structure import (
    INT64_MAX,
    INT64_MIN,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeType,
)

__all__ = ["encode", "encode_all", "encode_int", "encode_bytes", "encode_str", "encode_list", "encode_dict"]


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""
    chunks = []
    try:
        _encode_into(obj, chunks)
    except RecursionError as exc:
        raise ValueTooDeepError("Value nests too deeply to encode") from exc
    return b"".join(chunks)


def encode_all(values) -> bytes:
    """Encodes values back to back into one stream, the inverse of decode_all."""
    return b"".join(encode(value) for value in values)


def _encode_into(obj, out: list):
    if isinstance(obj, BencodeType):
        _encode_value(obj, out)
        return

    # bool is an int subclass but has no Bencode form
    if isinstance(obj, bool):
        raise UnsupportedValueKindError(f"Cannot bencode object of type {type(obj)}")

    if isinstance(obj, int):
        out.append(encode_int(obj))
        return

    if isinstance(obj, (bytes, bytearray, memoryview)):
        out.append(encode_bytes(bytes(obj)))
        return

    if isinstance(obj, str):
        out.append(encode_str(obj))
        return

    if isinstance(obj, (list, tuple)):
        out.append(b"l")
        for item in obj:
            _encode_into(item, out)
        out.append(b"e")
        return

    if isinstance(obj, dict):
        _encode_items(_plain_dict_items(obj), out)
        return

    raise UnsupportedValueKindError(f"Cannot bencode object of type {type(obj)}")


def _encode_value(value: BencodeType, out: list):
    if isinstance(value, BencodeInt):
        out.append(encode_int(value.value))
    elif isinstance(value, BencodeString):
        out.append(encode_bytes(value.value))
    elif isinstance(value, BencodeList):
        out.append(b"l")
        for item in value.value:
            _encode_value(item, out)
        out.append(b"e")
    elif isinstance(value, BencodeDict):
        _encode_items(value.value.items(), out)
    else:
        raise UnsupportedValueKindError(f"Cannot bencode object of type {type(value)}")


def _plain_dict_items(d: dict) -> list:
    """Returns (bytes key, value) pairs of a plain dict, checking key uniqueness."""
    items = []
    seen = set()
    for key, value in d.items():
        if isinstance(key, str):
            key = key.encode()
        elif isinstance(key, (bytes, bytearray)):
            key = bytes(key)
        else:
            raise UnsupportedValueKindError(f"Dictionary keys must be bytes or str, not {type(key)}")
        if key in seen:
            raise DuplicateKeyInvariantError(f"Dictionary key {key!r} appears more than once")
        seen.add(key)
        items.append((key, value))
    return items


def _encode_items(items, out: list):
    out.append(b"d")
    # bytes compare byte by byte, which is the order bencode requires
    for key, value in sorted(items, key=lambda kv: kv[0]):
        out.append(encode_bytes(key))
        _encode_into(value, out)
    out.append(b"e")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    if not INT64_MIN <= n <= INT64_MAX:
        raise OverflowError(f"Integer {n} does not fit in a signed 64-bit integer.")
    return b"i%de" % n


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return b"%d:%s" % (len(b), b)


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode())


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    if isinstance(lst, BencodeList):
        return encode(lst)
    return encode(list(lst))


def encode_dict(d) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    if isinstance(d, BencodeDict):
        return encode(d)
    return encode(dict(d))
