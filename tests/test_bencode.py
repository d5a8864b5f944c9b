import itertools

from bencodec.decoder import decode
from bencodec.encoder import encode
from bencodec.structure import BencodeInt, BencodeString, BencodeList, BencodeDict, from_python


def test_int():
    print("Testing integer decoding...")
    obj = decode(b"i23e")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeInt)
    assert obj.value == 23

    print("Testing integer encoding...")
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"i23e"


def test_int_zero_and_negative():
    assert decode(b"i0e") == BencodeInt(0)
    assert decode(b"i-42e") == BencodeInt(-42)
    assert encode(BencodeInt(0)) == b"i0e"
    assert encode(BencodeInt(-42)) == b"i-42e"


def test_int_64bit_bounds():
    assert decode(b"i9223372036854775807e").value == 2 ** 63 - 1
    assert decode(b"i-9223372036854775808e").value == -(2 ** 63)


def test_string():
    print("Testing string decoding...")
    obj = decode(b"4:spam")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"

    print("Testing string encoding...")
    assert encode(obj) == b"4:spam"


def test_empty_string():
    assert decode(b"0:") == BencodeString(b"")
    assert encode(BencodeString(b"")) == b"0:"
    assert encode(b"") == b"0:"


def test_binary_string():
    raw = bytes(range(256))
    enc = encode(BencodeString(raw))
    assert enc == b"256:" + raw
    assert decode(enc).value == raw


def test_list():
    print("Testing list decoding...")
    obj = decode(b"l4:spam4:eggse")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeList)
    assert obj == BencodeList([BencodeString(b"spam"), BencodeString(b"eggs")])
    assert encode(obj) == b"l4:spam4:eggse"


def test_empty_containers():
    assert decode(b"le") == BencodeList([])
    assert decode(b"de") == BencodeDict({})
    assert encode(decode(b"le")) == b"le"
    assert encode(decode(b"de")) == b"de"


def test_nested_containers():
    obj = decode(b"lli1eedee")
    assert obj == BencodeList([BencodeList([BencodeInt(1)]), BencodeDict({})])


def test_dict():
    print("Testing dictionary decoding & encoding...")
    obj = decode(b"d3:cow3:moo4:spam4:eggse")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeDict)
    assert obj.value[b"cow"].value == b"moo"
    assert obj[b"spam"] == BencodeString(b"eggs")
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"d3:cow3:moo4:spam4:eggse"


def test_dict_sorted_on_encode():
    built = BencodeDict({
        b"spam": BencodeString(b"eggs"),
        b"cow": BencodeString(b"moo"),
    })
    assert encode(built) == b"d3:cow3:moo4:spam4:eggse"


def test_dict_keys_sorted_by_raw_bytes():
    # uppercase sorts before lowercase, and a prefix before its extensions
    built = from_python({b"b": 1, b"B": 2, b"ab": 3, b"a": 4, b"\xff": 5, b"\x00": 6})
    assert encode(built) == b"d1:\x00i6e1:Bi2e1:ai4e2:abi3e1:bi1e1:\xffi5ee"


def test_dict_encoding_ignores_insertion_order():
    entries = [
        (b"announce", BencodeString(b"http://tracker/announce")),
        (b"comment", BencodeString(b"")),
        (b"info", BencodeDict({b"length": BencodeInt(5), b"name": BencodeString(b"a.txt")})),
        (b"creation date", BencodeInt(1700000000)),
    ]
    encodings = {encode(BencodeDict(dict(order))) for order in itertools.permutations(entries)}
    assert len(encodings) == 1


def test_decoded_non_canonical_order_is_canonicalised():
    obj = decode(b"d4:spam4:eggs3:cow3:mooe")
    assert encode(obj) == b"d3:cow3:moo4:spam4:eggse"


def test_round_trip_values():
    values = [
        BencodeInt(-(2 ** 63)),
        BencodeString(b"\x00\x01:e"),
        BencodeList([BencodeList([]), BencodeDict({}), BencodeString(b"")]),
        from_python({
            "info": {"files": [{"length": 3, "path": ["a", "b"]}], "piece length": 16384},
            "announce-list": [["udp://a"], ["http://b"]],
        }),
    ]
    for value in values:
        assert decode(encode(value)) == value


def test_encode_plain_python():
    assert encode(12345) == b"i12345e"
    assert encode(-12345) == b"i-12345e"
    assert encode("omar") == b"4:omar"
    assert encode([1, b"a", [2]]) == b"li1e1:ali2eee"
    assert encode({"b": [1, {"c": 0}], "a": 1}) == b"d1:ai1e1:bli1ed1:ci0eeee"


def test_encode_str_counts_bytes():
    assert encode("é") == b"2:\xc3\xa9"
