import pytest

from bencodec import (
    BencodeDecodeError,
    BencodeDecoder,
    DecoderLimits,
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
    decode,
)


@pytest.mark.parametrize("data", [
    b"i012e",
    b"i00e",
    b"i-0e",
    b"i-01e",
    b"ie",
    b"i-e",
    b"i1xe",
    b"i--1e",
    b"i+1e",
    b"i 1e",
])
def test_malformed_integer(data):
    with pytest.raises(MalformedIntegerError):
        decode(data)


@pytest.mark.parametrize("data", [b"i", b"i15155", b"i-", b"i-12"])
def test_unterminated_integer(data):
    with pytest.raises(UnterminatedIntegerError):
        decode(data)


def test_unterminated_integer_is_a_malformed_integer():
    assert issubclass(UnterminatedIntegerError, MalformedIntegerError)


@pytest.mark.parametrize("data", [b"i9223372036854775808e", b"i-9223372036854775809e"])
def test_integer_overflow(data):
    with pytest.raises(IntegerOverflowError):
        decode(data)


@pytest.mark.parametrize("data", [b"5", b"12", b"5x:hello", b"03:abc", b"1-:a"])
def test_malformed_string_length(data):
    with pytest.raises(MalformedStringLengthError):
        decode(data)


def test_insufficient_data():
    with pytest.raises(InsufficientDataError) as excinfo:
        decode(b"6:world")
    assert excinfo.value.position == 0


def test_exact_length_string():
    assert decode(b"5:hello").value == b"hello"


@pytest.mark.parametrize("data", [b"x", b"e", b"-1", b":", b"\xff"])
def test_unknown_tag(data):
    with pytest.raises(UnknownTagError):
        decode(data)


@pytest.mark.parametrize("data", [b"l", b"li15155e", b"lle", b"d", b"d3:cowi1e", b"d3:cow"])
def test_unterminated_container(data):
    with pytest.raises(UnterminatedContainerError):
        decode(data)


@pytest.mark.parametrize("data", [b"di1ei2ee", b"dli1eei2ee", b"dd1:ai1eei3ee"])
def test_dict_key_must_be_string(data):
    with pytest.raises(InvalidDictKeyError):
        decode(data)


def test_dict_key_without_value_followed_by_end():
    with pytest.raises(UnknownTagError):
        decode(b"d3:cowe")


def test_empty_buffer_is_exhausted():
    with pytest.raises(ExhaustedStreamError):
        decode(b"")


def test_trailing_data_rejected():
    with pytest.raises(TrailingDataError) as excinfo:
        decode(b"i1ei2e")
    assert excinfo.value.position == 3


def test_errors_share_base_class():
    for data in (b"i01e", b"6:world", b"l", b"x"):
        with pytest.raises(BencodeDecodeError):
            decode(data)
        with pytest.raises(ValueError):
            decode(data)


def test_error_message_includes_position():
    with pytest.raises(UnknownTagError, match="at index 4"):
        decode(b"li1e?")


def test_decoder_rejects_text_input():
    with pytest.raises(TypeError):
        BencodeDecoder("i1e")


def test_very_long_integer_is_overflow():
    with pytest.raises(IntegerOverflowError):
        decode(b"i" + b"1" * 5000 + b"e")
    with pytest.raises(IntegerOverflowError):
        decode(b"i-" + b"9" * 20 + b"e")


def test_very_long_string_length_is_insufficient_data():
    with pytest.raises(InsufficientDataError):
        decode(b"1" * 5000 + b":x")


def test_very_long_string_length_over_ceiling():
    with pytest.raises(StringTooLongError):
        decode(b"1" * 5000 + b":x", DecoderLimits(max_string_length=100))


def test_unbounded_depth_still_raises_decode_error():
    depth = 10000
    with pytest.raises(NestingTooDeepError):
        decode(b"l" * depth + b"e" * depth, DecoderLimits(max_depth=None))
