"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .config import DEFAULT_LIMITS, DecoderLimits, DuplicateKeyPolicy
from .decoder import BencodeDecoder, decode, decode_all, decode_one
from .encoder import encode, encode_all
from .errors import *
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, from_python

__all__ = [
    'decode', 'decode_one', 'decode_all', 'encode', 'encode_all', 'from_python',
    'BencodeDecoder', 'DecoderLimits', 'DuplicateKeyPolicy', 'DEFAULT_LIMITS',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeError', 'BencodeDecodeError', 'BencodeEncodeError',
    'UnknownTagError', 'MalformedIntegerError', 'UnterminatedIntegerError',
    'IntegerOverflowError', 'MalformedStringLengthError', 'InsufficientDataError',
    'UnterminatedContainerError', 'InvalidDictKeyError', 'DuplicateKeyError',
    'ExhaustedStreamError', 'TrailingDataError', 'LimitExceededError',
    'NestingTooDeepError', 'StringTooLongError', 'BufferTooLargeError',
    'UnsupportedValueKindError', 'DuplicateKeyInvariantError', 'ValueTooDeepError',
]
