"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .decoder import decode, parse_root
from .encoder import encode
from .errors import (
    BencodeDecodeError,
    InvalidFormat,
    InvalidLength,
    NestingTooDeep,
    UnexpectedByte,
    UnexpectedEOF,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, to_python

__all__ = [
    'decode', 'parse_root', 'encode',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict', 'to_python',
    'BencodeDecodeError', 'UnexpectedByte', 'UnexpectedEOF', 'InvalidLength', 'InvalidFormat',
    'NestingTooDeep',
]
