"""
Bencode decoder for BitTorrent metainfo and tracker responses.

The decoder reads from a binary stream one value at a time. Lists and
dictionaries are closed by an ``e`` byte, which the low-level step reports
as the private ``_END`` marker; only the list / dictionary loops ever see it.
"""
import io
import logging
import sys
from typing import Optional

from .errors import (
    InvalidFormat,
    InvalidLength,
    NestingTooDeep,
    UnexpectedByte,
    UnexpectedEOF,
)
from .structure import (
    INT64_MAX,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeType,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256
DEFAULT_MAX_STRING_LENGTH = 64 * 1024 * 1024
_RECURSION_HEADROOM = 250

_I = ord("i")
_L = ord("l")
_D = ord("d")
_E = ord("e")
_MINUS = ord("-")
_COLON = ord(":")
_ZERO = ord("0")
_NINE = ord("9")

# Terminator marker. Not a BencodeType, never returned to callers.
_END = object()


def _is_digit(b: int) -> bool:
    return _ZERO <= b <= _NINE


class BencodeDecoder:
    """
    Decodes Bencoded values from a byte stream into Bencode objects.
    """
    def __init__(self, stream, max_depth: int = DEFAULT_MAX_DEPTH,
                 max_string_length: int = DEFAULT_MAX_STRING_LENGTH):
        if isinstance(stream, (bytes, bytearray, memoryview)):
            stream = io.BytesIO(bytes(stream))
        self.stream = stream
        # two stack frames per nesting level, plus headroom for the caller
        ceiling = (sys.getrecursionlimit() - _RECURSION_HEADROOM) // 2
        if max_depth > ceiling:
            logger.warning("max_depth %d exceeds recursion ceiling, capping at %d", max_depth, ceiling)
            max_depth = ceiling
        self.max_depth = max_depth
        self.max_string_length = max_string_length
        self.i = 0  # bytes consumed so far
        self.depth = 0

    def decode(self) -> Optional[BencodeType]:
        """
        Decodes the next value from the stream.

        Returns None when the stream is already exhausted. The stream is
        left positioned right after the decoded value.
        """
        self.depth = 0
        lead = self._next_byte()
        if lead is None:
            return None

        result = self._parse_value(lead)
        if result is _END:
            raise UnexpectedByte(lead, self.i - 1, expected="a value")
        return result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _next_byte(self) -> Optional[int]:
        chunk = self.stream.read(1)
        if not chunk:
            return None
        self.i += 1
        return chunk[0]

    def _require_byte(self, expected: str) -> int:
        b = self._next_byte()
        if b is None:
            raise UnexpectedEOF(self.i, expected)
        return b

    def _read_exact(self, n: int) -> bytes:
        """Reads exactly n bytes; streams are allowed to return short reads."""
        chunks = []
        remaining = n
        while remaining:
            chunk = self.stream.read(remaining)
            if not chunk:
                raise UnexpectedEOF(self.i, f"{remaining} more byte(s) of string data")
            chunks.append(chunk)
            self.i += len(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _enter(self, offset: int):
        self.depth += 1
        if self.depth > self.max_depth:
            raise NestingTooDeep(self.max_depth, offset)

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, lead: int):
        if lead == _I:
            return self._parse_int()

        if _is_digit(lead):  # Bencode strings start with length, which is a digit
            return self._parse_string(lead)

        if lead == _L:
            return self._parse_list()

        if lead == _D:
            return self._parse_dict()

        if lead == _E:
            return _END

        raise UnexpectedByte(lead, self.i - 1, expected="'i', 'l', 'd', 'e' or a digit")

    def _parse_int(self) -> BencodeInt:
        """Parses i<digits>e; the leading 'i' is already consumed."""
        start = self.i - 1
        negative = False
        digits = 0
        num = 0

        b = self._require_byte("a digit or '-'")
        if b == _MINUS:
            negative = True
            b = self._require_byte("a digit")

        limit = INT64_MAX + 1 if negative else INT64_MAX

        while b != _E:
            if not _is_digit(b):
                raise UnexpectedByte(b, self.i - 1, expected="a digit or 'e'")
            if digits and num == 0:
                raise InvalidLength("leading zero in integer", start)
            num = num * 10 + (b - _ZERO)
            digits += 1
            if num > limit:
                raise InvalidLength("integer does not fit in 64 bits", start)
            b = self._require_byte("a digit or 'e'")

        if not digits:
            raise InvalidLength("integer has no digits", start)
        if negative and num == 0:
            raise InvalidLength("negative zero is not a valid integer", start)

        return BencodeInt(-num if negative else num)

    def _parse_string(self, lead: int) -> BencodeString:
        """Parses <length>:<bytes>; lead is the first length digit."""
        start = self.i - 1
        length = lead - _ZERO

        b = self._require_byte("a digit or ':'")
        while _is_digit(b):
            if length == 0:
                raise InvalidLength("leading zero in string length", start)
            length = length * 10 + (b - _ZERO)
            if length > self.max_string_length:
                raise InvalidLength(
                    f"string length exceeds limit of {self.max_string_length} bytes", start)
            b = self._require_byte("a digit or ':'")

        if b != _COLON:
            raise UnexpectedByte(b, self.i - 1, expected="':'")
        if length > self.max_string_length:
            raise InvalidLength(
                f"string length exceeds limit of {self.max_string_length} bytes", start)

        return BencodeString(self._read_exact(length))

    def _parse_list(self) -> BencodeList:
        """Parses a list; the leading 'l' is already consumed."""
        self._enter(self.i - 1)
        items = []

        while True:
            item = self._parse_value(self._require_byte("a list item or 'e'"))
            if item is _END:
                break
            items.append(item)

        self.depth -= 1
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary; the leading 'd' is already consumed."""
        self._enter(self.i - 1)
        obj = {}

        while True:
            key_offset = self.i
            key = self._parse_value(self._require_byte("a dictionary key or 'e'"))
            if key is _END:
                break
            # keys MUST be strings
            if not isinstance(key, BencodeString):
                raise InvalidFormat(
                    f"dictionary key must be a byte string, got {type(key).__name__}", key_offset)
            if key.value in obj:
                raise InvalidFormat(f"duplicate dictionary key {key.value!r}", key_offset)

            lead = self._require_byte("a dictionary value")
            value = self._parse_value(lead)
            if value is _END:
                raise UnexpectedByte(lead, self.i - 1, expected="a dictionary value")
            obj[key.value] = value

        self.depth -= 1
        return BencodeDict(obj)


def decode(stream, *, max_depth: int = DEFAULT_MAX_DEPTH,
           max_string_length: int = DEFAULT_MAX_STRING_LENGTH) -> Optional[BencodeType]:
    """
    Decodes one value from bytes or a binary file object.

    Returns None if the input is empty.
    """
    return BencodeDecoder(stream, max_depth, max_string_length).decode()


def parse_root(stream, *, strict: bool = False, max_depth: int = DEFAULT_MAX_DEPTH,
               max_string_length: int = DEFAULT_MAX_STRING_LENGTH) -> BencodeDict:
    """
    Decodes the root dictionary of a .torrent file (or tracker response).

    Trailing bytes after the root value are ignored unless ``strict`` is set,
    in which case they raise UnexpectedByte.
    """
    decoder = BencodeDecoder(stream, max_depth, max_string_length)
    root = decoder.decode()

    if root is None:
        raise InvalidFormat("empty input, expected a dictionary", 0)
    if not isinstance(root, BencodeDict):
        raise InvalidFormat(f"root must be a dictionary, got {type(root).__name__}", 0)

    if strict:
        trailing = decoder._next_byte()
        if trailing is not None:
            raise UnexpectedByte(trailing, decoder.i - 1, expected="end of input")

    logger.debug("Decoded root dictionary with %d keys from %d bytes", len(root), decoder.i)
    return root
