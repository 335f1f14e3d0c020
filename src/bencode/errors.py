"""
Exceptions raised while decoding Bencoded data.
"""
from typing import Optional

__all__ = [
    "BencodeDecodeError",
    "UnexpectedByte",
    "UnexpectedEOF",
    "InvalidLength",
    "InvalidFormat",
    "NestingTooDeep",
]


class BencodeDecodeError(ValueError):
    """Base exception for Bencode decoding errors."""

    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        if self.offset is not None:
            return f"{self.message} at offset {self.offset}"
        return self.message


class UnexpectedByte(BencodeDecodeError):
    """A byte appeared where the grammar forbids it."""

    def __init__(self, byte: int, offset: Optional[int] = None, expected: Optional[str] = None):
        message = f"unexpected byte {bytes([byte])!r}"
        if expected:
            message += f" (expected {expected})"
        super().__init__(message, offset)
        self.byte = byte
        self.expected = expected


class UnexpectedEOF(BencodeDecodeError):
    """Input ended in the middle of a value."""

    def __init__(self, offset: Optional[int] = None, expected: Optional[str] = None):
        message = "unexpected end of input"
        if expected:
            message += f" (expected {expected})"
        super().__init__(message, offset)
        self.expected = expected


class InvalidLength(BencodeDecodeError):
    """Malformed numeric field: leading zero, overflow or oversized length."""


class InvalidFormat(BencodeDecodeError):
    """Well-formed bencode that does not have the required shape."""


class NestingTooDeep(BencodeDecodeError):
    """Lists / dictionaries nested deeper than the configured limit."""

    def __init__(self, depth: int, offset: Optional[int] = None):
        super().__init__(f"nesting depth exceeds {depth}", offset)
        self.depth = depth
