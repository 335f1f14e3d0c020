"""
Data structures for representing Bencoded types.

Every decoded value is one of four variants. Dictionary keys are raw
``bytes`` so that only byte strings can ever act as keys; their canonical
order is plain unsigned byte-wise comparison, which is what ``bytes``
ordering already does in Python.
"""
from functools import total_ordering

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "INT64_MIN",
    "INT64_MAX",
    "to_python",
]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("value",)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    __hash__ = None


class BencodeInt(BencodeType):
    """Represents a Bencoded integer, bounded to the signed 64-bit range."""
    __slots__ = ()

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("BencodeInt requires an integer.")
        if not INT64_MIN <= value <= INT64_MAX:
            raise OverflowError(f"BencodeInt out of 64-bit range: {value}")
        self.value = value

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"BencodeInt({self.value})"


@total_ordering
class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def __lt__(self, other):
        if not isinstance(other, BencodeString):
            return NotImplemented
        return self.value < other.value

    def __hash__(self):
        return hash(self.value)

    def __len__(self):
        return len(self.value)

    def __bytes__(self):
        return self.value

    def decode(self, encoding="utf-8", errors="strict") -> str:
        return self.value.decode(encoding, errors)

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    def __init__(self, value: list):
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeList items must be Bencode values.")
        self.value = value

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def __repr__(self):
        return f"BencodeList({self.value!r})"


class BencodeDict(BencodeType):
    """Represents a Bencoded dictionary."""
    __slots__ = ()

    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        for k, v in value.items():
            if not isinstance(k, bytes):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError("BencodeDict values must be Bencode values.")
        self.value = value

    def sorted_items(self):
        """Yields (key, value) pairs in canonical order: ascending raw key bytes."""
        for key in sorted(self.value):
            yield key, self.value[key]

    def get(self, key: bytes, default=None):
        return self.value.get(key, default)

    def __getitem__(self, key: bytes):
        return self.value[key]

    def __contains__(self, key):
        return key in self.value

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        return f"BencodeDict({self.value!r})"


def to_python(obj):
    """Converts a Bencode tree into plain int / bytes / list / dict objects."""
    if isinstance(obj, (BencodeInt, BencodeString)):
        return obj.value
    if isinstance(obj, BencodeList):
        return [to_python(item) for item in obj.value]
    if isinstance(obj, BencodeDict):
        return {k: to_python(v) for k, v in obj.value.items()}
    raise TypeError(f"Not a Bencode value: {type(obj)}")
