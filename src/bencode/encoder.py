"""
Bencode encoder for BitTorrent metainfo and tracker requests.

Output is canonical: dictionary keys are always written in ascending raw
byte order, so equal trees always produce identical bytes.
"""
from .structure import (
    INT64_MAX,
    INT64_MIN,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
)


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""

    if isinstance(obj, BencodeInt):
        return encode_int(obj.value)

    if isinstance(obj, BencodeString):
        return encode_bytes(obj.value)

    if isinstance(obj, BencodeList):
        return encode_list(obj.value)

    if isinstance(obj, BencodeDict):
        return _encode_pairs(obj.sorted_items())

    # bool is an int subclass but has no bencode form
    if isinstance(obj, int) and not isinstance(obj, bool):
        return encode_int(obj)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return encode_bytes(bytes(obj))

    if isinstance(obj, str):
        return encode_str(obj)

    if isinstance(obj, (list, tuple)):
        return encode_list(obj)

    if isinstance(obj, dict):
        return encode_dict(obj)

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    if not INT64_MIN <= n <= INT64_MAX:
        raise OverflowError(f"integer out of 64-bit range: {n}")
    return b"i%de" % n


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return b"%d:" % len(b) + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode())


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b"".join(encode(x) for x in lst)
    return b"l" + encoded_items + b"e"


def encode_dict(d: dict) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""

    def key_to_bytes(k):
        if isinstance(k, str):
            return k.encode()
        if isinstance(k, (bytes, BencodeString)):
            return bytes(k)
        raise TypeError(f"Dictionary keys must be bytes or str, not {type(k)}")

    if isinstance(d, BencodeDict):
        return _encode_pairs(d.sorted_items())

    by_bytes = {}
    for k, v in d.items():
        key_bytes = key_to_bytes(k)
        if key_bytes in by_bytes:
            raise ValueError(f"Dictionary has more than one key encoding to {key_bytes!r}")
        by_bytes[key_bytes] = v

    return _encode_pairs(sorted(by_bytes.items(), key=lambda pair: pair[0]))


def _encode_pairs(pairs) -> bytes:
    """Writes (key bytes, value) pairs, already in canonical order, as a dictionary."""
    parts = [b"d"]
    for key_bytes, value in pairs:
        parts.append(encode_bytes(key_bytes))
        parts.append(encode(value))
    parts.append(b"e")
    return b"".join(parts)
