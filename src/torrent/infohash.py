import hashlib
from typing import Tuple

from bencode import BencodeDict, InvalidFormat, encode


def info_hash(root) -> Tuple[bytes, str]:
    """
    SHA-1 of the canonically re-encoded 'info' dictionary.

    Keys are re-sorted by the encoder, so the result does not depend on the
    order the info dictionary had in the source bytes.
    Returns the 20-byte digest and its lowercase hex form.
    """
    if isinstance(root, BencodeDict):
        root = root.value
    if not isinstance(root, dict):
        raise InvalidFormat("torrent root must be a dictionary")

    info = root.get(b"info")
    if info is None:
        raise InvalidFormat("torrent missing 'info' dictionary")
    if not isinstance(info, (BencodeDict, dict)):
        raise InvalidFormat(f"'info' must be a dictionary, got {type(info).__name__}")

    digest = hashlib.sha1(encode(info)).digest()
    return digest, digest.hex()
