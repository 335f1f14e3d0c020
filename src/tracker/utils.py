"""
Utility functions for tracker communication.
"""
import random
import string
from typing import List, Tuple

from torrent.config import PEER_ID_LEN, PEER_ID_PREFIX

_PEER_ID_ALPHABET = (string.ascii_letters + string.digits).encode()


def generate_peer_id(prefix: bytes = PEER_ID_PREFIX) -> bytes:
    """
    Generates a 20-byte peer id: the client prefix followed by random
    ASCII alphanumerics.
    """
    if len(prefix) > PEER_ID_LEN:
        raise ValueError(f"peer id prefix longer than {PEER_ID_LEN} bytes")
    tail = bytes(random.choice(_PEER_ID_ALPHABET) for _ in range(PEER_ID_LEN - len(prefix)))
    return prefix + tail


def pct_encode(b: bytes) -> str:
    """Percent-encodes every byte (%HH), as trackers expect for binary fields."""
    return ''.join(f'%{byte:02X}' for byte in b)


def compact_to_peers(blob: bytes) -> List[Tuple[str, int]]:
    """
    Decodes a compact peer list (6 bytes per peer: 4 for IP, 2 for port)
    into a list of (IP, port) tuples.
    """
    if len(blob) % 6:
        raise ValueError(f"compact peer list length {len(blob)} is not a multiple of 6")
    peers = []
    for i in range(0, len(blob), 6):
        ip = ".".join(str(b) for b in blob[i:i+4])
        port = int.from_bytes(blob[i+4:i+6], "big")
        peers.append((ip, port))
    return peers
