import logging
from pathlib import Path
from typing import Union

from bencode import BencodeDict, BencodeInt, BencodeList, BencodeString, InvalidFormat, parse_root

from .config import MAX_METAINFO_SIZE, MAX_NESTING_DEPTH, MAX_STRING_LENGTH, PIECE_HASH_LEN
from .infohash import info_hash

logger = logging.getLogger(__name__)


def _require(container: BencodeDict, key: bytes, kind, where: str):
    value = container.get(key)
    if value is None:
        raise InvalidFormat(f"{where} missing required field {key.decode()!r}")
    if not isinstance(value, kind):
        raise InvalidFormat(f"{where} field {key.decode()!r} must be {kind.__name__}, "
                            f"got {type(value).__name__}")
    return value


def _text(value: BencodeString) -> str:
    # names and URLs are UTF-8 by convention; never fail on odd bytes
    return value.value.decode("utf-8", errors="replace")


class TorrentMeta:
    def __init__(self, source: Union[str, Path, bytes], strict: bool = False):
        if isinstance(source, (bytes, bytearray)):
            self.path = None
            raw = bytes(source)
        else:
            self.path = Path(source)
            if self.path.stat().st_size > MAX_METAINFO_SIZE:
                raise InvalidFormat(f"torrent file larger than {MAX_METAINFO_SIZE} bytes")
            raw = self.path.read_bytes()
        if len(raw) > MAX_METAINFO_SIZE:
            raise InvalidFormat(f"torrent file larger than {MAX_METAINFO_SIZE} bytes")

        root = parse_root(raw, strict=strict, max_depth=MAX_NESTING_DEPTH,
                          max_string_length=MAX_STRING_LENGTH)
        self.root = root

        # ------------------ INFO ------------------
        self.info = _require(root, b"info", BencodeDict, "torrent")
        self.info_hash, self.info_hash_hex = info_hash(root)

        # ------------------ NAME ------------------
        self.name = _text(_require(self.info, b"name", BencodeString, "info"))

        # ------------------ ANNOUNCE URL ------------------
        ann_b = root.get(b"announce")
        self.announce = _text(ann_b) if isinstance(ann_b, BencodeString) else None

        # ------------------ ANNOUNCE-LIST ------------------
        self.announce_list = None
        ann_list_b = root.get(b"announce-list")

        if isinstance(ann_list_b, BencodeList):
            tiers = []
            for tier in ann_list_b:
                if not isinstance(tier, BencodeList):
                    continue
                urls = [_text(u) for u in tier if isinstance(u, BencodeString)]
                if urls:
                    tiers.append(urls)
            if tiers:
                self.announce_list = tiers

        # ------------------ PIECE LENGTH ------------------
        self.piece_length = _require(self.info, b"piece length", BencodeInt, "info").value
        if self.piece_length <= 0:
            raise InvalidFormat(f"piece length must be positive, got {self.piece_length}")

        # ------------------ PIECES ------------------
        raw_pieces = _require(self.info, b"pieces", BencodeString, "info").value
        if len(raw_pieces) % PIECE_HASH_LEN:
            raise InvalidFormat(f"pieces length {len(raw_pieces)} is not a multiple of {PIECE_HASH_LEN}")
        self.pieces = [raw_pieces[i:i + PIECE_HASH_LEN]
                       for i in range(0, len(raw_pieces), PIECE_HASH_LEN)]

        # ------------------ FILES ------------------
        self.is_multi = b"files" in self.info
        if self.is_multi:
            self.files = []
            for entry in _require(self.info, b"files", BencodeList, "info"):
                if not isinstance(entry, BencodeDict):
                    raise InvalidFormat("'files' entries must be dictionaries")
                length = _require(entry, b"length", BencodeInt, "file entry").value
                parts = [_text(p) for p in _require(entry, b"path", BencodeList, "file entry")
                         if isinstance(p, BencodeString)]
                if not parts:
                    raise InvalidFormat("file entry has an empty path")
                self.files.append({"length": length, "path": "/".join(parts)})
        else:
            length = _require(self.info, b"length", BencodeInt, "info").value
            self.files = [{"length": length, "path": self.name}]

        self.total_length = sum(f["length"] for f in self.files)
        self.is_single = not self.is_multi
        self.num_pieces = len(self.pieces)
        self.last_piece_length = (self.total_length % self.piece_length) or self.piece_length

        for f in self.files:
            f["abs_path"] = f"{self.name}/{f['path']}" if self.is_multi else self.name

        logger.info("Loaded torrent %r: %d file(s), %d bytes, %d pieces, info_hash %s",
                    self.name, len(self.files), self.total_length, self.num_pieces,
                    self.info_hash_hex)

    def __repr__(self):
        return (
            f"TorrentMeta(name={self.name!r}, files={len(self.files)}, pieces={self.num_pieces}, "
            f"multi={self.is_multi}, announce={self.announce!r})"
        )


def load_torrent(path: Union[str, Path], strict: bool = False) -> TorrentMeta:
    """Loads and validates a .torrent file."""
    return TorrentMeta(path, strict=strict)
