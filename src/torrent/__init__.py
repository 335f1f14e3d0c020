"""
Torrent metainfo loading and info-hash derivation.
"""
from .infohash import info_hash
from .metainfo import TorrentMeta, load_torrent

__all__ = ['info_hash', 'TorrentMeta', 'load_torrent']
