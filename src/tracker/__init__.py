"""
Tracker package for announcing to HTTP BitTorrent trackers.
"""
from .http_tracker import HTTPTrackerClient, TrackerError
from .utils import compact_to_peers, generate_peer_id, pct_encode

__all__ = ['HTTPTrackerClient', 'TrackerError', 'compact_to_peers', 'generate_peer_id', 'pct_encode']
