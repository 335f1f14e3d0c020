import asyncio
import logging
from typing import List, Tuple

import aiohttp

from bencode import BencodeDecodeError, BencodeDict, BencodeInt, BencodeList, BencodeString, parse_root
from torrent.config import DEFAULT_PORT, NUMWANT, TRACKER_TIMEOUT
from .utils import compact_to_peers, pct_encode

logger = logging.getLogger(__name__)


class TrackerError(RuntimeError):
    """The tracker could not be reached or answered with an error."""


class HTTPTrackerClient:
    def __init__(self, torrent_meta, peer_id: bytes, port=DEFAULT_PORT, url: str = None,
                 timeout: float = TRACKER_TIMEOUT):
        self.meta = torrent_meta
        self.peer_id = peer_id  # MUST be 20 bytes
        self.port = port
        self.url = url if url else torrent_meta.announce
        self.timeout = timeout
        self.interval = None

        if not self.url:
            raise ValueError("No announce URL provided for HTTPTrackerClient")
        if not self.url.startswith(("http://", "https://")):
            raise ValueError(f"Not an HTTP tracker URL: {self.url}")
        if len(self.peer_id) != 20:
            raise ValueError("peer_id must be exactly 20 bytes")

    @staticmethod
    def _compact_to_peers(blob: bytes) -> List[Tuple[str, int]]:
        return compact_to_peers(blob)

    def build_url(self) -> str:
        params = {
            "info_hash": self.meta.info_hash,
            "peer_id": self.peer_id,
            "port": self.port,
            "uploaded": 0,
            "downloaded": 0,
            "left": self.meta.total_length,
            "compact": 1,
            "event": "started",
            "numwant": NUMWANT,
        }

        # URL-encode binary fields
        encoded = {}
        for k, v in params.items():
            if isinstance(v, bytes):
                encoded[k] = pct_encode(v)
            else:
                encoded[k] = str(v)

        query = "&".join(f"{k}={v}" for k, v in encoded.items())
        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{query}"

    async def announce(self) -> List[Tuple[str, int]]:
        full_url = self.build_url()
        logger.debug("Announcing to %s", full_url)

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(full_url) as resp:
                    if resp.status != 200:
                        raise TrackerError(f"Tracker {self.url} returned HTTP {resp.status}")
                    data = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TrackerError(f"Tracker {self.url} unreachable: {exc}") from exc

        return self.parse_response(data)

    def parse_response(self, data: bytes) -> List[Tuple[str, int]]:
        try:
            root = parse_root(data)
        except BencodeDecodeError as exc:
            raise TrackerError(f"Malformed tracker response: {exc}") from exc

        failure = root.get(b"failure reason")
        if isinstance(failure, BencodeString):
            raise TrackerError("Tracker error: " + failure.decode(errors="replace"))

        interval = root.get(b"interval")
        if isinstance(interval, BencodeInt):
            self.interval = interval.value

        peers_field = root.get(b"peers")

        if isinstance(peers_field, BencodeList):
            # Non-compact peer list (list of dictionaries)
            peers = []
            for peer_dict in peers_field:
                if isinstance(peer_dict, BencodeDict):
                    ip_b = peer_dict.get(b"ip")
                    port_b = peer_dict.get(b"port")

                    if isinstance(ip_b, BencodeString) and isinstance(port_b, BencodeInt):
                        peers.append((ip_b.decode(errors="replace"), port_b.value))
            logger.debug("Parsed %d peers from non-compact list", len(peers))
            return peers

        if isinstance(peers_field, BencodeString):
            try:
                peers = self._compact_to_peers(peers_field.value)
            except ValueError as exc:
                raise TrackerError(str(exc)) from exc
            logger.debug("Parsed %d peers from compact list", len(peers))
            return peers

        raise TrackerError("Tracker returned invalid peer list")
