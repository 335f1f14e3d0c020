import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from bencode import BencodeDecodeError
from torrent.config import DEFAULT_PORT, LOG_LEVEL
from torrent.metainfo import TorrentMeta
from tracker import HTTPTrackerClient, TrackerError, generate_peer_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect a .torrent file and announce it to its tracker.")
    parser.add_argument("path", type=Path, help="the input torrent file")
    parser.add_argument("--announce", action="store_true", help="send a 'started' announce to the tracker")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port reported to the tracker")
    parser.add_argument("--strict", action="store_true", help="reject trailing bytes after the root dictionary")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="logging level (default: %(default)s)")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.path.suffix != ".torrent":
        parser.error(f"{args.path} is not a torrent (.torrent) file")

    try:
        meta = TorrentMeta(args.path, strict=args.strict)
    except (BencodeDecodeError, OSError) as e:
        print(f"failed to parse torrent file: {args.path}: {e}", file=sys.stderr)
        return 1

    print("info_hash:", meta.info_hash_hex)
    print("name:", meta.name)
    print("total length:", meta.total_length)
    print("announce:", meta.announce)

    if not args.announce:
        return 0

    peer_id = generate_peer_id()
    try:
        tracker = HTTPTrackerClient(meta, peer_id, port=args.port)
        peers = asyncio.run(tracker.announce())
    except (ValueError, TrackerError) as e:
        print(f"announce failed: {e}", file=sys.stderr)
        return 1

    print(f"tracker returned {len(peers)} peers")
    for ip, port in peers:
        print(f"  {ip}:{port}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
