import os

from bencode.decoder import DEFAULT_MAX_DEPTH, DEFAULT_MAX_STRING_LENGTH

# --- General ---
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# --- Metainfo limits ---
MAX_METAINFO_SIZE = int(os.environ.get("BT_MAX_METAINFO_SIZE", 16 * 1024 * 1024))
MAX_NESTING_DEPTH = int(os.environ.get("BT_MAX_NESTING_DEPTH", DEFAULT_MAX_DEPTH))
MAX_STRING_LENGTH = int(os.environ.get("BT_MAX_STRING_LENGTH", DEFAULT_MAX_STRING_LENGTH))
PIECE_HASH_LEN = 20

# --- Tracker ---
DEFAULT_PORT = int(os.environ.get("BT_PORT", 6881))
TRACKER_TIMEOUT = float(os.environ.get("BT_TRACKER_TIMEOUT", 10))  # seconds
NUMWANT = int(os.environ.get("BT_NUMWANT", 50))
PEER_ID_PREFIX = b"-BC0001-"
PEER_ID_LEN = 20
