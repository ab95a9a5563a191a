"""
lrudir - A directory-backed LRU cache for binary keys and values.

Each entry is a file, and recency order is a doubly linked list stored as
pointer files next to the entries, so the key set never has to be loaded
into memory.

Main components:
- KeyCodec: Maps arbitrary byte keys to portable file names
- EntryStore: One value file per key
- RecencyList: On-disk doubly linked list of keys, most recent first
- Cache: get/put/delete/keys/oldest/delete_oldest over a directory
- create_cache / open_cache / open_or_create: Directory lifecycle
"""

from .cache import Cache
from .codec import KeyCodec, encode_key
from .config import CacheConfig, CacheState
from .errors import (
    InvalidKeyError,
    KeyNotFoundError,
    LockError,
    LRUDirError,
    NotACacheError,
)
from .lifecycle import create_cache, open_cache, open_or_create
from .storage import EntryStore, RecencyList

__version__ = "0.1.0"

__all__ = [
    # Config
    "CacheConfig",
    "CacheState",
    # Errors
    "LRUDirError",
    "InvalidKeyError",
    "KeyNotFoundError",
    "NotACacheError",
    "LockError",
    # Codec
    "KeyCodec",
    "encode_key",
    # Storage
    "EntryStore",
    "RecencyList",
    # Cache
    "Cache",
    "create_cache",
    "open_cache",
    "open_or_create",
]
