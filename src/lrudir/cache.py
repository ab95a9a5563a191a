"""
Cache - LRU ordered key/value store backed by a directory.

KEY CONCEPT:
Values live in entry files and recency lives in the on-disk linked list
(see storage.recency_list). The cache keeps both in step:

    get(k)     read entry, then move k to the head
    put(k, v)  write entry, then move (or insert) k at the head
    delete(k)  unlink k from the list, then remove its three files

Nothing is held in memory between calls, so a cache with millions of
entries costs no more to open than an empty one. The flip side is that
keys() and len() walk the list one file at a time.

Concurrency: no method takes the lock. Processes sharing a directory must
wrap their call sequences in `with cache.locked(): ...` themselves.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from filelock import FileLock, Timeout

from .codec import KeyCodec
from .config import CacheConfig
from .errors import InvalidKeyError, KeyNotFoundError, LockError
from .storage import EntryStore, RecencyList

logger = logging.getLogger(__name__)


BYTES_LIKE = (bytes, bytearray, memoryview)


def _as_bytes(data, what: str) -> bytes:
    # bytes(int) would silently build a zero-filled buffer
    if not isinstance(data, BYTES_LIKE):
        raise TypeError(f"{what} must be bytes-like, not {type(data).__name__}")
    return bytes(data)


def _check_key(key: bytes, action: str) -> bytes:
    key = _as_bytes(key, "key")
    if not key:
        raise InvalidKeyError(f"cannot {action} the empty key")
    return key


class Cache:
    """
    An opened cache directory.

    Instances come from create_cache(), open_cache() or open_or_create().

    Usage:
        cache = open_or_create("/tmp/thumbs")

        with cache.locked():
            cache.put(b"img/a.png", data)
            if len(cache) > 1000:
                cache.delete_oldest()

        cache.get(b"img/a.png")  # data, and a.png is now most recent
        cache.keys()             # most to least recently used
    """

    def __init__(
        self,
        directory: Path,
        lock: FileLock,
        config: Optional[CacheConfig] = None,
    ):
        self.directory = Path(directory)
        self.lock = lock
        self.config = config or CacheConfig()

        codec = KeyCodec()
        self.entries = EntryStore(self.directory, codec)
        self.recency = RecencyList(self.directory, codec, self.config)

    def path(self, key: bytes) -> Path:
        """
        Path of the entry file for key. The path is returned whether or
        not the entry exists.
        """
        return self.entries.path(key)

    def get(self, key: bytes) -> bytes:
        """
        Return the value for key and mark key as most recently used.

        Raises InvalidKeyError for the empty key and KeyNotFoundError if
        key is not cached.
        """
        key = _check_key(key, "get")

        value = self.entries.read(key)
        self.recency.detach(key)
        self.recency.attach_head(key)

        return value

    def put(self, key: bytes, value: bytes) -> None:
        """Store value under key and mark key as most recently used."""
        key = _check_key(key, "put")

        self.entries.write(key, _as_bytes(value, "value"))

        try:
            self.recency.detach(key)
        except KeyNotFoundError:
            # New key, nothing to unlink
            pass

        self.recency.attach_head(key)

    def delete(self, key: bytes) -> None:
        """
        Remove key and its value.

        Raises KeyNotFoundError if key is not in the list. A failure part
        way through leaves some of key's files behind.
        """
        key = _check_key(key, "delete")

        self.recency.detach(key)
        self.entries.remove(key)
        self.recency.remove(key)

        logger.debug("deleted %r", key)

    def keys(self) -> list[bytes]:
        """All keys, most to least recently used. O(N)."""
        return list(self.recency.traverse())

    def oldest(self) -> bytes:
        """Least recently used key. Raises KeyNotFoundError when empty."""
        return self.recency.oldest()

    def delete_oldest(self) -> None:
        """Evict the least recently used key."""
        self.delete(self.oldest())

    @contextmanager
    def locked(self, timeout: Optional[float] = None):
        """
        Hold the cross-process lock for the duration of the block.

        The lock is released however the block exits. Raises LockError if
        it cannot be acquired within timeout seconds (config default when
        None).
        """
        if timeout is None:
            timeout = self.config.lock_timeout

        try:
            self.lock.acquire(timeout=timeout)
        except Timeout as exc:
            raise LockError(f"timed out waiting for {self.lock.lock_file}") from exc

        try:
            yield self
        finally:
            self.lock.release()

    def __contains__(self, key: bytes) -> bool:
        # Membership test only, no recency bump
        if not isinstance(key, BYTES_LIKE) or not key:
            return False
        return self.entries.exists(bytes(key))

    def __iter__(self) -> Iterator[bytes]:
        return self.recency.traverse()

    def __len__(self) -> int:
        return sum(1 for _ in self.recency.traverse())

    def __repr__(self) -> str:
        return f"Cache(directory={str(self.directory)!r})"
