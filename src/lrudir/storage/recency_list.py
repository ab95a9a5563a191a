"""
RecencyList: a doubly linked list of keys stored as files.

KEY CONCEPT: pointer files
Every key in the list owns two small files next to its entry file:

    <name>~next   the key after it (less recently used), or empty
    <name>~prev   the key before it (more recently used), or empty

The empty key encodes to the empty name, so its pointer files are plain
"~next" and "~prev". They act as the anchors of the list:

    ~next  ->  head key (most recently used)
    ~prev  ->  tail key (least recently used)

Example with three keys, most recent first:

    ~next = "c"     c~prev = ""    c~next = "b"
                    b~prev = "c"   b~next = "a"
    ~prev = "a"     a~prev = "b"   a~next = ""

Because the anchors are just the empty key's slots, an empty neighbour
pointer always lands on an anchor, and no splice needs a special case for
the ends of the list.

Pointer files hold literal key bytes. Keys are never decoded from names.

Every splice is a sequence of independent file writes. A crash between
them leaves the list inconsistent and there is no recovery.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

from ..codec import KeyCodec
from ..config import CacheConfig
from ..errors import InvalidKeyError, KeyNotFoundError

logger = logging.getLogger(__name__)

ANCHOR = b""


class RecencyList:
    """
    Most-to-least recently used ordering of keys, kept on disk.

    Usage:
        recency = RecencyList(Path("/tmp/cache"))
        recency.init_anchors()
        recency.attach_head(b"a")
        recency.attach_head(b"b")
        list(recency.traverse())   # [b"b", b"a"]
        recency.tail               # b"a"
    """

    def __init__(
        self,
        directory: Path,
        codec: Optional[KeyCodec] = None,
        config: Optional[CacheConfig] = None,
    ):
        self.directory = Path(directory)
        self.codec = codec or KeyCodec()
        self.config = config or CacheConfig()

    def next_path(self, key: bytes) -> Path:
        """Path of the file holding the key after key."""
        return self.directory / (self.codec.encode(key) + self.config.next_suffix)

    def prev_path(self, key: bytes) -> Path:
        """Path of the file holding the key before key."""
        return self.directory / (self.codec.encode(key) + self.config.prev_suffix)

    def _read(self, path: Path, key: bytes) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise KeyNotFoundError(key, "key not in recency list") from exc

    def get_next(self, key: bytes) -> bytes:
        """Key after key (toward the tail), or b"" at the tail."""
        return self._read(self.next_path(key), key)

    def get_prev(self, key: bytes) -> bytes:
        """Key before key (toward the head), or b"" at the head."""
        return self._read(self.prev_path(key), key)

    def set_next(self, key: bytes, value: bytes) -> None:
        """Point key at value as its successor."""
        self.next_path(key).write_bytes(value)

    def set_prev(self, key: bytes, value: bytes) -> None:
        """Point key at value as its predecessor."""
        self.prev_path(key).write_bytes(value)

    @property
    def head(self) -> bytes:
        """Most recently used key, b"" when the list is empty."""
        return self.get_next(ANCHOR)

    @property
    def tail(self) -> bytes:
        """Least recently used key, b"" when the list is empty."""
        return self.get_prev(ANCHOR)

    def init_anchors(self) -> None:
        """Write both anchors empty, i.e. an empty list."""
        self.set_next(ANCHOR, b"")
        self.set_prev(ANCHOR, b"")

    def attach_head(self, key: bytes) -> None:
        """
        Insert key at the head of the list.

        key must not currently be attached; detach it first. If the list
        is empty the old head is b"", so the last write lands on the tail
        anchor and key becomes both head and tail.
        """
        old_head = self.head

        self.set_next(ANCHOR, key)
        self.set_prev(key, ANCHOR)
        self.set_next(key, old_head)
        self.set_prev(old_head, key)

        logger.debug("attached %r at head (was %r)", key, old_head)

    def detach(self, key: bytes) -> None:
        """
        Unlink key from its neighbours without deleting its pointer files.

        Raises KeyNotFoundError if key has no pointer files. The files left
        behind still point at the old neighbours until rewritten.
        """
        if not key:
            raise InvalidKeyError("cannot detach the empty key")

        next_key = self.get_next(key)
        prev_key = self.get_prev(key)

        # Empty neighbours resolve to the anchors, which fixes head/tail
        self.set_prev(next_key, prev_key)
        self.set_next(prev_key, next_key)

        logger.debug("detached %r (prev=%r, next=%r)", key, prev_key, next_key)

    def remove(self, key: bytes) -> None:
        """
        Delete key's pointer files. The key must already be detached.

        Raises KeyNotFoundError if either file is missing. Nothing is rolled
        back if the second removal fails.
        """
        for path in (self.next_path(key), self.prev_path(key)):
            try:
                path.unlink()
            except FileNotFoundError as exc:
                raise KeyNotFoundError(key, "key not in recency list") from exc

    def traverse(self) -> Iterator[bytes]:
        """
        Yield keys from head to tail (most to least recently used).

        Each step reads one pointer file, so this is O(number of entries).
        Iteration stops at the first empty next pointer.
        """
        key = self.get_next(ANCHOR)
        while key:
            yield key
            key = self.get_next(key)

    def oldest(self) -> bytes:
        """
        Tail key, read straight from the tail anchor.

        Raises KeyNotFoundError if the list is empty.
        """
        key = self.tail
        if not key:
            raise KeyNotFoundError(ANCHOR, "cache is empty")
        return key
