"""
EntryStore: value files, one per key.

The store knows nothing about recency. It only maps a key to the file
named by the key codec and moves bytes in and out of it. There is no
locking; callers serialise access.
"""

import logging
from pathlib import Path
from typing import Optional

from ..codec import KeyCodec
from ..errors import KeyNotFoundError

logger = logging.getLogger(__name__)


class EntryStore:
    """
    Reads and writes entry files under a cache directory.

    Example:
        store = EntryStore(Path("/tmp/cache"))
        store.write(b"k", b"v")
        store.read(b"k")   # b"v"
        store.remove(b"k")
    """

    def __init__(self, directory: Path, codec: Optional[KeyCodec] = None):
        self.directory = Path(directory)
        self.codec = codec or KeyCodec()

    def path(self, key: bytes) -> Path:
        """Path of the entry file for key, whether or not it exists."""
        return self.directory / self.codec.encode(key)

    def write(self, key: bytes, value: bytes) -> None:
        """Persist value for key, replacing any previous value."""
        path = self.path(key)
        path.write_bytes(value)
        logger.debug("wrote %d bytes to %s", len(value), path.name)

    def read(self, key: bytes) -> bytes:
        """
        Return the stored value.

        Raises KeyNotFoundError if there is no entry file for key.
        """
        try:
            return self.path(key).read_bytes()
        except FileNotFoundError as exc:
            raise KeyNotFoundError(key) from exc

    def remove(self, key: bytes) -> None:
        """
        Delete the entry file.

        Raises KeyNotFoundError if there is no entry file for key.
        """
        path = self.path(key)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise KeyNotFoundError(key) from exc
        logger.debug("removed entry %s", path.name)

    def exists(self, key: bytes) -> bool:
        """True if key has an entry file."""
        return self.path(key).is_file()
