"""
Exceptions raised by the cache.

Filesystem failures other than a missing entry or pointer file are not
wrapped: they surface as the OSError the operating system produced.
"""


class LRUDirError(Exception):
    """Base class for all cache errors."""


class InvalidKeyError(LRUDirError, ValueError):
    """The empty key was passed where a user key is required."""


class KeyNotFoundError(LRUDirError, KeyError):
    """An entry or pointer file is absent, or the cache is empty."""

    def __init__(self, key: bytes, message: str = "key not found"):
        super().__init__(key)
        self.key = key
        self.message = message

    def __str__(self) -> str:
        return f"{self.message}: {self.key!r}"


class NotACacheError(LRUDirError):
    """The directory has no valid, parseable state marker."""


class LockError(LRUDirError):
    """The cross-process lock could not be provisioned or acquired."""
