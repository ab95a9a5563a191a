"""
Configuration classes for the directory-backed LRU cache.

Every file name the cache uses is spelled out here so the on-disk layout
is inspectable in one place. Defaults reproduce the standard layout:

    <root>/.lru          state marker
    <root>/.lrulock      backing file for the cross-process lock
    <root>/<name>        entry file (raw value bytes)
    <root>/<name>~next   key of the next (less recently used) entry
    <root>/<name>~prev   key of the previous (more recently used) entry
    <root>/~next         head anchor
    <root>/~prev         tail anchor
"""

from dataclasses import dataclass


@dataclass
class CacheConfig:
    """
    Configuration for a cache directory.

    Changing any of the names produces a directory that other tools using
    the default layout will not recognise, so only override them for
    isolated caches.
    """
    # State marker written once at creation, parsed at open
    state_filename: str = ".lru"

    # Backing file for the FileLock handed out as Cache.lock
    lock_filename: str = ".lrulock"

    # Pointer file suffixes appended to the encoded key
    next_suffix: str = "~next"
    prev_suffix: str = "~prev"

    # Default timeout for Cache.locked(), in seconds (-1 = wait forever)
    lock_timeout: float = -1


@dataclass
class CacheState:
    """
    Record stored in the state file.

    Its presence (and parseability) is what marks a directory as a cache.
    """
    version: int = 1
