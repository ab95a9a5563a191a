"""
On-disk storage components for the cache.

Components:
- EntryStore: one file per key holding the raw value bytes
- RecencyList: doubly linked list of keys kept as per-key pointer files
"""

from .entry_store import EntryStore
from .recency_list import RecencyList

__all__ = [
    "EntryStore",
    "RecencyList",
]
