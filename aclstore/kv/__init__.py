"""
Key-value backends for ACL persistence.
"""

from .base import KeyValueStore, KeyLister, UpdateResult, supports_listing
from .memory import MemoryKVStore
from .sql import SQLKVStore
from .factory import create_kv_store

__all__ = [
    "KeyValueStore",
    "KeyLister",
    "UpdateResult",
    "supports_listing",
    "MemoryKVStore",
    "SQLKVStore",
    "create_kv_store",
]
