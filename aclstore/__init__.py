"""
ACL store: named access-control lists in a key-value backend, with an
authorization manager and an HTTP administration API.
"""

from .acl import ACLLister, ACLStore, CreateOutcome, KVACLStore
from .auth import Identity, UserIdentity
from .kv import KeyLister, KeyValueStore, MemoryKVStore, SQLKVStore
from .manager import ADMIN_ACL, Manager

__version__ = "0.1.0"

__all__ = [
    "ACLLister",
    "ACLStore",
    "ADMIN_ACL",
    "CreateOutcome",
    "Identity",
    "KVACLStore",
    "KeyLister",
    "KeyValueStore",
    "Manager",
    "MemoryKVStore",
    "SQLKVStore",
    "UserIdentity",
]
