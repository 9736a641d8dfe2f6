"""
ACL storage: membership encoding and race-safe CRUD.
"""

from .encoding import SEPARATOR, canonical_acl, decode_acl, encode_acl, valid_user
from .store import ACLLister, ACLStore, CreateOutcome, KVACLStore

__all__ = [
    "SEPARATOR",
    "canonical_acl",
    "decode_acl",
    "encode_acl",
    "valid_user",
    "ACLLister",
    "ACLStore",
    "CreateOutcome",
    "KVACLStore",
]
