"""
Remote client for the ACL administration API.
"""

from .client import ACLClient, RemoteError

__all__ = ["ACLClient", "RemoteError"]
