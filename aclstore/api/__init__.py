"""
HTTP protocol adapter for the ACL manager.
"""

from .handler import create_handler, create_router, normalize_root_path
from .schemas import GetACLResponse, GetACLsResponse, ModifyACLRequest, SetACLRequest

__all__ = [
    "create_handler",
    "create_router",
    "normalize_root_path",
    "GetACLResponse",
    "GetACLsResponse",
    "ModifyACLRequest",
    "SetACLRequest",
]
