"""
ACL manager: naming conventions, authorization and administrative operations.
"""

from .naming import ADMIN_ACL, META_PREFIX, check_acl_name, is_meta_name, meta_name
from .authorization import AuthState, RequestAuthorization
from .manager import Manager

__all__ = [
    "ADMIN_ACL",
    "META_PREFIX",
    "check_acl_name",
    "is_meta_name",
    "meta_name",
    "AuthState",
    "RequestAuthorization",
    "Manager",
]
