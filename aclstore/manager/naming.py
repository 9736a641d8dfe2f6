"""
ACL naming conventions.
"""

# Name of the ACL that governs itself and every meta-ACL.
ADMIN_ACL = "admin"

# Prefix reserved for meta-ACLs.
META_PREFIX = "_"


def meta_name(acl_name: str) -> str:
    """Name of the ACL that guards membership of acl_name."""
    return META_PREFIX + acl_name


def is_meta_name(acl_name: str) -> bool:
    return acl_name.startswith(META_PREFIX)


def check_acl_name(acl_name: str) -> str:
    """
    Name of the ACL whose members may access acl_name. The admin ACL and
    all meta-ACLs are checked against the admin ACL; every other ACL
    against its meta-ACL.
    """
    if acl_name == ADMIN_ACL or is_meta_name(acl_name):
        return ADMIN_ACL
    return meta_name(acl_name)
