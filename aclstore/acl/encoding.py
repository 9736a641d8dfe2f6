"""
Byte encoding of ACL membership.

An ACL value is its canonical member list (sorted, no duplicates) joined
with SEPARATOR. A zero-length value is an ACL with no members; an absent
value is no ACL at all.
"""

import json
from typing import List, Sequence

from ..core.exceptions import BadUsernameError

# Must be a character that is illegal in user names.
SEPARATOR = "\n"


def valid_user(user: str) -> bool:
    """Report whether user is a non-empty UTF-8 encodable name free of the separator."""
    if not isinstance(user, str) or len(user) == 0 or SEPARATOR in user:
        return False
    try:
        user.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _quote(user) -> str:
    quoted = json.dumps(user, ensure_ascii=False, default=repr)
    try:
        quoted.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates are shown escaped.
        quoted = json.dumps(user, default=repr)
    return quoted


def canonical_acl(acl: Sequence[str]) -> List[str]:
    """
    Return acl sorted ascending with duplicates removed.

    Input that is already strictly ascending is returned unchanged (as a
    list) without sorting.
    """
    acl = list(acl)
    if len(acl) < 2:
        return acl
    prev = acl[0]
    for user in acl[1:]:
        if user <= prev:
            break
        prev = user
    else:
        return acl
    acl.sort()
    out = [acl[0]]
    for user in acl[1:]:
        if user != out[-1]:
            out.append(user)
    return out


def encode_acl(acl: Sequence[str]) -> bytes:
    """
    Encode acl in canonical form.

    Raises:
        BadUsernameError: if any member is not a valid user name
    """
    acl = list(acl)
    for user in acl:
        if not valid_user(user):
            raise BadUsernameError(f"invalid user name {_quote(user)}")
    acl = canonical_acl(acl)
    return SEPARATOR.join(acl).encode("utf-8")


def decode_acl(data: bytes) -> List[str]:
    """Decode a stored value into its member list."""
    if not data:
        return []
    return data.decode("utf-8").split(SEPARATOR)
