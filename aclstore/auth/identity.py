"""
Authenticated identities.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Iterable, List, Sequence

from fastapi import Request


class Identity(ABC):
    """An authenticated caller."""

    @abstractmethod
    async def allow(self, acl: Sequence[str]) -> bool:
        """
        Report whether this identity matches any of the users or groups
        in acl. Errors are raised, never reported as a denial.
        """


class UserIdentity(Identity):
    """A named user, optionally belonging to groups."""

    def __init__(self, username: str, groups: Iterable[str] = ()):
        self.username = username
        self.groups: List[str] = list(groups)

    async def allow(self, acl: Sequence[str]) -> bool:
        members = set(acl)
        if self.username in members:
            return True
        return any(group in members for group in self.groups)

    def __repr__(self) -> str:
        return f"<UserIdentity(username='{self.username}', groups={self.groups})>"


# An authenticator turns a request into an Identity. When it cannot, it
# raises AuthenticationFailed carrying the response to send back.
Authenticator = Callable[[Request], Awaitable[Identity]]
