"""
ACL storage on top of a key-value backend.

Each ACL is one backend entry keyed by the ACL name. Every mutation is a
single atomic ``update`` on that entry, so concurrent writers to the same
ACL are serialized by the backend and writers to different ACLs never
coordinate.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence

from ..core.exceptions import ACLNotFoundError, KeyNotFoundError, UnsupportedError
from ..core.logging import LoggerMixin
from ..kv.base import KeyValueStore, supports_listing
from .encoding import canonical_acl, decode_acl, encode_acl


class CreateOutcome(Enum):
    """Result of an idempotent ACL creation."""
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class ACLStore(ABC):
    """Persistent storage of ACL membership."""

    @abstractmethod
    async def create_acl(self, name: str, initial_users: Optional[Sequence[str]] = None) -> CreateOutcome:
        """
        Create the ACL with the given initial users. If the ACL already
        exists it is left untouched and initial_users is ignored.

        Raises:
            BadUsernameError: if any initial user is invalid
        """

    @abstractmethod
    async def add(self, name: str, users: Sequence[str]) -> None:
        """
        Add users to the ACL. Users already present are ignored.

        Raises:
            ACLNotFoundError: if the ACL does not exist
            BadUsernameError: if any user is invalid
        """

    @abstractmethod
    async def remove(self, name: str, users: Sequence[str]) -> None:
        """
        Remove users from the ACL. Users not present are ignored.

        Raises:
            ACLNotFoundError: if the ACL does not exist
        """

    @abstractmethod
    async def set(self, name: str, users: Sequence[str]) -> None:
        """
        Replace the members of the ACL.

        Raises:
            ACLNotFoundError: if the ACL does not exist
            BadUsernameError: if any user is invalid
        """

    @abstractmethod
    async def get(self, name: str) -> List[str]:
        """
        Return the members of the ACL sorted ascending.

        Raises:
            ACLNotFoundError: if the ACL does not exist
        """


class ACLLister(ABC):
    """Optional capability: enumerate stored ACLs."""

    @abstractmethod
    async def acls(self) -> List[str]:
        """Return the names of all stored ACLs."""


class KVACLStore(ACLStore, ACLLister, LoggerMixin):
    """ACLStore implementation backed by a KeyValueStore."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    async def acls(self) -> List[str]:
        if not supports_listing(self.kv):
            raise UnsupportedError("cannot list ACLs")
        return await self.kv.keys()

    async def create_acl(self, name: str, initial_users: Optional[Sequence[str]] = None) -> CreateOutcome:
        initial_users = list(initial_users or [])

        def create(old: Optional[bytes]) -> Optional[bytes]:
            if old is not None:
                return None
            return encode_acl(initial_users)

        result = await self.kv.update(name, create)
        if not result.written:
            self.logger.debug(f"ACL {name!r} already exists")
            return CreateOutcome.ALREADY_EXISTS
        self.logger.info(f"Created ACL {name!r} with {len(canonical_acl(initial_users))} members")
        return CreateOutcome.CREATED

    async def add(self, name: str, users: Sequence[str]) -> None:
        users = list(users)

        def add(old: Optional[bytes]) -> Optional[bytes]:
            if old is None:
                raise ACLNotFoundError()
            return encode_acl(decode_acl(old) + users)

        await self.kv.update(name, add)
        self.logger.debug(f"Added {len(users)} users to ACL {name!r}")

    async def remove(self, name: str, users: Sequence[str]) -> None:
        removed = set(users)

        def remove(old: Optional[bytes]) -> Optional[bytes]:
            if old is None:
                raise ACLNotFoundError()
            return encode_acl([user for user in decode_acl(old) if user not in removed])

        await self.kv.update(name, remove)
        self.logger.debug(f"Removed {len(removed)} users from ACL {name!r}")

    async def set(self, name: str, users: Sequence[str]) -> None:
        value = encode_acl(users)

        def replace(old: Optional[bytes]) -> Optional[bytes]:
            if old is None:
                raise ACLNotFoundError()
            return value

        await self.kv.update(name, replace)
        self.logger.debug(f"Set ACL {name!r}")

    async def get(self, name: str) -> List[str]:
        try:
            value = await self.kv.get(name)
        except KeyNotFoundError:
            raise ACLNotFoundError()
        return decode_acl(value)
