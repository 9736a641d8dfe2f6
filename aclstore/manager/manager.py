"""
ACL Manager.

Owns the two-tier permission model: the admin ACL governs itself and every
meta-ACL, and each ordinary ACL ``name`` is governed by its meta-ACL
``_name``. Members of the admin ACL are always allowed.
"""

from typing import List, Optional, Sequence, TYPE_CHECKING

from ..acl.store import ACLLister, ACLStore, CreateOutcome
from ..auth.identity import Authenticator, Identity
from ..core.exceptions import (
    ACLStoreException, BadRequestError, ConfigurationError, ForbiddenError,
    InvalidACLNameError, PermissionCheckError, UnsupportedError
)
from ..core.logging import LoggerMixin
from .naming import ADMIN_ACL, check_acl_name, is_meta_name, meta_name

if TYPE_CHECKING:
    from fastapi import FastAPI


class Manager(LoggerMixin):
    """
    Manages a set of ACLs held in an ACLStore.

    Use :meth:`new_manager` to obtain a ready instance; a Manager built
    directly must be initialized before use.
    """

    def __init__(self, store: ACLStore):
        self.store = store
        self._initialized = False

    @classmethod
    async def new_manager(cls, store: ACLStore, initial_admin_users: Optional[Sequence[str]] = None) -> "Manager":
        """
        Return a Manager for store, making sure the admin ACL exists. The
        admin ACL receives initial_admin_users only when it is first
        created.
        """
        manager = cls(store)
        await manager.initialize(initial_admin_users)
        return manager

    async def initialize(self, initial_admin_users: Optional[Sequence[str]] = None) -> None:
        """Create the admin ACL if it does not exist yet."""
        try:
            outcome = await self.store.create_acl(ADMIN_ACL, list(initial_admin_users or []))
        except ACLStoreException as e:
            self.logger.error(f"Cannot create initial admin ACL: {e.message}")
            raise
        if outcome == CreateOutcome.CREATED:
            self.logger.info(f"Created admin ACL with {len(initial_admin_users or [])} initial users")
        self._initialized = True

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def acl(self, name: str) -> List[str]:
        """Return the members of the named ACL, without any authorization."""
        return await self.store.get(name)

    async def create_acl(self, name: str, *initial_users: str) -> CreateOutcome:
        """
        Create the ACL name and its meta-ACL _name. Members of _name and of
        the admin ACL may change name; only admin members may change _name.
        Names starting with the meta prefix are rejected. Nothing changes
        if name already exists.
        """
        if is_meta_name(name):
            raise InvalidACLNameError(f'invalid ACL name "{name}"')
        outcome = await self.store.create_acl(name, list(initial_users))
        await self.store.create_acl(meta_name(name), [])
        return outcome

    async def authorize(self, identity: Identity, acl_name: str) -> None:
        """
        Check that identity may access acl_name.

        Raises:
            ForbiddenError: if the identity is not in the checking ACL
            ACLNotFoundError: if the checking ACL does not exist
            PermissionCheckError: if the identity could not be checked
        """
        if not self._initialized:
            raise ConfigurationError("ACL manager used before initialization")
        check_name = check_acl_name(acl_name)
        acl = await self.store.get(check_name)
        if check_name != ADMIN_ACL:
            # Admin users always get permission to do anything.
            try:
                admin_acl = await self.store.get(ADMIN_ACL)
            except ACLStoreException as e:
                raise PermissionCheckError(f"cannot get admin ACL: {e.message}", e) from e
            acl = acl + admin_acl
        try:
            allowed = await identity.allow(acl)
        except Exception as e:
            raise PermissionCheckError(f"cannot check permissions: {e}", e) from e
        if not allowed:
            self.logger.warning(f"{identity!r} denied access to ACL {acl_name!r} (checked {check_name!r})")
            raise ForbiddenError()

    async def get_acl(self, name: str) -> List[str]:
        return await self.store.get(name)

    async def set_acl(self, name: str, users: Sequence[str]) -> None:
        await self.store.set(name, users)
        self.logger.info(f"Set members of ACL {name!r}")

    async def modify_acl(self, name: str, add: Optional[Sequence[str]] = None, remove: Optional[Sequence[str]] = None) -> None:
        """Add or remove users; supplying both is a bad request."""
        if add and remove:
            raise BadRequestError("cannot add and remove users at the same time")
        if add:
            await self.store.add(name, add)
            self.logger.info(f"Added {len(add)} users to ACL {name!r}")
        elif remove:
            await self.store.remove(name, remove)
            self.logger.info(f"Removed {len(remove)} users from ACL {name!r}")

    async def list_acls(self) -> List[str]:
        """Return the names of all ACLs, sorted."""
        if not isinstance(self.store, ACLLister):
            raise UnsupportedError("cannot list ACLs")
        return sorted(await self.store.acls())

    def new_handler(self, root_path: str = "", authenticate: Optional[Authenticator] = None) -> "FastAPI":
        """
        Return an ASGI application serving the ACL administration API under
        root_path. Every request is authenticated with authenticate and
        authorized before it reaches its handler.
        """
        from ..api.handler import create_handler

        if authenticate is None:
            raise ValueError("authenticate is required")
        return create_handler(self, root_path=root_path, authenticate=authenticate)
