"""
Shared test configuration and fixtures.
"""
import pytest
import httpx
from fastapi import Request

from aclstore.acl.store import KVACLStore
from aclstore.auth.authenticators import unauthorized_response
from aclstore.auth.identity import UserIdentity
from aclstore.core.exceptions import AuthenticationFailed
from aclstore.kv.memory import MemoryKVStore
from aclstore.manager.manager import Manager


@pytest.fixture
def kv():
    """Fresh in-memory key-value store."""
    return MemoryKVStore()


@pytest.fixture
def store(kv):
    """ACL store over the in-memory backend."""
    return KVACLStore(kv)


@pytest.fixture
async def manager(store):
    """Initialized manager whose admin ACL contains 'bob'."""
    return await Manager.new_manager(store, ["bob"])


class HeaderAuthenticator:
    """
    Authenticates the user named in the X-User header and records the ACL
    members each resulting identity was checked against.
    """

    def __init__(self):
        self.checked = []

    async def __call__(self, request: Request):
        user = request.headers.get("X-User")
        if not user:
            raise AuthenticationFailed(unauthorized_response("no user"), "no X-User header")
        authenticator = self

        class RecordingIdentity(UserIdentity):
            async def allow(self, acl):
                authenticator.checked.append(list(acl))
                return await super().allow(acl)

        return RecordingIdentity(user)


@pytest.fixture
def authenticator():
    return HeaderAuthenticator()


@pytest.fixture
async def api(manager, authenticator):
    """HTTP client talking to the ACL handler mounted under /acls."""
    app = manager.new_handler(root_path="/acls", authenticate=authenticator)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
