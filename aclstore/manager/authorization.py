"""
Per-request authorization flow.

    UNAUTHENTICATED -> AUTHENTICATING -> AUTHORIZING -> AUTHORIZED
                             |                |
                             +-> AUTH_FAILED  +-> DENIED
                                              +-> CHECK_FAILED
"""

from enum import Enum
from typing import Optional, TYPE_CHECKING

from fastapi import Request

from ..auth.identity import Authenticator, Identity
from ..core.exceptions import BadRequestError, ForbiddenError
from ..core.logging import LoggerMixin

if TYPE_CHECKING:
    from .manager import Manager


class AuthState(Enum):
    """Authorization states of a single request."""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHORIZING = "authorizing"
    AUTHORIZED = "authorized"
    DENIED = "denied"
    AUTH_FAILED = "auth_failed"
    CHECK_FAILED = "check_failed"


TERMINAL_STATES = frozenset({
    AuthState.AUTHORIZED, AuthState.DENIED, AuthState.AUTH_FAILED, AuthState.CHECK_FAILED
})


class RequestAuthorization(LoggerMixin):
    """Runs one request through authentication and authorization."""

    def __init__(self, manager: "Manager", authenticate: Authenticator, acl_name: str):
        self.manager = manager
        self.authenticate = authenticate
        self.acl_name = acl_name
        self.state = AuthState.UNAUTHENTICATED
        self.identity: Optional[Identity] = None

    async def run(self, request: Request) -> Identity:
        """
        Authenticate the request and authorize it against acl_name.

        Raises:
            AuthenticationFailed: the authenticator has prepared its own response
            ForbiddenError: the identity may not access the ACL
        """
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"authorization already finished in state {self.state.value}")
        if not self.acl_name:
            raise BadRequestError("empty ACL name")

        self.state = AuthState.AUTHENTICATING
        try:
            identity = await self.authenticate(request)
        except Exception:
            self.state = AuthState.AUTH_FAILED
            raise

        self.state = AuthState.AUTHORIZING
        self.identity = identity
        try:
            await self.manager.authorize(identity, self.acl_name)
        except ForbiddenError:
            self.state = AuthState.DENIED
            raise
        except Exception:
            # The check ACL is missing or the check itself failed.
            self.state = AuthState.CHECK_FAILED
            raise

        self.state = AuthState.AUTHORIZED
        return identity
