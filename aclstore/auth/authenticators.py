"""
Request authenticators.
"""

import hmac
from typing import Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import AuthenticationFailed, CODE_UNAUTHORIZED
from ..core.logging import LoggerMixin
from .identity import Identity, UserIdentity


def unauthorized_response(message: str) -> JSONResponse:
    """401 response asking for a bearer token."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"code": CODE_UNAUTHORIZED, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


class StaticTokenAuthenticator(LoggerMixin):
    """
    Authenticates ``Authorization: Bearer <token>`` against a fixed
    token -> username mapping.
    """

    def __init__(self, tokens: Dict[str, str]):
        self._tokens = dict(tokens)

    def _lookup(self, token: str):
        for known, username in self._tokens.items():
            if hmac.compare_digest(known.encode("utf-8"), token.encode("utf-8")):
                return username
        return None

    async def __call__(self, request: Request) -> Identity:
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            raise AuthenticationFailed(
                unauthorized_response("Missing or invalid authorization header"),
                "missing bearer token",
            )

        username = self._lookup(auth_header[len("Bearer "):].strip())
        if username is None:
            self.logger.warning(f"Rejected unknown token from {request.client.host if request.client else '-'}")
            raise AuthenticationFailed(
                unauthorized_response("Invalid authentication token"),
                "unknown bearer token",
            )

        return UserIdentity(username)
