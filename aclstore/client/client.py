"""
Async client for the ACL administration API.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..core.logging import LoggerMixin


class RemoteError(Exception):
    """Error response returned by the ACL server."""

    def __init__(self, method: str, url: str, status_code: int, code: str, message: str):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"{method} {url}: {message}")


class ACLClient(LoggerMixin):
    """
    Client for an ACL server.

    Args:
        base_url: URL prefix of all the ACL endpoints, e.g. http://host:8000/acls
        http_client: httpx.AsyncClient to send requests with; one is created
            (and owned) when omitted
        headers: extra headers sent with every request, e.g. Authorization
        timeout: request timeout in seconds for an owned client
    """

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers or {})
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def __aenter__(self) -> "ACLClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self, name: str = "") -> str:
        return f"{self.base_url}/{quote(name, safe='')}"

    async def _request(self, method: str, url: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        response = await self._client.request(method, url, json=json, headers=self.headers)
        if response.is_success:
            return response
        self._raise_remote_error(method, url, response)

    def _raise_remote_error(self, method: str, url: str, response: httpx.Response) -> None:
        code, message = "", response.reason_phrase or f"HTTP {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            code = str(body.get("code", ""))
            message = str(body.get("message") or code or message)
        elif isinstance(body, str):
            message = body
        self.logger.debug(f"{method} {url} failed with {response.status_code}: {message}")
        raise RemoteError(method, url, response.status_code, code, message)

    async def get(self, name: str) -> List[str]:
        """Return the members of the named ACL."""
        response = await self._request("GET", self._url(name))
        return response.json().get("users") or []

    async def set(self, name: str, users: List[str]) -> None:
        """Replace the members of the named ACL."""
        await self._request("PUT", self._url(name), json={"users": list(users)})

    async def add(self, name: str, users: List[str]) -> None:
        """Add users to the named ACL."""
        await self._request("POST", self._url(name), json={"add": list(users)})

    async def remove(self, name: str, users: List[str]) -> None:
        """Remove users from the named ACL."""
        await self._request("POST", self._url(name), json={"remove": list(users)})

    async def acls(self) -> List[str]:
        """Return the names of all ACLs."""
        response = await self._request("GET", self._url())
        return response.json().get("acls") or []
