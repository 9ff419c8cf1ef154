"""
Descope Auth SDK Transport

The client reaches the network only through the Transport interface, so
applications can supply their own HTTP stack. HttpxTransport is the default.
"""

from dataclasses import dataclass
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx


@dataclass(frozen=True)
class TransportResponse:
    """Raw result of a request that reached the server."""

    status_code: int
    content: bytes
    headers: httpx.Headers
    url: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """
    HTTP transport interface for custom implementations.

    Implementations raise httpx.RequestError (or a subclass) when no
    response could be obtained.
    """

    async def execute(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        params: Optional[Dict[str, Any]] = None,
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        """Perform a request and return the raw response."""
        ...

    async def aclose(self) -> None:
        """Release any connections held by the transport."""
        ...


class HttpxTransport:
    """Transport backed by httpx.AsyncClient."""

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None) -> None:
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            # refresh cookies are read per response, never stored or replayed
            no_cookies = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
            self._client = httpx.AsyncClient(timeout=self._timeout, cookies=no_cookies)
        return self._client

    async def execute(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        params: Optional[Dict[str, Any]] = None,
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        client = self._get_client()
        response = await client.request(
            method=method,
            url=url,
            headers=headers,
            params=params,
            content=content,
        )
        client.cookies.clear()
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=response.headers,
            url=str(response.url),
        )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
