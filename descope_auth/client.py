"""
Descope Auth SDK Client

Asynchronous client for the Descope authentication API. Each flow family is
exposed as a namespace attribute (client.otp, client.enchanted_link, ...);
the client itself owns the request pipeline shared by all of them.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlparse

import httpx

from .errors import (
    DECODE_ERROR,
    ENCODE_ERROR,
    INVALID_ARGUMENTS,
    MISSING_ACCESS_KEY,
    MISSING_ARGUMENTS,
    error_from_response,
    error_from_transport_failure,
)
from .flows import (
    AccessKeyNamespace,
    AuthNamespace,
    EnchantedLinkNamespace,
    MagicLinkNamespace,
    OAuthNamespace,
    OTPNamespace,
    PasswordNamespace,
    SSONamespace,
    TOTPNamespace,
)
from .routes import BASE_PATH, Authorization, Flow, Operation, Route, resolve
from .session import assemble_authentication_result, assemble_refresh_response
from .transport import HttpxTransport, Transport, TransportResponse
from .types import (
    AuthenticationResult,
    DeliveryMethod,
    DescopeConfig,
    RefreshResponse,
    delivery_method,
)


logger = logging.getLogger("descope_auth")

SDK_NAME = "python"
SDK_VERSION = "0.1.0"


class DescopeClient:
    """
    Descope Auth Client - SDK entry point.

    Calls are independent of each other; the client keeps no session state.
    Use it as an async context manager, or call close() when done.
    """

    def __init__(self, config: DescopeConfig) -> None:
        """Initialize the Descope Auth client."""
        self._validate_config(config)

        self._project_id = config.project_id
        self._base_url = config.base_url.rstrip("/")
        self._timeout = config.timeout
        self._poll_interval = config.poll_interval
        self._debug = config.debug
        self._custom_headers = config.headers or {}

        # Transport (a default one is owned and closed by the client)
        self._owns_transport = config.transport is None
        self._transport: Transport = config.transport or HttpxTransport(timeout=self._timeout)

        # Namespaces
        self.auth = AuthNamespace(self)
        self.otp = OTPNamespace(self)
        self.totp = TOTPNamespace(self)
        self.magic_link = MagicLinkNamespace(self)
        self.enchanted_link = EnchantedLinkNamespace(self)
        self.oauth = OAuthNamespace(self)
        self.sso = SSONamespace(self)
        self.password = PasswordNamespace(self)
        self.access_key = AccessKeyNamespace(self)

        self._log(f"DescopeClient initialized (base_url={self._base_url})")

    def _validate_config(self, config: DescopeConfig) -> None:
        """Validate configuration."""
        if not config.project_id:
            raise MISSING_ARGUMENTS.with_description("project_id is required")
        if urlparse(config.base_url).scheme not in ("http", "https"):
            raise INVALID_ARGUMENTS.with_description(
                "Invalid base_url. Expected an http or https URL"
            )
        if config.poll_interval < 0:
            raise INVALID_ARGUMENTS.with_description("poll_interval must not be negative")

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[Descope] {message}", *args)

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    # =========================================================================
    # Request Pipeline
    # =========================================================================

    async def _request(
        self,
        flow: Flow,
        operation: Operation,
        *,
        method: Optional[DeliveryMethod] = None,
        values: Optional[Mapping[str, Any]] = None,
        secret: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Call a route and return its decoded body."""
        _, data, _ = await self._send(flow, operation, method=method, values=values, secret=secret)
        return data

    async def _authenticate(
        self,
        flow: Flow,
        operation: Operation,
        *,
        method: Optional[DeliveryMethod] = None,
        values: Optional[Mapping[str, Any]] = None,
        secret: Optional[str] = None,
    ) -> AuthenticationResult:
        """Call a route whose response is an authenticated session."""
        route, data, response = await self._send(
            flow, operation, method=method, values=values, secret=secret
        )
        return assemble_authentication_result(data, response if route.session else None)

    async def _refresh(self, refresh_jwt: str) -> RefreshResponse:
        route, data, response = await self._send(
            Flow.AUTH, Operation.REFRESH, secret=refresh_jwt
        )
        return assemble_refresh_response(data, response if route.session else None)

    async def _send(
        self,
        flow: Flow,
        operation: Operation,
        *,
        method: Optional[DeliveryMethod] = None,
        values: Optional[Mapping[str, Any]] = None,
        secret: Optional[str] = None,
    ) -> Tuple[Route, Dict[str, Any], TransportResponse]:
        route = resolve(flow, operation)
        payload = route.payload(values or {})
        if method is not None:
            method = delivery_method(method)

        url = f"{self._base_url}/{BASE_PATH}/{route.path_for(method)}"
        headers = self._build_headers(route, secret)
        params: Optional[Dict[str, Any]] = None
        content: Optional[bytes] = None
        if route.query:
            params = payload
        elif route.fields:
            content = self._encode(payload)

        response = await self._execute_request(route, url, headers, params, content)
        return route, self._decode(response), response

    def _build_headers(self, route: Route, secret: Optional[str]) -> Dict[str, str]:
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "x-descope-sdk-name": SDK_NAME,
            "x-descope-sdk-version": SDK_VERSION,
            **self._custom_headers,
            "Authorization": f"Bearer {self._project_id}",
        }

        if route.authorization is Authorization.ACCESS_KEY:
            if not secret:
                raise MISSING_ACCESS_KEY.with_description("An access key is required")
            headers["Authorization"] = f"Bearer {self._project_id}:{secret}"
        elif route.authorization is Authorization.REFRESH_JWT:
            if not secret:
                raise MISSING_ARGUMENTS.with_description("A refresh JWT is required")
            headers["Authorization"] = f"Bearer {self._project_id}:{secret}"

        return headers

    def _encode(self, payload: Dict[str, Any]) -> bytes:
        try:
            return json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise ENCODE_ERROR.with_cause(e) from e

    async def _execute_request(
        self,
        route: Route,
        url: str,
        headers: Dict[str, str],
        params: Optional[Dict[str, Any]],
        content: Optional[bytes],
    ) -> TransportResponse:
        """Execute a single HTTP request."""
        self._log(f"{route.http_method} {route.path}")
        try:
            response = await self._transport.execute(
                route.http_method,
                url,
                headers=headers,
                params=params,
                content=content,
            )
        except httpx.RequestError as e:
            self._log(f"{route.path} failed to connect: {e}")
            raise error_from_transport_failure(e) from e

        if not response.is_success:
            error = error_from_response(response.status_code, response.content)
            self._log(f"{route.path} failed with {error.code} (HTTP {response.status_code})")
            raise error

        return response

    def _decode(self, response: TransportResponse) -> Dict[str, Any]:
        """Decode a successful response body."""
        if not response.content.strip():
            return {}
        try:
            data = json.loads(response.content)
        except ValueError as e:
            raise DECODE_ERROR.with_cause(e) from e
        if not isinstance(data, dict):
            raise DECODE_ERROR.with_message("Expected a JSON object in response")
        return data

    async def close(self) -> None:
        """Close the HTTP transport if it was created by the client."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "DescopeClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


# =============================================================================
# Factory Functions
# =============================================================================

def create_descope_client(config: DescopeConfig) -> DescopeClient:
    """Create a new Descope client."""
    return DescopeClient(config)
