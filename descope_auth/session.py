"""
Descope Auth SDK Session Assembly

Builds AuthenticationResult and RefreshResponse values from a decoded
response body. Normal sign-in and verification responses carry the refresh
token in the DSR cookie rather than in the body.
"""

from typing import Any, Dict, Mapping, Optional, Union

import httpx

from .errors import DECODE_ERROR, TOKEN_ERROR
from .transport import TransportResponse
from .types import AuthenticationResult, DescopeUser, RefreshResponse

REFRESH_COOKIE_NAME = "DSR"

HeaderTypes = Union[httpx.Headers, Mapping[str, str]]


def extract_refresh_token(headers: HeaderTypes, url: str) -> Optional[str]:
    """
    Extract the refresh token from the Set-Cookie headers of a response.

    Args:
        headers: Response headers, possibly with several Set-Cookie entries
        url: Final URL of the response, used to accept or reject cookies

    Returns:
        The value of the DSR cookie, or None when the server did not set it
    """
    response = httpx.Response(200, headers=headers, request=httpx.Request("GET", url))
    cookies = httpx.Cookies()
    cookies.extract_cookies(response)

    refresh_token = None
    for cookie in cookies.jar:
        if cookie.name == REFRESH_COOKIE_NAME and cookie.value:
            refresh_token = cookie.value
    return refresh_token


def assemble_authentication_result(
    body: Dict[str, Any],
    response: Optional[TransportResponse] = None,
) -> AuthenticationResult:
    """
    Build the result of an authentication call.

    An inline refreshJwt in the body wins; otherwise the DSR cookie of the
    response is used when a response is given.
    """
    session_token = _session_token(body)
    refresh_token = _refresh_token(body, response)

    user_data = body.get("user")
    if user_data is not None and not isinstance(user_data, dict):
        raise DECODE_ERROR.with_message("Invalid user in response")
    try:
        user = DescopeUser.from_dict(user_data) if user_data else None
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DECODE_ERROR.with_cause(e) from e

    return AuthenticationResult(
        session_token=session_token,
        refresh_token=refresh_token,
        user=user,
        is_first_authentication=bool(body.get("firstSeen", False)),
    )


def assemble_refresh_response(
    body: Dict[str, Any],
    response: Optional[TransportResponse] = None,
) -> RefreshResponse:
    """Build the result of a session refresh call."""
    return RefreshResponse(
        session_token=_session_token(body),
        refresh_token=_refresh_token(body, response),
    )


def _session_token(body: Dict[str, Any]) -> str:
    if "sessionJwt" not in body:
        raise DECODE_ERROR.with_message("Missing sessionJwt in response")
    token = body["sessionJwt"]
    if not isinstance(token, str) or not token:
        raise TOKEN_ERROR.with_message("Invalid sessionJwt in response")
    return token


def _refresh_token(body: Dict[str, Any], response: Optional[TransportResponse]) -> Optional[str]:
    inline = body.get("refreshJwt")
    if inline is not None and not isinstance(inline, str):
        raise TOKEN_ERROR.with_message("Invalid refreshJwt in response")
    if inline:
        return inline
    if response is None:
        return None
    return extract_refresh_token(response.headers, response.url)
