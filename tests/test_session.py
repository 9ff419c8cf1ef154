"""
Tests for Descope Auth SDK session assembly
"""

import httpx
import pytest

from descope_auth.errors import DECODE_ERROR, TOKEN_ERROR, DescopeError
from descope_auth.session import (
    assemble_authentication_result,
    assemble_refresh_response,
    extract_refresh_token,
)
from descope_auth.transport import TransportResponse


URL = "https://api.descope.com/v1/auth/otp/verify/email"


def make_response(*set_cookies, url=URL):
    headers = httpx.Headers([("Set-Cookie", value) for value in set_cookies])
    return TransportResponse(status_code=200, content=b"{}", headers=headers, url=url)


# =============================================================================
# Cookie Extraction Tests
# =============================================================================

class TestExtractRefreshToken:
    """Reading the DSR cookie from Set-Cookie headers."""

    def test_single_cookie(self):
        response = make_response("DSR=abc123; Path=/")
        assert extract_refresh_token(response.headers, response.url) == "abc123"

    def test_no_cookie(self):
        response = make_response()
        assert extract_refresh_token(response.headers, response.url) is None

    def test_other_cookies_ignored(self):
        response = make_response("DS=session; Path=/", "theme=dark; Path=/")
        assert extract_refresh_token(response.headers, response.url) is None

    def test_among_several_cookies(self):
        response = make_response(
            "DS=session; Path=/; HttpOnly",
            "DSR=refresh-token; Path=/; HttpOnly; Secure",
        )
        assert extract_refresh_token(response.headers, response.url) == "refresh-token"

    def test_name_is_case_sensitive(self):
        response = make_response("dsr=lowercase; Path=/")
        assert extract_refresh_token(response.headers, response.url) is None

    def test_plain_mapping_headers(self):
        headers = {"set-cookie": "DSR=from-mapping; Path=/"}
        assert extract_refresh_token(headers, URL) == "from-mapping"


# =============================================================================
# Authentication Result Tests
# =============================================================================

class TestAssembleAuthenticationResult:
    """Building AuthenticationResult values."""

    def test_first_seen_without_cookie(self):
        result = assemble_authentication_result({"sessionJwt": "s", "firstSeen": True})

        assert result.session_token == "s"
        assert result.refresh_token is None
        assert result.is_first_authentication is True
        assert result.user is None

    def test_refresh_from_cookie(self):
        response = make_response("DSR=cookie-refresh; Path=/")
        result = assemble_authentication_result({"sessionJwt": "s"}, response)

        assert result.refresh_token == "cookie-refresh"
        assert result.is_first_authentication is False

    def test_inline_refresh_wins(self):
        response = make_response("DSR=cookie-refresh; Path=/")
        result = assemble_authentication_result(
            {"sessionJwt": "s", "refreshJwt": "inline-refresh"}, response
        )

        assert result.refresh_token == "inline-refresh"

    def test_with_user(self):
        body = {
            "sessionJwt": "s",
            "user": {
                "userId": "U123",
                "loginIds": ["a@example.com", "a@example.com", "+15551234567"],
                "name": "Alex",
                "email": "a@example.com",
                "verifiedEmail": True,
            },
        }

        result = assemble_authentication_result(body)

        assert result.user is not None
        assert result.user.user_id == "U123"
        assert result.user.login_ids == ("a@example.com", "+15551234567")
        assert result.user.email_verified is True

    def test_missing_session_token(self):
        with pytest.raises(DescopeError) as exc_info:
            assemble_authentication_result({"refreshJwt": "r"})

        assert exc_info.value == DECODE_ERROR

    def test_empty_session_token(self):
        with pytest.raises(DescopeError) as exc_info:
            assemble_authentication_result({"sessionJwt": ""})

        assert exc_info.value == TOKEN_ERROR

    def test_non_string_session_token(self):
        with pytest.raises(DescopeError) as exc_info:
            assemble_authentication_result({"sessionJwt": 42})

        assert exc_info.value == TOKEN_ERROR

    @pytest.mark.parametrize("user", ["oops", ["U123"], 7])
    def test_non_object_user(self, user):
        with pytest.raises(DescopeError) as exc_info:
            assemble_authentication_result({"sessionJwt": "s", "user": user})

        assert exc_info.value == DECODE_ERROR

    def test_malformed_login_ids(self):
        body = {"sessionJwt": "s", "user": {"userId": "U1", "loginIds": [{"id": "a"}]}}

        with pytest.raises(DescopeError) as exc_info:
            assemble_authentication_result(body)

        assert exc_info.value == DECODE_ERROR

    @pytest.mark.parametrize("refresh", [123, ["r"], {"jwt": "r"}])
    def test_non_string_inline_refresh(self, refresh):
        with pytest.raises(DescopeError) as exc_info:
            assemble_authentication_result({"sessionJwt": "s", "refreshJwt": refresh})

        assert exc_info.value == TOKEN_ERROR

    def test_malformed_user(self):
        with pytest.raises(DescopeError) as exc_info:
            assemble_authentication_result({"sessionJwt": "s", "user": {"name": "no id"}})

        assert exc_info.value == DECODE_ERROR


# =============================================================================
# Refresh Response Tests
# =============================================================================

class TestAssembleRefreshResponse:

    def test_rotated_refresh_cookie(self):
        response = make_response("DSR=rotated; Path=/")
        refreshed = assemble_refresh_response({"sessionJwt": "new-session"}, response)

        assert refreshed.session_token == "new-session"
        assert refreshed.refresh_token == "rotated"

    def test_no_rotation(self):
        refreshed = assemble_refresh_response({"sessionJwt": "new-session"}, make_response())
        assert refreshed.refresh_token is None
