"""
Tests for Descope Auth SDK route table
"""

import pytest

from descope_auth.routes import ROUTES, Authorization, Flow, Operation, Route, resolve
from descope_auth.types import DeliveryMethod


# =============================================================================
# Route Table Tests
# =============================================================================

class TestRouteTable:
    """The fixed (flow, operation) to endpoint mapping."""

    @pytest.mark.parametrize("flow,operation,path", [
        (Flow.OTP, Operation.SIGN_IN, "otp/signin/{method}"),
        (Flow.OTP, Operation.SIGN_UP_OR_IN, "otp/signup-in/{method}"),
        (Flow.OTP, Operation.VERIFY, "otp/verify/{method}"),
        (Flow.TOTP, Operation.SIGN_UP, "totp/signup"),
        (Flow.MAGIC_LINK, Operation.VERIFY, "magiclink/verify"),
        (Flow.ENCHANTED_LINK, Operation.PENDING_SESSION, "enchantedlink/pending-session"),
        (Flow.OAUTH, Operation.START, "oauth/authorize"),
        (Flow.SSO, Operation.EXCHANGE, "saml/exchange"),
        (Flow.PASSWORD, Operation.POLICY, "password/policy"),
        (Flow.ACCESS_KEY, Operation.EXCHANGE, "accesskey/exchange"),
        (Flow.AUTH, Operation.REFRESH, "refresh"),
    ])
    def test_paths(self, flow, operation, path):
        assert resolve(flow, operation).path == path

    def test_update_routes_use_refresh_jwt(self):
        """Test every update route is authorized by the refresh JWT."""
        updates = [
            route for (_, operation), route in ROUTES.items()
            if operation in (Operation.UPDATE, Operation.UPDATE_EMAIL, Operation.UPDATE_PHONE)
        ]

        assert len(updates) == 7
        assert all(route.authorization is Authorization.REFRESH_JWT for route in updates)

    def test_access_key_route(self):
        route = resolve(Flow.ACCESS_KEY, Operation.EXCHANGE)

        assert route.authorization is Authorization.ACCESS_KEY
        assert route.fields == ()

    def test_only_access_key_uses_access_key_authorization(self):
        keyed = [key for key, route in ROUTES.items() if route.authorization is Authorization.ACCESS_KEY]
        assert keyed == [(Flow.ACCESS_KEY, Operation.EXCHANGE)]

    def test_start_routes_use_query(self):
        assert resolve(Flow.OAUTH, Operation.START).query
        assert resolve(Flow.SSO, Operation.START).query
        assert not resolve(Flow.OTP, Operation.SIGN_IN).query

    def test_session_routes(self):
        """Test routes that return a session are marked to read the refresh cookie."""
        assert resolve(Flow.OTP, Operation.VERIFY).session
        assert resolve(Flow.ENCHANTED_LINK, Operation.PENDING_SESSION).session
        assert resolve(Flow.AUTH, Operation.REFRESH).session
        assert not resolve(Flow.OTP, Operation.SIGN_IN).session

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ROUTES[(Flow.OTP, Operation.LOGOUT)] = Route("POST", "x")  # type: ignore[index]

    def test_unknown_route(self):
        with pytest.raises(KeyError, match="No route for otp.policy"):
            resolve(Flow.OTP, Operation.POLICY)


# =============================================================================
# Route Tests
# =============================================================================

class TestRoute:

    def test_path_for_delivery_method(self):
        route = resolve(Flow.OTP, Operation.SIGN_IN)

        assert route.needs_delivery_method
        assert route.path_for(DeliveryMethod.SMS) == "otp/signin/sms"
        assert route.path_for(DeliveryMethod.WHATSAPP) == "otp/signin/whatsapp"

    def test_path_for_accepts_raw_value(self):
        route = resolve(Flow.MAGIC_LINK, Operation.SIGN_IN)
        assert route.path_for("email") == "magiclink/signin/email"  # type: ignore[arg-type]

    def test_path_for_missing_method(self):
        with pytest.raises(ValueError):
            resolve(Flow.OTP, Operation.VERIFY).path_for(None)

    def test_path_without_method(self):
        route = resolve(Flow.TOTP, Operation.VERIFY)

        assert not route.needs_delivery_method
        assert route.path_for(DeliveryMethod.EMAIL) == "totp/verify"

    def test_payload_drops_none(self):
        route = resolve(Flow.MAGIC_LINK, Operation.SIGN_IN)
        assert route.payload({"loginId": "a@example.com", "uri": None}) == {"loginId": "a@example.com"}

    def test_payload_keeps_false_and_empty(self):
        route = resolve(Flow.OTP, Operation.UPDATE_EMAIL)
        payload = route.payload({
            "loginId": "a",
            "email": "b@example.com",
            "addToLoginIDs": False,
            "onMergeUseExisting": False,
        })

        assert payload["addToLoginIDs"] is False
        assert payload["onMergeUseExisting"] is False

    def test_payload_rejects_unknown_field(self):
        route = resolve(Flow.OTP, Operation.SIGN_IN)
        with pytest.raises(ValueError, match="does not accept"):
            route.payload({"loginId": "a", "password": "secret"})
