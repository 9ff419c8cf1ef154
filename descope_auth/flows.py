"""
Descope Auth SDK Flows

Namespace classes implementing each authentication flow family on top of
the client's request pipeline.
"""

import functools
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, TypeVar

from .errors import DECODE_ERROR, INVALID_ARGUMENTS
from .polling import poll_until_complete
from .routes import Flow, Operation
from .types import (
    AuthenticationResult,
    DeliveryMethod,
    DescopeUser,
    EnchantedLinkResponse,
    OAuthProvider,
    PasswordPolicy,
    RefreshResponse,
    SignUpDetails,
    TOTPResponse,
    UpdateOptions,
    delivery_method,
    oauth_provider,
)

if TYPE_CHECKING:
    from .client import DescopeClient

T = TypeVar("T")


def _parse(factory: Callable[[Dict[str, Any]], T], data: Dict[str, Any]) -> T:
    """Build a response value, turning missing or malformed fields into DECODE_ERROR."""
    try:
        return factory(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DECODE_ERROR.with_cause(e) from e


def _masked_address(method: DeliveryMethod) -> Callable[[Dict[str, Any]], str]:
    return lambda data: str(data[delivery_method(method).masked_field])


def _user(details: Optional[SignUpDetails]) -> Dict[str, Any]:
    return details.to_dict() if details else {}


def _update_options(options: Optional[UpdateOptions]) -> Dict[str, Any]:
    return (options or UpdateOptions()).to_dict()


def _require_phone_method(method: DeliveryMethod) -> None:
    method = delivery_method(method)
    if method.user_field != "phone":
        raise INVALID_ARGUMENTS.with_description(
            f"Delivery method {method.value} cannot be used for phone numbers"
        )


class AuthNamespace:
    """Session operations."""

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def me(self, refresh_jwt: str) -> DescopeUser:
        """Get details about the user of an active session."""
        data = await self._client._request(Flow.AUTH, Operation.ME, secret=refresh_jwt)
        return _parse(DescopeUser.from_dict, data)

    async def refresh_session(self, refresh_jwt: str) -> RefreshResponse:
        """Get a new session token using the refresh JWT of an active session."""
        return await self._client._refresh(refresh_jwt)

    async def logout(self, refresh_jwt: str) -> None:
        """Log out from an active session."""
        self._client._log("Logout")
        await self._client._request(Flow.AUTH, Operation.LOGOUT, secret=refresh_jwt)


class OTPNamespace:
    """One time code operations."""

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def sign_up(
        self, method: DeliveryMethod, login_id: str, details: Optional[SignUpDetails] = None
    ) -> str:
        """
        Sign up a new user and send them a code.

        The address matching the delivery method must be given either in
        details or as the login ID itself.

        Returns:
            The masked address the code was sent to
        """
        self._client._log(f"OTP sign up for: {login_id}")
        data = await self._client._request(
            Flow.OTP,
            Operation.SIGN_UP,
            method=method,
            values={"loginId": login_id, "user": _user(details)},
        )
        return _parse(_masked_address(method), data)

    async def sign_in(self, method: DeliveryMethod, login_id: str) -> str:
        """Send a code to an existing user. Returns the masked address."""
        self._client._log(f"OTP sign in for: {login_id}")
        data = await self._client._request(
            Flow.OTP, Operation.SIGN_IN, method=method, values={"loginId": login_id}
        )
        return _parse(_masked_address(method), data)

    async def sign_up_or_in(self, method: DeliveryMethod, login_id: str) -> str:
        """Send a code, creating the user if needed. Returns the masked address."""
        self._client._log(f"OTP sign up or in for: {login_id}")
        data = await self._client._request(
            Flow.OTP, Operation.SIGN_UP_OR_IN, method=method, values={"loginId": login_id}
        )
        return _parse(_masked_address(method), data)

    async def verify(self, method: DeliveryMethod, login_id: str, code: str) -> AuthenticationResult:
        """Verify a code sent with sign_up, sign_in or sign_up_or_in."""
        return await self._client._authenticate(
            Flow.OTP,
            Operation.VERIFY,
            method=method,
            values={"loginId": login_id, "code": code},
        )

    async def update_email(
        self,
        email: str,
        login_id: str,
        refresh_jwt: str,
        options: Optional[UpdateOptions] = None,
    ) -> str:
        """Send a code to a new email address for an existing user."""
        data = await self._client._request(
            Flow.OTP,
            Operation.UPDATE_EMAIL,
            values={"loginId": login_id, "email": email, **_update_options(options)},
            secret=refresh_jwt,
        )
        return _parse(_masked_address(DeliveryMethod.EMAIL), data)

    async def update_phone(
        self,
        phone: str,
        method: DeliveryMethod,
        login_id: str,
        refresh_jwt: str,
        options: Optional[UpdateOptions] = None,
    ) -> str:
        """Send a code to a new phone number for an existing user."""
        _require_phone_method(method)
        data = await self._client._request(
            Flow.OTP,
            Operation.UPDATE_PHONE,
            method=method,
            values={"loginId": login_id, "phone": phone, **_update_options(options)},
            secret=refresh_jwt,
        )
        return _parse(_masked_address(method), data)


class TOTPNamespace:
    """Authenticator app operations."""

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def sign_up(self, login_id: str, details: Optional[SignUpDetails] = None) -> TOTPResponse:
        """Sign up a new user and return the key to add to an authenticator app."""
        data = await self._client._request(
            Flow.TOTP, Operation.SIGN_UP, values={"loginId": login_id, "user": _user(details)}
        )
        return _parse(TOTPResponse.from_dict, data)

    async def update(self, login_id: str, refresh_jwt: str) -> TOTPResponse:
        """Add TOTP to an existing user."""
        data = await self._client._request(
            Flow.TOTP, Operation.UPDATE, values={"loginId": login_id}, secret=refresh_jwt
        )
        return _parse(TOTPResponse.from_dict, data)

    async def verify(self, login_id: str, code: str) -> AuthenticationResult:
        return await self._client._authenticate(
            Flow.TOTP, Operation.VERIFY, values={"loginId": login_id, "code": code}
        )


class MagicLinkNamespace:
    """Magic link operations."""

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def sign_up(
        self,
        method: DeliveryMethod,
        login_id: str,
        details: Optional[SignUpDetails] = None,
        uri: Optional[str] = None,
    ) -> str:
        data = await self._client._request(
            Flow.MAGIC_LINK,
            Operation.SIGN_UP,
            method=method,
            values={"loginId": login_id, "user": _user(details), "uri": uri},
        )
        return _parse(_masked_address(method), data)

    async def sign_in(self, method: DeliveryMethod, login_id: str, uri: Optional[str] = None) -> str:
        data = await self._client._request(
            Flow.MAGIC_LINK,
            Operation.SIGN_IN,
            method=method,
            values={"loginId": login_id, "uri": uri},
        )
        return _parse(_masked_address(method), data)

    async def sign_up_or_in(
        self, method: DeliveryMethod, login_id: str, uri: Optional[str] = None
    ) -> str:
        data = await self._client._request(
            Flow.MAGIC_LINK,
            Operation.SIGN_UP_OR_IN,
            method=method,
            values={"loginId": login_id, "uri": uri},
        )
        return _parse(_masked_address(method), data)

    async def update_email(
        self,
        email: str,
        login_id: str,
        refresh_jwt: str,
        uri: Optional[str] = None,
        options: Optional[UpdateOptions] = None,
    ) -> str:
        data = await self._client._request(
            Flow.MAGIC_LINK,
            Operation.UPDATE_EMAIL,
            values={"loginId": login_id, "email": email, "uri": uri, **_update_options(options)},
            secret=refresh_jwt,
        )
        return _parse(_masked_address(DeliveryMethod.EMAIL), data)

    async def update_phone(
        self,
        phone: str,
        method: DeliveryMethod,
        login_id: str,
        refresh_jwt: str,
        uri: Optional[str] = None,
        options: Optional[UpdateOptions] = None,
    ) -> str:
        _require_phone_method(method)
        data = await self._client._request(
            Flow.MAGIC_LINK,
            Operation.UPDATE_PHONE,
            method=method,
            values={"loginId": login_id, "phone": phone, "uri": uri, **_update_options(options)},
            secret=refresh_jwt,
        )
        return _parse(_masked_address(method), data)

    async def verify(self, token: str) -> AuthenticationResult:
        """Verify the token from a magic link redirect."""
        return await self._client._authenticate(
            Flow.MAGIC_LINK, Operation.VERIFY, values={"token": token}
        )


class EnchantedLinkNamespace:
    """
    Enchanted link operations.

    Starting a sign in returns a pending_ref; the session becomes available
    once the user clicks the emailed link, possibly on another device.
    """

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def sign_up(
        self, login_id: str, details: Optional[SignUpDetails] = None, uri: Optional[str] = None
    ) -> EnchantedLinkResponse:
        data = await self._client._request(
            Flow.ENCHANTED_LINK,
            Operation.SIGN_UP,
            values={"loginId": login_id, "user": _user(details), "uri": uri},
        )
        return _parse(EnchantedLinkResponse.from_dict, data)

    async def sign_in(self, login_id: str, uri: Optional[str] = None) -> EnchantedLinkResponse:
        self._client._log(f"Enchanted link sign in for: {login_id}")
        data = await self._client._request(
            Flow.ENCHANTED_LINK, Operation.SIGN_IN, values={"loginId": login_id, "uri": uri}
        )
        return _parse(EnchantedLinkResponse.from_dict, data)

    async def sign_up_or_in(self, login_id: str, uri: Optional[str] = None) -> EnchantedLinkResponse:
        data = await self._client._request(
            Flow.ENCHANTED_LINK, Operation.SIGN_UP_OR_IN, values={"loginId": login_id, "uri": uri}
        )
        return _parse(EnchantedLinkResponse.from_dict, data)

    async def update_email(
        self,
        email: str,
        login_id: str,
        refresh_jwt: str,
        uri: Optional[str] = None,
        options: Optional[UpdateOptions] = None,
    ) -> EnchantedLinkResponse:
        data = await self._client._request(
            Flow.ENCHANTED_LINK,
            Operation.UPDATE_EMAIL,
            values={"loginId": login_id, "email": email, "uri": uri, **_update_options(options)},
            secret=refresh_jwt,
        )
        return _parse(EnchantedLinkResponse.from_dict, data)

    async def check_for_session(self, pending_ref: str) -> AuthenticationResult:
        """
        Check once whether the link was clicked.

        Raises:
            DescopeError: ENCHANTED_LINK_PENDING while the link wasn't clicked
        """
        return await self._client._authenticate(
            Flow.ENCHANTED_LINK, Operation.PENDING_SESSION, values={"pendingRef": pending_ref}
        )

    async def poll_for_session(
        self, pending_ref: str, timeout: Optional[float] = None
    ) -> AuthenticationResult:
        """
        Wait until the link is clicked.

        Args:
            pending_ref: The pending_ref from an EnchantedLinkResponse
            timeout: Seconds to wait before giving up (default: 120)

        Raises:
            DescopeError: ENCHANTED_LINK_EXPIRED if the timeout expires
        """
        self._client._log("Polling for enchanted link session")
        return await poll_until_complete(
            functools.partial(self.check_for_session, pending_ref),
            timeout=timeout,
            interval=self._client.poll_interval,
        )


class OAuthNamespace:
    """OAuth operations."""

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def start(self, provider: OAuthProvider, redirect_url: Optional[str] = None) -> str:
        """Return the URL to open in a browser to authenticate with the provider."""
        data = await self._client._request(
            Flow.OAUTH,
            Operation.START,
            values={"provider": oauth_provider(provider).value, "redirectURL": redirect_url},
        )
        return _parse(lambda d: str(d["url"]), data)

    async def exchange(self, code: str) -> AuthenticationResult:
        """Exchange the code from the OAuth redirect for a session."""
        return await self._client._authenticate(
            Flow.OAUTH, Operation.EXCHANGE, values={"code": code}
        )


class SSONamespace:
    """SSO (SAML) operations."""

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def start(self, email_or_tenant_name: str, redirect_url: Optional[str] = None) -> str:
        """Return the URL to open in a browser to authenticate with the tenant's IdP."""
        data = await self._client._request(
            Flow.SSO,
            Operation.START,
            values={"tenant": email_or_tenant_name, "redirectURL": redirect_url},
        )
        return _parse(lambda d: str(d["url"]), data)

    async def exchange(self, code: str) -> AuthenticationResult:
        return await self._client._authenticate(
            Flow.SSO, Operation.EXCHANGE, values={"code": code}
        )


class PasswordNamespace:
    """Password operations."""

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def sign_up(
        self, login_id: str, password: str, details: Optional[SignUpDetails] = None
    ) -> AuthenticationResult:
        self._client._log(f"Password sign up for: {login_id}")
        return await self._client._authenticate(
            Flow.PASSWORD,
            Operation.SIGN_UP,
            values={"loginId": login_id, "password": password, "user": _user(details)},
        )

    async def sign_in(self, login_id: str, password: str) -> AuthenticationResult:
        self._client._log(f"Password sign in for: {login_id}")
        return await self._client._authenticate(
            Flow.PASSWORD, Operation.SIGN_IN, values={"loginId": login_id, "password": password}
        )

    async def update(self, login_id: str, new_password: str, refresh_jwt: str) -> None:
        """Set a new password for the user of an active session."""
        await self._client._request(
            Flow.PASSWORD,
            Operation.UPDATE,
            values={"loginId": login_id, "newPassword": new_password},
            secret=refresh_jwt,
        )

    async def replace(self, login_id: str, old_password: str, new_password: str) -> AuthenticationResult:
        """Replace a password using the current one, and sign in."""
        return await self._client._authenticate(
            Flow.PASSWORD,
            Operation.REPLACE,
            values={"loginId": login_id, "oldPassword": old_password, "newPassword": new_password},
        )

    async def send_reset(self, login_id: str, redirect_url: Optional[str] = None) -> None:
        """Send a password reset link or code, depending on project settings."""
        await self._client._request(
            Flow.PASSWORD,
            Operation.SEND_RESET,
            values={"loginId": login_id, "redirectUrl": redirect_url},
        )

    async def get_policy(self) -> PasswordPolicy:
        data = await self._client._request(Flow.PASSWORD, Operation.POLICY)
        return _parse(PasswordPolicy.from_dict, data)


class AccessKeyNamespace:
    """Access key operations."""

    def __init__(self, client: "DescopeClient") -> None:
        self._client = client

    async def exchange(self, access_key: str) -> AuthenticationResult:
        """Exchange an access key for a session token. No refresh token is returned."""
        return await self._client._authenticate(
            Flow.ACCESS_KEY, Operation.EXCHANGE, secret=access_key
        )
