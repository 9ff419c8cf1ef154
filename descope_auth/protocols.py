"""
Descope Auth SDK Capability Interfaces

One interface per authentication flow family. DescopeClient exposes an
implementation of each as an attribute (client.otp, client.magic_link, ...).
"""

from typing import Optional, Protocol, runtime_checkable

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
)


@runtime_checkable
class DescopeAuth(Protocol):
    """General session operations."""

    async def me(self, refresh_jwt: str) -> DescopeUser:
        """Get details about the user of an active session."""
        ...

    async def refresh_session(self, refresh_jwt: str) -> RefreshResponse:
        """Get a new session token for an active session."""
        ...

    async def logout(self, refresh_jwt: str) -> None:
        """Log out from an active session."""
        ...


@runtime_checkable
class DescopeOTP(Protocol):
    """
    Authenticate with a one time code sent via a delivery method.

    Sign up/in calls return the masked address the code was sent to; the
    code is then checked with verify.
    """

    async def sign_up(
        self, method: DeliveryMethod, login_id: str, details: Optional[SignUpDetails] = None
    ) -> str:
        ...

    async def sign_in(self, method: DeliveryMethod, login_id: str) -> str:
        ...

    async def sign_up_or_in(self, method: DeliveryMethod, login_id: str) -> str:
        ...

    async def verify(self, method: DeliveryMethod, login_id: str, code: str) -> AuthenticationResult:
        ...

    async def update_email(
        self, email: str, login_id: str, refresh_jwt: str, options: Optional[UpdateOptions] = None
    ) -> str:
        ...

    async def update_phone(
        self,
        phone: str,
        method: DeliveryMethod,
        login_id: str,
        refresh_jwt: str,
        options: Optional[UpdateOptions] = None,
    ) -> str:
        ...


@runtime_checkable
class DescopeTOTP(Protocol):
    """Authenticate with codes from an authenticator app."""

    async def sign_up(self, login_id: str, details: Optional[SignUpDetails] = None) -> TOTPResponse:
        ...

    async def update(self, login_id: str, refresh_jwt: str) -> TOTPResponse:
        ...

    async def verify(self, login_id: str, code: str) -> AuthenticationResult:
        ...


@runtime_checkable
class DescopeMagicLink(Protocol):
    """Authenticate with a link that redirects back to the app with a token."""

    async def sign_up(
        self,
        method: DeliveryMethod,
        login_id: str,
        details: Optional[SignUpDetails] = None,
        uri: Optional[str] = None,
    ) -> str:
        ...

    async def sign_in(self, method: DeliveryMethod, login_id: str, uri: Optional[str] = None) -> str:
        ...

    async def sign_up_or_in(
        self, method: DeliveryMethod, login_id: str, uri: Optional[str] = None
    ) -> str:
        ...

    async def update_email(
        self,
        email: str,
        login_id: str,
        refresh_jwt: str,
        uri: Optional[str] = None,
        options: Optional[UpdateOptions] = None,
    ) -> str:
        ...

    async def update_phone(
        self,
        phone: str,
        method: DeliveryMethod,
        login_id: str,
        refresh_jwt: str,
        uri: Optional[str] = None,
        options: Optional[UpdateOptions] = None,
    ) -> str:
        ...

    async def verify(self, token: str) -> AuthenticationResult:
        ...


@runtime_checkable
class DescopeEnchantedLink(Protocol):
    """
    Authenticate with an emailed link that can be opened on any device.

    The app polls with the returned pending_ref until the user clicks the
    link.
    """

    async def sign_up(
        self, login_id: str, details: Optional[SignUpDetails] = None, uri: Optional[str] = None
    ) -> EnchantedLinkResponse:
        ...

    async def sign_in(self, login_id: str, uri: Optional[str] = None) -> EnchantedLinkResponse:
        ...

    async def sign_up_or_in(self, login_id: str, uri: Optional[str] = None) -> EnchantedLinkResponse:
        ...

    async def update_email(
        self,
        email: str,
        login_id: str,
        refresh_jwt: str,
        uri: Optional[str] = None,
        options: Optional[UpdateOptions] = None,
    ) -> EnchantedLinkResponse:
        ...

    async def check_for_session(self, pending_ref: str) -> AuthenticationResult:
        """Check once; raises ENCHANTED_LINK_PENDING if the link wasn't clicked yet."""
        ...

    async def poll_for_session(
        self, pending_ref: str, timeout: Optional[float] = None
    ) -> AuthenticationResult:
        """Wait until the link is clicked or the timeout expires."""
        ...


@runtime_checkable
class DescopeOAuth(Protocol):
    async def start(self, provider: OAuthProvider, redirect_url: Optional[str] = None) -> str:
        """Return the URL that starts the OAuth redirect chain."""
        ...

    async def exchange(self, code: str) -> AuthenticationResult:
        ...


@runtime_checkable
class DescopeSSO(Protocol):
    async def start(self, email_or_tenant_name: str, redirect_url: Optional[str] = None) -> str:
        """Return the URL that starts the SSO redirect chain."""
        ...

    async def exchange(self, code: str) -> AuthenticationResult:
        ...


@runtime_checkable
class DescopePassword(Protocol):
    async def sign_up(
        self, login_id: str, password: str, details: Optional[SignUpDetails] = None
    ) -> AuthenticationResult:
        ...

    async def sign_in(self, login_id: str, password: str) -> AuthenticationResult:
        ...

    async def update(self, login_id: str, new_password: str, refresh_jwt: str) -> None:
        ...

    async def replace(self, login_id: str, old_password: str, new_password: str) -> AuthenticationResult:
        ...

    async def send_reset(self, login_id: str, redirect_url: Optional[str] = None) -> None:
        ...

    async def get_policy(self) -> PasswordPolicy:
        ...


@runtime_checkable
class DescopeAccessKey(Protocol):
    async def exchange(self, access_key: str) -> AuthenticationResult:
        """Exchange an access key for a session token."""
        ...
