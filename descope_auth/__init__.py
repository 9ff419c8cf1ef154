"""
Descope Auth Python SDK

An asyncio SDK for Descope authentication flows: OTP, TOTP, magic link,
enchanted link, OAuth, SSO, password and access key. Every flow returns the
same AuthenticationResult, and every failure raises a DescopeError that can
be matched by code.
"""

from .client import SDK_VERSION, DescopeClient, create_descope_client
from .types import (
    DescopeConfig,
    DeliveryMethod,
    OAuthProvider,
    SignUpDetails,
    UpdateOptions,
    DescopeUser,
    AuthenticationResult,
    RefreshResponse,
    EnchantedLinkResponse,
    TOTPResponse,
    PasswordPolicy,
)
from .errors import (
    DescopeError,
    NETWORK_ERROR,
    SERVER_ERROR,
    DECODE_ERROR,
    ENCODE_ERROR,
    TOKEN_ERROR,
    BAD_REQUEST,
    MISSING_ARGUMENTS,
    INVALID_REQUEST,
    INVALID_ARGUMENTS,
    INVALID_OTP_CODE,
    TOO_MANY_OTP_ATTEMPTS,
    ENCHANTED_LINK_PENDING,
    ENCHANTED_LINK_EXPIRED,
    MISSING_ACCESS_KEY,
    INVALID_ACCESS_KEY,
    MAGIC_LINK_EXPIRED,
    error_matches,
    is_descope_error,
)
from .protocols import (
    DescopeAuth,
    DescopeOTP,
    DescopeTOTP,
    DescopeMagicLink,
    DescopeEnchantedLink,
    DescopeOAuth,
    DescopeSSO,
    DescopePassword,
    DescopeAccessKey,
)
from .session import REFRESH_COOKIE_NAME
from .transport import Transport, TransportResponse, HttpxTransport

__version__ = SDK_VERSION
__all__ = [
    # Client
    "DescopeClient",
    "create_descope_client",
    # Types
    "DescopeConfig",
    "DeliveryMethod",
    "OAuthProvider",
    "SignUpDetails",
    "UpdateOptions",
    "DescopeUser",
    "AuthenticationResult",
    "RefreshResponse",
    "EnchantedLinkResponse",
    "TOTPResponse",
    "PasswordPolicy",
    # Errors
    "DescopeError",
    "NETWORK_ERROR",
    "SERVER_ERROR",
    "DECODE_ERROR",
    "ENCODE_ERROR",
    "TOKEN_ERROR",
    "BAD_REQUEST",
    "MISSING_ARGUMENTS",
    "INVALID_REQUEST",
    "INVALID_ARGUMENTS",
    "INVALID_OTP_CODE",
    "TOO_MANY_OTP_ATTEMPTS",
    "ENCHANTED_LINK_PENDING",
    "ENCHANTED_LINK_EXPIRED",
    "MISSING_ACCESS_KEY",
    "INVALID_ACCESS_KEY",
    "MAGIC_LINK_EXPIRED",
    "error_matches",
    "is_descope_error",
    # Interfaces
    "DescopeAuth",
    "DescopeOTP",
    "DescopeTOTP",
    "DescopeMagicLink",
    "DescopeEnchantedLink",
    "DescopeOAuth",
    "DescopeSSO",
    "DescopePassword",
    "DescopeAccessKey",
    # Transport
    "REFRESH_COOKIE_NAME",
    "Transport",
    "TransportResponse",
    "HttpxTransport",
]
