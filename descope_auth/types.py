"""
Descope Auth SDK Type Definitions

Configuration, request options and the value types returned by the
authentication flows.
"""

import base64
import os
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Union

from .errors import INVALID_ARGUMENTS

if TYPE_CHECKING:
    from .transport import Transport


DEFAULT_BASE_URL = "https://api.descope.com"


@dataclass
class DescopeConfig:
    """SDK configuration options."""

    # Descope project ID
    project_id: str
    # API base URL (default: https://api.descope.com)
    base_url: str = DEFAULT_BASE_URL
    # Request timeout in seconds (default: 30)
    timeout: float = 30.0
    # Delay between enchanted link session checks in seconds (default: 1)
    poll_interval: float = 1.0
    # Enable debug logging (default: False)
    debug: bool = False
    # Custom headers to include in requests
    headers: Optional[Dict[str, str]] = None
    # Custom transport (default: None, uses HttpxTransport)
    transport: Optional["Transport"] = None

    @classmethod
    def from_env(cls, **overrides: Any) -> "DescopeConfig":
        """Create configuration from DESCOPE_PROJECT_ID and DESCOPE_BASE_URL."""
        values: Dict[str, Any] = {
            "project_id": os.environ.get("DESCOPE_PROJECT_ID", ""),
            "base_url": os.environ.get("DESCOPE_BASE_URL") or DEFAULT_BASE_URL,
        }
        values.update(overrides)
        return cls(**values)


class DeliveryMethod(str, Enum):
    """Channel used to deliver a one-time code or link."""

    EMAIL = "email"
    SMS = "sms"
    WHATSAPP = "whatsapp"

    @property
    def user_field(self) -> str:
        """The user field that must hold the delivery address."""
        return "email" if self is DeliveryMethod.EMAIL else "phone"

    @property
    def masked_field(self) -> str:
        """The response field holding the masked delivery address."""
        return "maskedEmail" if self is DeliveryMethod.EMAIL else "maskedPhone"


class OAuthProvider(str, Enum):
    FACEBOOK = "facebook"
    GITHUB = "github"
    GOOGLE = "google"
    MICROSOFT = "microsoft"
    GITLAB = "gitlab"
    APPLE = "apple"
    DISCORD = "discord"
    LINKEDIN = "linkedin"


def delivery_method(value: Union[DeliveryMethod, str]) -> DeliveryMethod:
    """Convert a caller supplied delivery method, rejecting unknown values."""
    try:
        return DeliveryMethod(value)
    except ValueError:
        raise INVALID_ARGUMENTS.with_description(f"Unknown delivery method: {value!r}") from None


def oauth_provider(value: Union[OAuthProvider, str]) -> OAuthProvider:
    try:
        return OAuthProvider(value)
    except ValueError:
        raise INVALID_ARGUMENTS.with_description(f"Unknown OAuth provider: {value!r}") from None


@dataclass(frozen=True)
class SignUpDetails:
    """Optional user details sent when creating a new user."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API requests."""
        result: Dict[str, Any] = {}
        if self.name is not None:
            result["name"] = self.name
        if self.email is not None:
            result["email"] = self.email
        if self.phone is not None:
            result["phone"] = self.phone
        return result


@dataclass(frozen=True)
class UpdateOptions:
    """
    Options for adding an email or phone to an existing user.

    add_to_login_ids: also make the new address a login ID of the user.
    on_merge_use_existing: when the address already belongs to another
        user, merge the two and keep the existing user's details.
    """

    add_to_login_ids: bool = False
    on_merge_use_existing: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "addToLoginIDs": self.add_to_login_ids,
            "onMergeUseExisting": self.on_merge_use_existing,
        }


@dataclass(frozen=True)
class DescopeUser:
    """User details returned from the API."""

    user_id: str
    login_ids: Tuple[str, ...] = ()
    name: Optional[str] = None
    picture: Optional[str] = None
    email: Optional[str] = None
    email_verified: bool = False
    phone: Optional[str] = None
    phone_verified: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DescopeUser":
        """Create from dictionary."""
        # loginIds is an ordered set
        login_ids = tuple(dict.fromkeys(data.get("loginIds") or []))
        return cls(
            user_id=data["userId"],
            login_ids=login_ids,
            name=data.get("name") or None,
            picture=data.get("picture") or None,
            email=data.get("email") or None,
            email_verified=bool(data.get("verifiedEmail", False)),
            phone=data.get("phone") or None,
            phone_verified=bool(data.get("verifiedPhone", False)),
        )


@dataclass(frozen=True)
class AuthenticationResult:
    """Session produced by a successful authentication."""

    session_token: str
    refresh_token: Optional[str] = None
    user: Optional[DescopeUser] = None
    is_first_authentication: bool = False


@dataclass(frozen=True)
class RefreshResponse:
    """Result of refreshing a session."""

    session_token: str
    refresh_token: Optional[str] = None


@dataclass(frozen=True)
class EnchantedLinkResponse:
    """Started enchanted link authentication."""

    link_id: str
    pending_ref: str
    masked_email: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnchantedLinkResponse":
        return cls(
            link_id=data.get("linkId", ""),
            pending_ref=data["pendingRef"],
            masked_email=data.get("maskedEmail", ""),
        )


@dataclass(frozen=True)
class TOTPResponse:
    """TOTP key (seed) for authenticator apps, in several formats."""

    provisioning_url: str
    image: bytes
    key: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TOTPResponse":
        return cls(
            provisioning_url=data.get("provisioningURL", ""),
            image=base64.b64decode(data.get("image", ""), validate=True),
            key=data["key"],
        )


@dataclass(frozen=True)
class PasswordPolicy:
    """Password rules configured for the project."""

    min_length: int = 0
    lowercase: bool = False
    uppercase: bool = False
    number: bool = False
    non_alphanumeric: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PasswordPolicy":
        return cls(
            min_length=int(data.get("minLength", 0)),
            lowercase=bool(data.get("lowercase", False)),
            uppercase=bool(data.get("uppercase", False)),
            number=bool(data.get("number", False)),
            non_alphanumeric=bool(data.get("nonAlphanumeric", False)),
        )
