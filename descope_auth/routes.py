"""
Descope Auth SDK Routes

Fixed mapping from (flow, operation) to the endpoint that implements it.
Paths are relative to BASE_PATH and may contain a {method} placeholder for
the delivery method.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .types import DeliveryMethod

BASE_PATH = "v1/auth"


class Flow(str, Enum):
    AUTH = "auth"
    OTP = "otp"
    TOTP = "totp"
    MAGIC_LINK = "magiclink"
    ENCHANTED_LINK = "enchantedlink"
    OAUTH = "oauth"
    SSO = "sso"
    PASSWORD = "password"
    ACCESS_KEY = "accesskey"


class Operation(str, Enum):
    SIGN_UP = "sign_up"
    SIGN_IN = "sign_in"
    SIGN_UP_OR_IN = "sign_up_or_in"
    VERIFY = "verify"
    UPDATE = "update"
    UPDATE_EMAIL = "update_email"
    UPDATE_PHONE = "update_phone"
    PENDING_SESSION = "pending_session"
    START = "start"
    EXCHANGE = "exchange"
    REPLACE = "replace"
    SEND_RESET = "send_reset"
    POLICY = "policy"
    ME = "me"
    REFRESH = "refresh"
    LOGOUT = "logout"


class Authorization(str, Enum):
    """Secret appended to the project ID in the Authorization header."""

    PROJECT = "project"
    REFRESH_JWT = "refresh_jwt"
    ACCESS_KEY = "access_key"


@dataclass(frozen=True)
class Route:
    http_method: str
    path: str
    fields: Tuple[str, ...] = ()
    authorization: Authorization = Authorization.PROJECT
    # payload is sent as query parameters instead of a JSON body
    query: bool = False
    # successful responses carry a session and may set the refresh cookie
    session: bool = False

    @property
    def needs_delivery_method(self) -> bool:
        return "{method}" in self.path

    def path_for(self, method: Optional[DeliveryMethod] = None) -> str:
        """Fill in the delivery method segment of the path."""
        if not self.needs_delivery_method:
            return self.path
        if method is None:
            raise ValueError(f"Route {self.path} requires a delivery method")
        return self.path.format(method=DeliveryMethod(method).value)

    def payload(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Build the request payload, omitting absent values."""
        unknown = set(values) - set(self.fields)
        if unknown:
            raise ValueError(f"Route {self.path} does not accept {sorted(unknown)}")
        return {name: value for name, value in values.items() if value is not None}


_USER = ("loginId", "user")
_LINK_USER = ("loginId", "user", "uri")
_UPDATE = ("addToLoginIDs", "onMergeUseExisting")


ROUTES: Mapping[Tuple[Flow, Operation], Route] = MappingProxyType({
    # Session
    (Flow.AUTH, Operation.ME): Route("GET", "me", authorization=Authorization.REFRESH_JWT),
    (Flow.AUTH, Operation.REFRESH): Route(
        "POST", "refresh", authorization=Authorization.REFRESH_JWT, session=True
    ),
    (Flow.AUTH, Operation.LOGOUT): Route("POST", "logout", authorization=Authorization.REFRESH_JWT),

    # OTP
    (Flow.OTP, Operation.SIGN_UP): Route("POST", "otp/signup/{method}", _USER),
    (Flow.OTP, Operation.SIGN_IN): Route("POST", "otp/signin/{method}", ("loginId",)),
    (Flow.OTP, Operation.SIGN_UP_OR_IN): Route("POST", "otp/signup-in/{method}", ("loginId",)),
    (Flow.OTP, Operation.VERIFY): Route(
        "POST", "otp/verify/{method}", ("loginId", "code"), session=True
    ),
    (Flow.OTP, Operation.UPDATE_EMAIL): Route(
        "POST", "otp/update/email", ("loginId", "email") + _UPDATE,
        authorization=Authorization.REFRESH_JWT,
    ),
    (Flow.OTP, Operation.UPDATE_PHONE): Route(
        "POST", "otp/update/phone/{method}", ("loginId", "phone") + _UPDATE,
        authorization=Authorization.REFRESH_JWT,
    ),

    # TOTP
    (Flow.TOTP, Operation.SIGN_UP): Route("POST", "totp/signup", _USER),
    (Flow.TOTP, Operation.VERIFY): Route("POST", "totp/verify", ("loginId", "code"), session=True),
    (Flow.TOTP, Operation.UPDATE): Route(
        "POST", "totp/update", ("loginId",), authorization=Authorization.REFRESH_JWT
    ),

    # Magic Link
    (Flow.MAGIC_LINK, Operation.SIGN_UP): Route("POST", "magiclink/signup/{method}", _LINK_USER),
    (Flow.MAGIC_LINK, Operation.SIGN_IN): Route(
        "POST", "magiclink/signin/{method}", ("loginId", "uri")
    ),
    (Flow.MAGIC_LINK, Operation.SIGN_UP_OR_IN): Route(
        "POST", "magiclink/signup-in/{method}", ("loginId", "uri")
    ),
    (Flow.MAGIC_LINK, Operation.VERIFY): Route("POST", "magiclink/verify", ("token",), session=True),
    (Flow.MAGIC_LINK, Operation.UPDATE_EMAIL): Route(
        "POST", "magiclink/update/email", ("loginId", "email", "uri") + _UPDATE,
        authorization=Authorization.REFRESH_JWT,
    ),
    (Flow.MAGIC_LINK, Operation.UPDATE_PHONE): Route(
        "POST", "magiclink/update/phone/{method}", ("loginId", "phone", "uri") + _UPDATE,
        authorization=Authorization.REFRESH_JWT,
    ),

    # Enchanted Link
    (Flow.ENCHANTED_LINK, Operation.SIGN_UP): Route(
        "POST", "enchantedlink/signup/email", _LINK_USER
    ),
    (Flow.ENCHANTED_LINK, Operation.SIGN_IN): Route(
        "POST", "enchantedlink/signin/email", ("loginId", "uri")
    ),
    (Flow.ENCHANTED_LINK, Operation.SIGN_UP_OR_IN): Route(
        "POST", "enchantedlink/signup-in/email", ("loginId", "uri")
    ),
    (Flow.ENCHANTED_LINK, Operation.PENDING_SESSION): Route(
        "POST", "enchantedlink/pending-session", ("pendingRef",), session=True
    ),
    (Flow.ENCHANTED_LINK, Operation.UPDATE_EMAIL): Route(
        "POST", "enchantedlink/update/email", ("loginId", "email", "uri") + _UPDATE,
        authorization=Authorization.REFRESH_JWT,
    ),

    # OAuth
    (Flow.OAUTH, Operation.START): Route(
        "POST", "oauth/authorize", ("provider", "redirectURL"), query=True
    ),
    (Flow.OAUTH, Operation.EXCHANGE): Route("POST", "oauth/exchange", ("code",), session=True),

    # SSO
    (Flow.SSO, Operation.START): Route(
        "POST", "saml/authorize", ("tenant", "redirectURL"), query=True
    ),
    (Flow.SSO, Operation.EXCHANGE): Route("POST", "saml/exchange", ("code",), session=True),

    # Password
    (Flow.PASSWORD, Operation.SIGN_UP): Route(
        "POST", "password/signup", ("loginId", "password", "user"), session=True
    ),
    (Flow.PASSWORD, Operation.SIGN_IN): Route(
        "POST", "password/signin", ("loginId", "password"), session=True
    ),
    (Flow.PASSWORD, Operation.UPDATE): Route(
        "POST", "password/update", ("loginId", "newPassword"),
        authorization=Authorization.REFRESH_JWT,
    ),
    (Flow.PASSWORD, Operation.REPLACE): Route(
        "POST", "password/replace", ("loginId", "oldPassword", "newPassword"), session=True
    ),
    (Flow.PASSWORD, Operation.SEND_RESET): Route(
        "POST", "password/reset", ("loginId", "redirectUrl")
    ),
    (Flow.PASSWORD, Operation.POLICY): Route("GET", "password/policy"),

    # Access Key
    (Flow.ACCESS_KEY, Operation.EXCHANGE): Route(
        "POST", "accesskey/exchange", authorization=Authorization.ACCESS_KEY
    ),
})


def resolve(flow: Flow, operation: Operation) -> Route:
    """Look up the route for a flow operation."""
    try:
        return ROUTES[(flow, operation)]
    except KeyError:
        raise KeyError(f"No route for {flow.value}.{operation.value}") from None
