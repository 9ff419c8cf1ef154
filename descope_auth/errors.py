"""
Descope Auth SDK Errors

Every failure surfaced by the SDK is a DescopeError identified by a stable
code. Errors compare equal when their codes match, so callers can check a
raised error against the well-known constants below or against any code
returned by the server.
"""

import json
from typing import Any, Dict, Optional


class DescopeError(Exception):
    """Structured SDK error, identified by its code."""

    def __init__(
        self,
        code: str,
        description: Optional[str] = None,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        if not code:
            raise ValueError("DescopeError code must not be empty")
        super().__init__(code)
        self._code = code
        self._description = description
        self._message = message
        self._cause = cause

    @property
    def code(self) -> str:
        return self._code

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def message(self) -> Optional[str]:
        return self._message

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause

    def with_description(self, description: str) -> "DescopeError":
        """Return a copy of this error with a different description."""
        return self._replace(description=description)

    def with_message(self, message: str) -> "DescopeError":
        """Return a copy of this error with a server or caller message."""
        return self._replace(message=message)

    def with_cause(self, cause: BaseException) -> "DescopeError":
        """Return a copy of this error wrapping the underlying failure."""
        return self._replace(cause=cause)

    def _replace(self, **changes: Any) -> "DescopeError":
        values: Dict[str, Any] = {
            "code": self._code,
            "description": self._description,
            "message": self._message,
            "cause": self._cause,
        }
        values.update(changes)
        return DescopeError(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self._code,
            "description": self._description,
            "message": self._message,
            "cause": repr(self._cause) if self._cause is not None else None,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DescopeError):
            return NotImplemented
        return self._code == other._code

    def __hash__(self) -> int:
        return hash(self._code)

    def __str__(self) -> str:
        if self._description:
            text = f"{self._description} [{self._code}]"
        elif self._cause is not None:
            text = f"{self._cause} [{self._code}]"
        else:
            text = f"Descope error [{self._code}]"
        if self._message:
            text += f': "{self._message}"'
        return text

    def __repr__(self) -> str:
        fields = [f"code={self._code!r}"]
        if self._description is not None:
            fields.append(f"description={self._description!r}")
        if self._message is not None:
            fields.append(f"message={self._message!r}")
        if self._cause is not None:
            fields.append(f"cause={self._cause!r}")
        return f"DescopeError({', '.join(fields)})"


# Local and transport errors
NETWORK_ERROR = DescopeError("S010001", "Network error")
SERVER_ERROR = DescopeError("S010002")
DECODE_ERROR = DescopeError("S010003", "Failed to decode response")
ENCODE_ERROR = DescopeError("S010004", "Failed to encode request")
TOKEN_ERROR = DescopeError("S010005", "Failed to parse token")

# Server errors
BAD_REQUEST = DescopeError("E011001")
MISSING_ARGUMENTS = DescopeError("E011002")
INVALID_REQUEST = DescopeError("E011003")
INVALID_ARGUMENTS = DescopeError("E011004")

INVALID_OTP_CODE = DescopeError("E061102")
TOO_MANY_OTP_ATTEMPTS = DescopeError("E061103")

ENCHANTED_LINK_PENDING = DescopeError("E062503")

MISSING_ACCESS_KEY = DescopeError("E062802")
INVALID_ACCESS_KEY = DescopeError("E062803")

MAGIC_LINK_EXPIRED = DescopeError("S020001")
ENCHANTED_LINK_EXPIRED = DescopeError("S060001", "Enchanted link expired")


KNOWN_ERRORS: Dict[str, DescopeError] = {
    error.code: error
    for error in (
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
        MISSING_ACCESS_KEY,
        INVALID_ACCESS_KEY,
        MAGIC_LINK_EXPIRED,
        ENCHANTED_LINK_EXPIRED,
    )
}


def error_from_response(status_code: int, content: bytes) -> DescopeError:
    """
    Classify a failed response body.

    Args:
        status_code: HTTP status of the response
        content: Raw response body

    Returns:
        The server-declared error when the body carries an errorCode,
        DECODE_ERROR when the body cannot be decoded at all, and
        SERVER_ERROR when it decodes but declares nothing.
    """
    try:
        data = json.loads(content)
    except ValueError as e:
        return DECODE_ERROR.with_cause(e)

    code = data.get("errorCode") if isinstance(data, dict) else None
    if not code or not isinstance(code, str):
        return SERVER_ERROR.with_description(
            f"Server request failed with status code {status_code}"
        )

    known = KNOWN_ERRORS.get(code)
    description = data.get("errorDescription") or (known.description if known else None)
    return DescopeError(code, description=description, message=data.get("message") or None)


def error_from_transport_failure(error: BaseException) -> DescopeError:
    """Classify a request that never produced a response."""
    return NETWORK_ERROR.with_cause(error)


def error_matches(candidate: DescopeError, thrown: Any) -> bool:
    """Check whether a caught value is the given error, by code."""
    return isinstance(thrown, DescopeError) and thrown.code == candidate.code


def is_descope_error(error: Any) -> bool:
    """Check if error is a DescopeError."""
    return isinstance(error, DescopeError)


def is_pending_error(error: Any) -> bool:
    """Check if error means an out-of-band verification may still complete."""
    return error_matches(ENCHANTED_LINK_PENDING, error) or error_matches(NETWORK_ERROR, error)
