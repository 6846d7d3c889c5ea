"""Errors raised by the gateway operations.

Every error carries an `ErrorKind` so callers can branch on the kind of
failure without inspecting message text.
"""

from enum import Enum


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SELF_DEMOTION = "self_demotion"


class GatewayError(Exception):
    """Base class for failures surfaced to the caller of an operation."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class AuthenticationError(GatewayError):
    """No resolvable caller identity."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class AuthorizationError(GatewayError):
    """The caller is known but not permitted to do this."""

    kind = ErrorKind.AUTHORIZATION


class ValidationError(GatewayError):
    kind = ErrorKind.VALIDATION


class NotFoundError(GatewayError):
    kind = ErrorKind.NOT_FOUND


class SelfDemotionError(GatewayError):
    """An admin tried to remove their own admin role."""

    kind = ErrorKind.SELF_DEMOTION

    def __init__(self, message: str = "You cannot demote yourself from admin role"):
        super().__init__(message)
