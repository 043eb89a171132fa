"""Domain exceptions for the media gateway.

Every failure the gateway reports is classified into exactly one
ErrorKind, and every kind maps to exactly one HTTP status. Exceptions are
raised close to their source and serialized in one place by the gateway
core; messages carried here are already safe to show to clients.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Classification of gateway failures."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"

    @property
    def status_code(self) -> int:
        return ERROR_KIND_STATUS[self]


ERROR_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class GatewayException(Exception):
    """Base exception for all gateway errors.

    Attributes:
        message: Client-safe error description.
        error_code: Machine-readable error code (for logs).
        details: Additional context for logs; never serialized to clients.
        kind: ErrorKind that decides the HTTP status.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Client-safe error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context for logs.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict[str, str]:
        """Return the client-facing error body."""
        return {"error": self.message}


class BadRequestException(GatewayException):
    """Raised when a payload is malformed or outside upload policy."""

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str = "Bad request", field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "BAD_REQUEST", details)


class UnauthenticatedException(GatewayException):
    """Raised when the bearer token is missing or the identity verifier rejects it."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "Unauthorized: invalid or missing auth token") -> None:
        super().__init__(message, "UNAUTHENTICATED")


class ForbiddenException(GatewayException):
    """Raised when a verified principal may not act on a tenant or object key.

    The default message is deliberately the same whether the tenant exists
    or not.
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Forbidden: not a member of this family",
        reason: str | None = None,
    ) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__(message, "FORBIDDEN", details)


class NotFoundException(GatewayException):
    """Raised for unknown routes."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message, "NOT_FOUND")


class InternalException(GatewayException):
    """Raised when a collaborator fails in a way no other kind describes."""

    kind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "Internal server error",
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
