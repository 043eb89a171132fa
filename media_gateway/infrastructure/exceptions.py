"""Infrastructure exceptions raised by the external collaborator adapters.

The guard and issuer translate these into domain errors; they never reach
clients with their own messages.
"""

from media_gateway.domain.exceptions import InternalException


class IdentityVerificationError(Exception):
    """Raised when a bearer token fails verification (signature, claims, expiry)."""


class MembershipLookupError(Exception):
    """Raised when the membership store cannot be read (HTTP or decode failure)."""


class FirestoreRequestError(MembershipLookupError):
    """Raised on a non-success Firestore REST response other than 404."""

    def __init__(self, status_code: int, path: str) -> None:
        self.status_code = status_code
        self.path = path
        super().__init__(f"Firestore request failed with status {status_code}")


class SignerException(InternalException):
    """Raised when the object storage signer cannot produce a URL."""

    def __init__(self, message: str = "Internal server error", details: dict | None = None):
        super().__init__(message, error_code="SIGNER_ERROR", details=details)
