"""Service interfaces (ports) for the external collaborators.

Protocols define what the gateway needs from identity, membership and
object storage (DIP). Implementations live in infrastructure and are
chosen once at startup; tests substitute doubles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from media_gateway.domain.entities import Principal
    from media_gateway.domain.enums import StorageVerb


class IIdentityVerifier(Protocol):
    """Protocol for turning an opaque bearer token into a verified principal."""

    async def verify(self, token: str) -> Principal:
        """Return the principal for token.

        Raise on any failure (expired, malformed, bad signature, wrong
        audience); the guard treats every exception as unauthenticated.
        """
        ...


class IMembershipOracle(Protocol):
    """Protocol for the source of truth on family membership."""

    async def is_member(self, tenant_id: str, user_id: str) -> bool:
        """Return True only if user_id is a current member of tenant_id.

        Must return False (not raise) when the tenant does not exist.
        """
        ...


class IObjectStorageSigner(Protocol):
    """Protocol for producing presigned URLs against an S3-compatible store."""

    async def sign(
        self,
        bucket: str,
        object_key: str,
        verb: StorageVerb,
        expires_in: int,
        content_type: str | None = None,
    ) -> str:
        """Return a URL granting verb on bucket/object_key for expires_in seconds.

        When content_type is given the signature binds to it.
        """
        ...
