"""Signer factory: creates the S3 presign signer from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from media_gateway.infrastructure.external.storage.s3_signer import S3PresignSigner

if TYPE_CHECKING:
    from media_gateway.core.config import Settings


class SignerFactory:
    """Factory for object storage signers based on configuration."""

    @staticmethod
    def create_signer(settings: "Settings | None" = None) -> S3PresignSigner:
        """Create the S3 signer from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Raises:
            ValueError: Missing bucket, or only one half of the key pair.
        """
        from media_gateway.core.config import get_settings

        s = settings or get_settings()
        if not s.s3_bucket:
            raise ValueError("S3_BUCKET required for presigning")
        secret = s.s3_secret_key.get_secret_value() if s.s3_secret_key else None
        if bool(s.s3_access_key) != bool(secret):
            raise ValueError("S3_ACCESS_KEY and S3_SECRET_KEY must be set together")
        return S3PresignSigner(
            region=s.s3_region,
            endpoint_url=s.s3_endpoint_url,
            access_key=s.s3_access_key,
            secret_key=secret,
            force_path_style=s.s3_force_path_style,
        )
