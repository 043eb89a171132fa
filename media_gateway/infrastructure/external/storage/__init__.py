"""Object storage signing (S3-compatible)."""

from media_gateway.infrastructure.external.storage.factory import SignerFactory
from media_gateway.infrastructure.external.storage.s3_signer import S3PresignSigner

__all__ = ["S3PresignSigner", "SignerFactory"]
