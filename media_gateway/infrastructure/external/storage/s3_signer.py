"""S3-compatible presigned URL signer (AWS S3, Cloudflare R2, MinIO)."""

from __future__ import annotations

import asyncio

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from media_gateway.domain.enums import StorageVerb
from media_gateway.infrastructure.exceptions import SignerException

_CLIENT_METHODS = {
    StorageVerb.PUT: "put_object",
    StorageVerb.GET: "get_object",
}


class S3PresignSigner:
    """Produce SigV4 presigned URLs without touching the network.

    Uses boto3 (sync) via asyncio.to_thread. Presigning is a local
    computation, so the bucket and object need not exist. Path-style
    addressing is needed for MinIO and most local endpoints.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        force_path_style: bool = False,
    ) -> None:
        """Initialize the S3 client.

        Args:
            region: AWS region (R2 uses 'auto').
            endpoint_url: Custom endpoint (R2/MinIO).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            force_path_style: Address buckets as endpoint/bucket/key.
        """
        self.region = region
        self.endpoint_url = endpoint_url
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": "path" if force_path_style else "auto"},
        )
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            config=config,
            **extra,
        )

    def _presign_sync(
        self,
        bucket: str,
        object_key: str,
        verb: StorageVerb,
        expires_in: int,
        content_type: str | None,
    ) -> str:
        params = {"Bucket": bucket, "Key": object_key}
        if verb is StorageVerb.PUT and content_type:
            params["ContentType"] = content_type
        return self._client.generate_presigned_url(
            _CLIENT_METHODS[verb],
            Params=params,
            ExpiresIn=expires_in,
            HttpMethod=verb.value,
        )

    async def sign(
        self,
        bucket: str,
        object_key: str,
        verb: StorageVerb,
        expires_in: int,
        content_type: str | None = None,
    ) -> str:
        """Return a presigned URL for verb on bucket/object_key.

        Raises:
            SignerException: boto3 could not sign (e.g. no credentials).
        """
        try:
            return await asyncio.to_thread(
                self._presign_sync,
                bucket,
                object_key,
                StorageVerb(verb),
                expires_in,
                content_type,
            )
        except (BotoCoreError, ClientError) as e:
            raise SignerException(
                details={"object_key": object_key, "error": type(e).__name__}
            ) from e
