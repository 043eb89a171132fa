"""Presign issuer: upload and read capabilities with purpose-specific expiries.

Upload URLs are short-lived (single-purpose credentials should not
linger); read URLs live longer so clients can cache and prefetch. The
expiry timestamp is returned so clients refresh before a URL dies.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from media_gateway.application.interfaces.services import IObjectStorageSigner
from media_gateway.domain.entities import ReadCapability, UploadCapability
from media_gateway.domain.enums import StorageVerb
from media_gateway.domain.exceptions import GatewayException, InternalException
from media_gateway.shared.telemetry.tracing import traced
from media_gateway.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_EXPIRY_SECONDS = 900
DEFAULT_READ_EXPIRY_SECONDS = 3600


class PresignService:
    """Stateless wrapper around an object storage signer."""

    def __init__(
        self,
        signer: IObjectStorageSigner,
        bucket: str,
        upload_expiry_seconds: int = DEFAULT_UPLOAD_EXPIRY_SECONDS,
        read_expiry_seconds: int = DEFAULT_READ_EXPIRY_SECONDS,
        signer_timeout: float = 5.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if upload_expiry_seconds >= read_expiry_seconds:
            raise ValueError("Upload expiry must be shorter than read expiry")
        self.signer = signer
        self.bucket = bucket
        self.upload_expiry_seconds = upload_expiry_seconds
        self.read_expiry_seconds = read_expiry_seconds
        self.signer_timeout = signer_timeout
        self._clock = clock

    async def _sign(
        self,
        object_key: str,
        verb: StorageVerb,
        expiry_seconds: int,
        content_type: str | None = None,
    ) -> str:
        if expiry_seconds <= 0:
            raise ValueError("expiry_seconds must be positive")
        try:
            return await asyncio.wait_for(
                self.signer.sign(
                    self.bucket,
                    object_key,
                    verb,
                    expiry_seconds,
                    content_type=content_type,
                ),
                timeout=self.signer_timeout,
            )
        except TimeoutError:
            logger.warning("Signer timed out after %ss (%s)", self.signer_timeout, verb.value)
            raise InternalException(
                error_code="SIGNER_TIMEOUT",
                details={"object_key": object_key, "verb": verb.value},
            ) from None
        except GatewayException:
            raise
        except Exception as e:
            logger.warning("Signer failed (%s): %s", verb.value, type(e).__name__)
            raise InternalException(
                error_code="SIGNER_ERROR",
                details={"object_key": object_key, "verb": verb.value},
            ) from e

    @traced("gateway.issue_upload")
    async def issue_upload(
        self,
        object_key: str,
        content_type: str,
        expiry_seconds: int | None = None,
    ) -> UploadCapability:
        """Return a PUT capability bound to content_type.

        expires_at is computed from the clock reading taken before signing,
        so it never overstates the signature's lifetime.
        """
        expiry = (
            expiry_seconds if expiry_seconds is not None else self.upload_expiry_seconds
        )
        issued_at = self._clock()
        url = await self._sign(object_key, StorageVerb.PUT, expiry, content_type)
        return UploadCapability(
            object_key=object_key,
            url=url,
            expires_at=issued_at + timedelta(seconds=expiry),
            required_headers={"Content-Type": content_type},
        )

    @traced("gateway.issue_read")
    async def issue_read(
        self,
        object_key: str,
        expiry_seconds: int | None = None,
    ) -> ReadCapability:
        """Return a GET capability for object_key."""
        expiry = (
            expiry_seconds if expiry_seconds is not None else self.read_expiry_seconds
        )
        issued_at = self._clock()
        url = await self._sign(object_key, StorageVerb.GET, expiry)
        return ReadCapability(
            object_key=object_key,
            url=url,
            expires_at=issued_at + timedelta(seconds=expiry),
        )
