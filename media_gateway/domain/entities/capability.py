"""Presigned capabilities handed back to clients.

A capability is a signed URL plus the expiry the client should refresh
against. Capabilities are created per request and never stored; the
signature stays valid for its whole window however many times it is used.
"""

from dataclasses import dataclass, field
from datetime import datetime

from media_gateway.shared.utils.datetime import isoformat_utc


@dataclass(frozen=True)
class UploadCapability:
    """Time-limited PUT capability for one object key.

    required_headers must be sent verbatim by the client; the signature
    binds Content-Type, so a mismatch is rejected by the storage layer.
    """

    object_key: str
    url: str
    expires_at: datetime
    required_headers: dict[str, str] = field(default_factory=dict)

    def to_response(self) -> dict[str, object]:
        return {
            "objectKey": self.object_key,
            "signedPutUrl": self.url,
            "requiredHeaders": dict(self.required_headers),
            "expiresAt": isoformat_utc(self.expires_at),
        }


@dataclass(frozen=True)
class ReadCapability:
    """Time-limited GET capability for one object key."""

    object_key: str
    url: str
    expires_at: datetime

    def to_response(self) -> dict[str, object]:
        return {
            "signedGetUrl": self.url,
            "expiresAt": isoformat_utc(self.expires_at),
        }
