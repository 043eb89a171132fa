"""Application DTOs: validated request payloads."""

from media_gateway.application.dtos.media import (
    OBJECT_KEY_MAX_LENGTH,
    PresignUploadRequest,
    SignedReadRequest,
)

__all__ = [
    "OBJECT_KEY_MAX_LENGTH",
    "PresignUploadRequest",
    "SignedReadRequest",
]
