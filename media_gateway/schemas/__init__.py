"""Request and response schemas for the HTTP surface."""

from media_gateway.schemas.health import HealthResponse
from media_gateway.schemas.media import (
    ErrorResponse,
    PresignUploadResponse,
    SignedReadResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "PresignUploadResponse",
    "SignedReadResponse",
]
