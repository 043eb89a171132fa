"""Media API response schemas (camelCase on the wire, matching the browser client).

Request bodies are the application DTOs in media_gateway.application.dtos.
"""

from pydantic import BaseModel


class PresignUploadResponse(BaseModel):
    """Response of POST /media/presignUpload."""

    objectKey: str
    signedPutUrl: str
    requiredHeaders: dict[str, str]
    expiresAt: str


class SignedReadResponse(BaseModel):
    """Response of POST /media/signedRead."""

    signedGetUrl: str
    expiresAt: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
