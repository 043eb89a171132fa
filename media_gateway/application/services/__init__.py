"""Application services: request validation, authorization guard, presign issuer."""

from media_gateway.application.services.authorization_service import AuthorizationService
from media_gateway.application.services.presign_service import PresignService
from media_gateway.application.services.request_validator import (
    RequestValidator,
    UploadPolicy,
)

__all__ = [
    "AuthorizationService",
    "PresignService",
    "RequestValidator",
    "UploadPolicy",
]
