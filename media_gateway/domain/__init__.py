"""Domain layer: entities, enums, exceptions, and the object key scheme.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from media_gateway.domain.entities import Principal, ReadCapability, UploadCapability
from media_gateway.domain.enums import MediaKind, MemberRole, StorageVerb
from media_gateway.domain.exceptions import (
    BadRequestException,
    ErrorKind,
    ForbiddenException,
    GatewayException,
    InternalException,
    NotFoundException,
    UnauthenticatedException,
)
from media_gateway.domain.object_keys import generate_object_key, validate_object_key

__all__ = [
    # Entities
    "Principal",
    "ReadCapability",
    "UploadCapability",
    # Enums
    "MediaKind",
    "MemberRole",
    "StorageVerb",
    # Exceptions
    "BadRequestException",
    "ErrorKind",
    "ForbiddenException",
    "GatewayException",
    "InternalException",
    "NotFoundException",
    "UnauthenticatedException",
    # Object keys
    "generate_object_key",
    "validate_object_key",
]
