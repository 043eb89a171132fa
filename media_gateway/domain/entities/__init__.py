"""Domain entities: request-scoped values the gateway produces.

Nothing here is persisted by the gateway.
"""

from media_gateway.domain.entities.capability import ReadCapability, UploadCapability
from media_gateway.domain.entities.principal import Principal

__all__ = [
    "Principal",
    "ReadCapability",
    "UploadCapability",
]
