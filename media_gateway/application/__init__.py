"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (identity, membership, signer).
"""

from media_gateway.application.interfaces import (
    IIdentityVerifier,
    IMembershipOracle,
    IObjectStorageSigner,
)
from media_gateway.application.services import (
    AuthorizationService,
    PresignService,
    RequestValidator,
    UploadPolicy,
)
from media_gateway.application.use_cases import GatewayResponse, MediaGateway

__all__ = [
    "AuthorizationService",
    "GatewayResponse",
    "IIdentityVerifier",
    "IMembershipOracle",
    "IObjectStorageSigner",
    "MediaGateway",
    "PresignService",
    "RequestValidator",
    "UploadPolicy",
]
