"""Application interfaces (ports) implemented by infrastructure."""

from media_gateway.application.interfaces.services import (
    IIdentityVerifier,
    IMembershipOracle,
    IObjectStorageSigner,
)

__all__ = [
    "IIdentityVerifier",
    "IMembershipOracle",
    "IObjectStorageSigner",
]
