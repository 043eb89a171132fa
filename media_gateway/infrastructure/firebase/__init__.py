"""Firebase integration: ID token verification and Firestore membership."""

from media_gateway.infrastructure.firebase.client import create_firestore_client
from media_gateway.infrastructure.firebase.identity import (
    EmulatorIdentityVerifier,
    FirebaseIdentityVerifier,
)
from media_gateway.infrastructure.firebase.membership import FirestoreMembershipOracle

__all__ = [
    "EmulatorIdentityVerifier",
    "FirebaseIdentityVerifier",
    "FirestoreMembershipOracle",
    "create_firestore_client",
]
