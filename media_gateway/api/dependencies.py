"""Presentation-layer dependency injection (composition root).

build_media_gateway wires the infrastructure adapters into the gateway
core once, at startup. Routes depend only on get_media_gateway, never on
infrastructure directly.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request

from media_gateway.application.interfaces import IIdentityVerifier
from media_gateway.application.services import (
    AuthorizationService,
    PresignService,
    RequestValidator,
    UploadPolicy,
)
from media_gateway.application.use_cases import MediaGateway
from media_gateway.core.config import Settings
from media_gateway.domain.exceptions import InternalException
from media_gateway.infrastructure.external.storage import SignerFactory
from media_gateway.infrastructure.firebase import (
    EmulatorIdentityVerifier,
    FirebaseIdentityVerifier,
    FirestoreMembershipOracle,
    create_firestore_client,
)

logger = logging.getLogger(__name__)


def build_identity_verifier(settings: Settings) -> IIdentityVerifier:
    """Select the identity verifier for the configured mode."""
    if settings.identity_verifier == "emulator":
        return EmulatorIdentityVerifier(
            settings.firebase_project_id, settings.firebase_auth_emulator_host
        )
    return FirebaseIdentityVerifier(settings.firebase_project_id)


def build_media_gateway(settings: Settings) -> MediaGateway:
    """Construct the gateway and all its collaborators from settings.

    Raises:
        ValueError: Missing credentials or inconsistent storage config.
    """
    guard = AuthorizationService(
        identity_verifier=build_identity_verifier(settings),
        membership_oracle=FirestoreMembershipOracle(
            create_firestore_client(settings), source=settings.membership_source
        ),
        identity_timeout=settings.identity_timeout_seconds,
        membership_timeout=settings.membership_timeout_seconds,
    )
    issuer = PresignService(
        signer=SignerFactory.create_signer(settings),
        bucket=settings.s3_bucket,
        upload_expiry_seconds=settings.upload_url_expiry_seconds,
        read_expiry_seconds=settings.signed_url_expiry_seconds,
        signer_timeout=settings.signer_timeout_seconds,
    )
    logger.info(
        "Media gateway ready: verifier=%s membership=%s bucket=%s",
        settings.identity_verifier,
        settings.membership_source,
        settings.s3_bucket,
    )
    return MediaGateway(
        guard,
        issuer,
        RequestValidator(UploadPolicy.from_settings(settings)),
        environment=settings.environment,
        debug=settings.debug,
    )


def get_media_gateway(request: Request) -> MediaGateway:
    """Return the gateway built at startup (or injected by create_app)."""
    gateway = getattr(request.app.state, "media_gateway", None)
    if gateway is None:
        raise InternalException(error_code="GATEWAY_NOT_INITIALIZED")
    return gateway


MediaGatewayDep = Annotated[MediaGateway, Depends(get_media_gateway)]
