"""Firebase identity verifiers.

FirebaseIdentityVerifier checks Firebase ID tokens against Google's
published signing certs (google-auth). EmulatorIdentityVerifier accepts
the unsigned tokens minted by the Firebase Auth emulator and still checks
audience, issuer, expiry and subject; Settings refuses it in production.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from jose import jwt
from jose.exceptions import JOSEError

from media_gateway.domain.entities import Principal
from media_gateway.infrastructure.exceptions import IdentityVerificationError

logger = logging.getLogger(__name__)

_ISSUER_PREFIX = "https://securetoken.google.com/"


def _principal_from_claims(claims: dict[str, Any], project_id: str) -> Principal:
    """Check the project-bound claims and return the principal for sub.

    Raises:
        IdentityVerificationError: Wrong audience or issuer, or empty subject.
    """
    if claims.get("aud") != project_id:
        raise IdentityVerificationError("Token audience does not match project")
    if claims.get("iss") != f"{_ISSUER_PREFIX}{project_id}":
        raise IdentityVerificationError("Token issuer does not match project")
    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub:
        raise IdentityVerificationError("Token has no subject")
    return Principal(user_id=sub)


def _verify_firebase_token(token: str, project_id: str, request, clock_skew: int) -> dict:
    from google.oauth2 import id_token

    return id_token.verify_firebase_token(
        token, request, audience=project_id, clock_skew_in_seconds=clock_skew
    )


def _cached_cert_request():
    """google-auth transport whose session honours Cache-Control on the cert endpoint.

    Only Google's public signing certs are cached; every token is still verified.
    """
    import cachecontrol
    import requests
    from google.auth.transport.requests import Request

    return Request(session=cachecontrol.CacheControl(requests.Session()))


class FirebaseIdentityVerifier:
    """Verify Firebase ID tokens (RS256, Google-managed keys)."""

    def __init__(self, project_id: str, clock_skew_seconds: int = 10, request=None) -> None:
        if not project_id:
            raise ValueError("project_id is required for Firebase token verification")
        if request is None:
            request = _cached_cert_request()
        self.project_id = project_id
        self.clock_skew_seconds = clock_skew_seconds
        self._request = request

    async def verify(self, token: str) -> Principal:
        """Return the principal for a valid ID token.

        Raises:
            IdentityVerificationError: Bad signature, expired, or claims mismatch.
        """
        try:
            claims = await asyncio.to_thread(
                _verify_firebase_token,
                token,
                self.project_id,
                self._request,
                self.clock_skew_seconds,
            )
        except ValueError as e:
            # google-auth raises ValueError subclasses for every token defect.
            raise IdentityVerificationError(str(e)) from e
        return _principal_from_claims(claims or {}, self.project_id)


class EmulatorIdentityVerifier:
    """Accept Firebase Auth emulator tokens (alg 'none', no signature).

    Only for local development against the emulator.
    """

    def __init__(self, project_id: str, emulator_host: str) -> None:
        self.project_id = project_id
        self.emulator_host = emulator_host
        logger.warning(
            "Using Firebase Auth emulator at %s: token signatures are NOT verified",
            emulator_host,
        )

    async def verify(self, token: str) -> Principal:
        try:
            claims = jwt.get_unverified_claims(token)
        except JOSEError as e:
            raise IdentityVerificationError("Malformed emulator token") from e
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)) or exp <= time.time():
            raise IdentityVerificationError("Token expired")
        return _principal_from_claims(claims, self.project_id)
