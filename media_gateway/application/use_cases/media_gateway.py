"""Gateway handler: host-agnostic orchestration of the two presign flows.

Each flow goes parse -> validate -> authorize -> issue -> respond and
returns a GatewayResponse (status + JSON body). Hosts (the FastAPI app,
or anything else that can hand over a header and raw body) only translate
GatewayResponse into their own response type.

Errors are classified where they happen and serialized once, in
error_response. Nothing here retries or downgrades a failure.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from media_gateway.application.services.authorization_service import AuthorizationService
from media_gateway.application.services.presign_service import PresignService
from media_gateway.application.services.request_validator import RequestValidator
from media_gateway.domain.exceptions import (
    ErrorKind,
    ForbiddenException,
    GatewayException,
    InternalException,
    NotFoundException,
    UnauthenticatedException,
)
from media_gateway.domain.object_keys import generate_object_key, validate_object_key
from media_gateway.shared.utils.datetime import isoformat_utc, utc_now

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class GatewayResponse:
    """Status code and JSON body produced by the gateway core."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an 'Authorization: Bearer <token>' value, or None.

    The scheme is matched case-insensitively; anything other than a single
    non-empty token after it counts as missing.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token or " " in token:
        return None
    return token


class MediaGateway:
    """Presign-upload and signed-read flows over injected collaborators."""

    def __init__(
        self,
        guard: AuthorizationService,
        issuer: PresignService,
        validator: RequestValidator | None = None,
        *,
        environment: str = "development",
        debug: bool = False,
    ) -> None:
        self.guard = guard
        self.issuer = issuer
        self.validator = validator or RequestValidator()
        self.environment = environment
        self.debug = debug

    async def presign_upload(
        self, authorization: str | None, body: bytes | str | None
    ) -> GatewayResponse:
        """POST /media/presignUpload: issue a PUT capability for a new object key."""

        async def _flow() -> dict[str, Any]:
            token = self._require_token(authorization)
            request = self.validator.parse_upload(body)
            principal = await self.guard.authorize(token, request.family_id)
            object_key = generate_object_key(
                request.family_id,
                request.baby_id,
                request.media_type,
                request.upload_id,
            )
            capability = await self.issuer.issue_upload(object_key, request.content_type)
            logger.info(
                "Issued upload capability: tenant=%s user=%s kind=%s key=%s",
                request.family_id,
                principal.user_id,
                request.media_type.value,
                object_key,
            )
            return capability.to_response()

        return await self._run(_flow)

    async def signed_read(
        self, authorization: str | None, body: bytes | str | None
    ) -> GatewayResponse:
        """POST /media/signedRead: issue a GET capability for a key the tenant owns."""

        async def _flow() -> dict[str, Any]:
            token = self._require_token(authorization)
            request = self.validator.parse_read(body)
            principal = await self.guard.authorize(token, request.family_id)
            if not validate_object_key(request.object_key, request.family_id):
                logger.warning(
                    "Denied read: key outside tenant prefix: tenant=%s user=%s",
                    request.family_id,
                    principal.user_id,
                )
                raise ForbiddenException(
                    "Forbidden: object key does not belong to this family",
                    reason="foreign_object_key",
                )
            capability = await self.issuer.issue_read(request.object_key)
            logger.info(
                "Issued read capability: tenant=%s user=%s key=%s",
                request.family_id,
                principal.user_id,
                request.object_key,
            )
            return capability.to_response()

        return await self._run(_flow)

    def health(self) -> GatewayResponse:
        """GET /health: liveness, no collaborators touched."""
        return GatewayResponse(
            200,
            {
                "status": "ok",
                "environment": self.environment,
                "timestamp": isoformat_utc(utc_now()),
            },
        )

    def not_found(self) -> GatewayResponse:
        return self.error_response(NotFoundException())

    async def aclose(self) -> None:
        """Release collaborator resources (HTTP pools) at shutdown."""
        for collaborator in (
            self.guard.identity_verifier,
            self.guard.membership_oracle,
            self.issuer.signer,
        ):
            close = getattr(collaborator, "aclose", None)
            if close is not None:
                await close()

    @staticmethod
    def _require_token(authorization: str | None) -> str:
        # Checked before the body is read: no token is 401 even for a bad body.
        token = extract_bearer_token(authorization)
        if token is None:
            raise UnauthenticatedException("Unauthorized: missing auth token")
        return token

    async def _run(self, flow: Callable[[], Awaitable[dict[str, Any]]]) -> GatewayResponse:
        try:
            body = await flow()
        except Exception as e:
            return self.error_response(e)
        return GatewayResponse(200, body)

    def error_response(self, exc: BaseException) -> GatewayResponse:
        """Serialize any failure as {"error": <safe message>} with its mapped status.

        GatewayException messages are client-safe by construction. Anything
        else is Internal; its text is only exposed when debug is on.
        """
        if isinstance(exc, GatewayException):
            if exc.kind is ErrorKind.INTERNAL:
                logger.error(
                    "Internal gateway error %s: %s", exc.error_code, exc.details
                )
            return GatewayResponse(exc.status_code, exc.to_dict())
        logger.exception("Unhandled gateway exception: %s", type(exc).__name__, exc_info=exc)
        internal = InternalException()
        message = internal.message
        if self.debug:
            message = f"{message}: {exc}"
        return GatewayResponse(internal.status_code, {"error": message})
