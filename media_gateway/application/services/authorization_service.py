"""Authorization guard: identity, then membership, fail fast and fail closed.

The guard is the only place an unverified tenant id becomes a trusted one.
Every call re-verifies the token and re-reads membership; nothing is
cached so revocation takes effect on the next request.
"""

from __future__ import annotations

import asyncio
import logging

from media_gateway.application.interfaces.services import (
    IIdentityVerifier,
    IMembershipOracle,
)
from media_gateway.domain.entities import Principal
from media_gateway.domain.exceptions import ForbiddenException, UnauthenticatedException
from media_gateway.domain.object_keys import is_valid_segment_id
from media_gateway.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

DEFAULT_COLLABORATOR_TIMEOUT = 5.0


class AuthorizationService:
    """Compose identity verification and membership into one allow/deny decision.

    Order is strict: missing token, identity, membership. A later step
    never runs after an earlier failure. Any verifier failure (including
    timeout) is Unauthenticated; any oracle failure (including timeout) is
    Forbidden with the same message as a plain non-member.
    """

    def __init__(
        self,
        identity_verifier: IIdentityVerifier,
        membership_oracle: IMembershipOracle,
        identity_timeout: float = DEFAULT_COLLABORATOR_TIMEOUT,
        membership_timeout: float = DEFAULT_COLLABORATOR_TIMEOUT,
    ) -> None:
        self.identity_verifier = identity_verifier
        self.membership_oracle = membership_oracle
        self.identity_timeout = identity_timeout
        self.membership_timeout = membership_timeout

    async def authenticate(self, bearer_token: str | None) -> Principal:
        """Return the verified principal for bearer_token or raise UnauthenticatedException."""
        if not bearer_token:
            raise UnauthenticatedException("Unauthorized: missing auth token")
        try:
            principal = await asyncio.wait_for(
                self.identity_verifier.verify(bearer_token),
                timeout=self.identity_timeout,
            )
        except TimeoutError:
            logger.warning(
                "Identity verification timed out after %ss", self.identity_timeout
            )
            raise UnauthenticatedException() from None
        except UnauthenticatedException:
            raise
        except Exception as e:
            logger.info("Identity verification rejected token: %s", type(e).__name__)
            raise UnauthenticatedException() from e
        if not isinstance(principal, Principal) or not principal.user_id:
            raise UnauthenticatedException()
        return principal

    async def require_membership(self, principal: Principal, tenant_id: str) -> None:
        """Raise ForbiddenException unless principal is a current member of tenant_id."""
        if not is_valid_segment_id(tenant_id):
            raise ForbiddenException(reason="invalid_tenant_id")
        try:
            is_member = await asyncio.wait_for(
                self.membership_oracle.is_member(tenant_id, principal.user_id),
                timeout=self.membership_timeout,
            )
        except TimeoutError:
            logger.warning(
                "Membership lookup timed out after %ss for tenant %s",
                self.membership_timeout,
                tenant_id,
            )
            raise ForbiddenException(reason="membership_timeout") from None
        except Exception as e:
            logger.warning(
                "Membership lookup failed for tenant %s: %s", tenant_id, type(e).__name__
            )
            raise ForbiddenException(reason="membership_error") from e
        if is_member is not True:
            logger.info(
                "Denied: user %s is not a member of tenant %s",
                principal.user_id,
                tenant_id,
            )
            raise ForbiddenException(reason="not_a_member")

    @traced("gateway.authorize")
    async def authorize(self, bearer_token: str | None, tenant_id: str) -> Principal:
        """Return the principal if the token is valid and its user belongs to tenant_id.

        Raises:
            UnauthenticatedException: Missing token or verifier failure/timeout.
            ForbiddenException: Not a member, unknown tenant, oracle failure/timeout.
        """
        principal = await self.authenticate(bearer_token)
        add_span_attributes(**{"gateway.user_id": principal.user_id})
        await self.require_membership(principal, tenant_id)
        return principal
