"""Pytest configuration and fixtures for the media gateway.

HTTP tests run against create_app() with a gateway built from in-memory
doubles, so no Firebase project or bucket is needed. The doubles are
exposed as fixtures; tests mutate them to set up members, tokens and
failures.
"""

import asyncio
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from media_gateway.application.services import (
    AuthorizationService,
    PresignService,
    RequestValidator,
)
from media_gateway.application.use_cases import MediaGateway
from media_gateway.core.config import Settings
from media_gateway.domain.entities import Principal
from media_gateway.domain.enums import StorageVerb
from media_gateway.infrastructure.exceptions import IdentityVerificationError
from media_gateway.main import create_app

FIXED_NOW = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)

FAMILY_ID = "fam_123"
OTHER_FAMILY_ID = "fam_999"
BABY_ID = "baby_1"
MEMBER_UID = "user-member"
OUTSIDER_UID = "user-outsider"
MEMBER_TOKEN = "token-member"
OUTSIDER_TOKEN = "token-outsider"


class FakeIdentityVerifier:
    """Maps known tokens to user ids; everything else is rejected."""

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self.tokens = dict(tokens or {})
        self.delay: float = 0.0
        self.calls: list[str] = []

    async def verify(self, token: str) -> Principal:
        self.calls.append(token)
        if self.delay:
            await asyncio.sleep(self.delay)
        if token not in self.tokens:
            raise IdentityVerificationError("unknown token")
        return Principal(user_id=self.tokens[token])


class FakeMembershipOracle:
    """Membership from an in-memory set of (tenant_id, user_id) pairs."""

    def __init__(self, members: set[tuple[str, str]] | None = None) -> None:
        self.members = set(members or ())
        self.delay: float = 0.0
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    async def is_member(self, tenant_id: str, user_id: str) -> bool:
        self.calls.append((tenant_id, user_id))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return (tenant_id, user_id) in self.members


class FakeSigner:
    """Deterministic URLs that encode what was signed."""

    def __init__(self) -> None:
        self.delay: float = 0.0
        self.error: Exception | None = None
        self.calls: list[dict] = []

    async def sign(
        self,
        bucket: str,
        object_key: str,
        verb: StorageVerb,
        expires_in: int,
        content_type: str | None = None,
    ) -> str:
        self.calls.append(
            {
                "bucket": bucket,
                "object_key": object_key,
                "verb": verb,
                "expires_in": expires_in,
                "content_type": content_type,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return f"https://storage.test/{bucket}/{object_key}?verb={verb.value}&expires={expires_in}"


@pytest.fixture
def settings() -> Settings:
    """Settings for tests; ignores any local .env file."""
    return Settings(_env_file=None, environment="test", s3_bucket="test-bucket")


@pytest.fixture
def identity_verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier({MEMBER_TOKEN: MEMBER_UID, OUTSIDER_TOKEN: OUTSIDER_UID})


@pytest.fixture
def membership_oracle() -> FakeMembershipOracle:
    return FakeMembershipOracle({(FAMILY_ID, MEMBER_UID)})


@pytest.fixture
def signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def guard(identity_verifier, membership_oracle) -> AuthorizationService:
    return AuthorizationService(
        identity_verifier,
        membership_oracle,
        identity_timeout=0.2,
        membership_timeout=0.2,
    )


@pytest.fixture
def issuer(signer, settings) -> PresignService:
    return PresignService(
        signer,
        settings.s3_bucket,
        upload_expiry_seconds=settings.upload_url_expiry_seconds,
        read_expiry_seconds=settings.signed_url_expiry_seconds,
        signer_timeout=0.2,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def gateway(guard, issuer, settings) -> MediaGateway:
    return MediaGateway(guard, issuer, RequestValidator(), environment=settings.environment)


@pytest.fixture
def app(settings, gateway):
    return create_app(settings=settings, gateway=gateway)


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def member_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {MEMBER_TOKEN}"}


@pytest.fixture
def outsider_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {OUTSIDER_TOKEN}"}
