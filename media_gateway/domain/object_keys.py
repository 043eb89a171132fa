"""Object key scheme: tenant ownership encoded in the storage path.

Keys look like::

    families/{tenant_id}/babies/{baby_id}/moments/{segment}/original

Cross-tenant isolation in the shared bucket reduces to validate_object_key
(a plain prefix check) plus the tenant id itself having been authorized for
the caller. Keep both functions small enough to audit at a glance.
"""

import logging
import re
import time

from media_gateway.domain.enums import MediaKind
from media_gateway.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

FAMILIES_ROOT = "families"
ORIGINAL_OBJECT_NAME = "original"

# Tenant and baby ids: Firestore auto-ids, slugs, test ids. No '/', no '.'.
ID_MAX_LENGTH = 128
_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1," + str(ID_MAX_LENGTH) + r"}$")

# Caller-supplied idempotency tokens used verbatim as the moment segment.
IDEMPOTENCY_TOKEN_MAX_LENGTH = 64
_IDEMPOTENCY_TOKEN_RE = re.compile(
    r"^[A-Za-z0-9-]{1," + str(IDEMPOTENCY_TOKEN_MAX_LENGTH) + r"}$"
)


def is_valid_segment_id(value: str | None) -> bool:
    """Return True if value is safe to embed as a tenant or baby path segment."""
    if not value or len(value) > ID_MAX_LENGTH:
        return False
    return bool(_ID_RE.fullmatch(value))


def is_safe_idempotency_token(value: str | None) -> bool:
    """Return True if a caller-supplied token may be used as the moment segment."""
    if not value:
        return False
    return bool(_IDEMPOTENCY_TOKEN_RE.fullmatch(value))


def tenant_prefix(tenant_id: str) -> str:
    """Return the key prefix every object owned by tenant_id starts with."""
    return f"{FAMILIES_ROOT}/{tenant_id}/"


def new_moment_segment() -> str:
    """Return a fresh collision-resistant segment: epoch millis plus a CUID2."""
    return f"{time.time_ns() // 1_000_000}-{generate_cuid()}"


def generate_object_key(
    tenant_id: str,
    baby_id: str,
    media_kind: MediaKind | str,
    idempotency_token: str | None = None,
) -> str:
    """Build the object key for a new upload.

    Args:
        tenant_id: Family the object belongs to (already authorized).
        baby_id: Baby the moment belongs to.
        media_kind: photo or video.
        idempotency_token: Optional caller token; used verbatim as the
            segment when it is alphanumeric/hyphen and at most 64 chars,
            so retries of the same upload land on the same key.

    Returns:
        families/{tenant_id}/babies/{baby_id}/moments/{segment}/original

    Raises:
        ValueError: If an id is not a safe path segment or media_kind is unknown.
    """
    if not is_valid_segment_id(tenant_id):
        raise ValueError("tenant_id is not a valid path segment")
    if not is_valid_segment_id(baby_id):
        raise ValueError("baby_id is not a valid path segment")
    MediaKind(media_kind)

    if idempotency_token is not None and is_safe_idempotency_token(idempotency_token):
        segment = idempotency_token
    else:
        if idempotency_token is not None:
            logger.warning(
                "Ignoring unsafe idempotency token for tenant %s; generating a fresh segment",
                tenant_id,
            )
        segment = new_moment_segment()
    return (
        f"{tenant_prefix(tenant_id)}babies/{baby_id}/moments/{segment}/"
        f"{ORIGINAL_OBJECT_NAME}"
    )


def validate_object_key(object_key: str, tenant_id: str) -> bool:
    """Return True iff object_key belongs to tenant_id.

    A key belongs to a tenant when it starts with exactly families/{tenant_id}/
    and holds no '..'. Another tenant's prefix appearing later in the key
    does not matter: only the start is trusted.
    """
    if not object_key or not is_valid_segment_id(tenant_id):
        return False
    if ".." in object_key:
        return False
    return object_key.startswith(tenant_prefix(tenant_id))
