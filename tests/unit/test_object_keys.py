"""Tests for object key generation and tenant ownership checks."""

import random
import re
import string

import pytest

from media_gateway.domain.enums import MediaKind
from media_gateway.domain.object_keys import (
    generate_object_key,
    is_safe_idempotency_token,
    is_valid_segment_id,
    tenant_prefix,
    validate_object_key,
)

_ID_ALPHABET = string.ascii_letters + string.digits + "_-"
_KEY_RE = re.compile(
    r"^families/(?P<tenant>[^/]+)/babies/(?P<baby>[^/]+)/moments/(?P<segment>\d+-[a-z0-9]+)/original$"
)


def _random_ids(seed: int, count: int) -> list[str]:
    rng = random.Random(seed)
    return [
        "".join(rng.choice(_ID_ALPHABET) for _ in range(rng.randint(1, 40)))
        for _ in range(count)
    ]


def test_generate_object_key_layout() -> None:
    key = generate_object_key("fam_1", "baby-2", MediaKind.PHOTO)
    match = _KEY_RE.match(key)
    assert match is not None
    assert match["tenant"] == "fam_1"
    assert match["baby"] == "baby-2"


def test_generate_object_key_accepts_kind_string() -> None:
    assert generate_object_key("fam_1", "b", "video").startswith("families/fam_1/")


def test_generate_object_key_is_unique_per_call() -> None:
    keys = {generate_object_key("fam_1", "b", MediaKind.PHOTO) for _ in range(200)}
    assert len(keys) == 200


def test_generate_object_key_uses_safe_idempotency_token() -> None:
    key = generate_object_key("fam_1", "b", MediaKind.PHOTO, "upload-42")
    assert key == "families/fam_1/babies/b/moments/upload-42/original"


@pytest.mark.parametrize("token", ["", "has space", "../x", "a/b", "x" * 65, "under_score"])
def test_generate_object_key_ignores_unsafe_idempotency_token(token: str) -> None:
    key = generate_object_key("fam_1", "b", MediaKind.PHOTO, token)
    assert _KEY_RE.match(key) is not None


@pytest.mark.parametrize("bad_id", ["", "a/b", "..", "a.b", "x" * 129, "fam 1"])
def test_generate_object_key_rejects_unsafe_ids(bad_id: str) -> None:
    with pytest.raises(ValueError):
        generate_object_key(bad_id, "b", MediaKind.PHOTO)
    with pytest.raises(ValueError):
        generate_object_key("fam_1", bad_id, MediaKind.PHOTO)


def test_generate_object_key_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        generate_object_key("fam_1", "b", "audio")


def test_validate_object_key_accepts_own_prefix() -> None:
    assert validate_object_key("families/fam_1/babies/b/moments/x/original", "fam_1")


@pytest.mark.parametrize(
    ("object_key", "tenant_id"),
    [
        ("families/fam_2/babies/b/moments/x/original", "fam_1"),
        ("families/fam_10/babies/b/moments/x/original", "fam_1"),
        ("families/fam_1", "fam_1"),
        ("", "fam_1"),
        ("families/fam_1/../fam_2/babies/b/original", "fam_1"),
        ("/families/fam_1/babies/b/original", "fam_1"),
        ("FAMILIES/fam_1/babies/b/original", "fam_1"),
        ("families/fam_1/babies/b/original", ""),
        ("families/a/b/babies/x/original", "a/b"),
    ],
)
def test_validate_object_key_rejects(object_key: str, tenant_id: str) -> None:
    assert validate_object_key(object_key, tenant_id) is False


def test_validate_object_key_trusts_only_the_start() -> None:
    """Another tenant's prefix later in the key does not make it theirs."""
    key = "families/fam_1/babies/b/moments/families/fam_2/original"
    assert validate_object_key(key, "fam_1")
    assert not validate_object_key(key, "fam_2")


@pytest.mark.parametrize("seed", range(5))
def test_generated_keys_validate_only_for_their_tenant(seed: int) -> None:
    """Round-trip ownership and tenant isolation over random id pairs."""
    tenants = _random_ids(seed, 20)
    babies = _random_ids(seed + 1000, 20)
    for tenant, baby in zip(tenants, babies):
        key = generate_object_key(tenant, baby, MediaKind.PHOTO)
        assert validate_object_key(key, tenant)
        for other in tenants:
            if other != tenant:
                assert not validate_object_key(key, other)


def test_tenant_prefix() -> None:
    assert tenant_prefix("fam_1") == "families/fam_1/"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("abc", True), ("A-b_9", True), ("", False), (None, False), ("a/b", False), ("x" * 128, True), ("x" * 129, False)],
)
def test_is_valid_segment_id(value, expected: bool) -> None:
    assert is_valid_segment_id(value) is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("abc-123", True), ("x" * 64, True), ("x" * 65, False), ("a_b", False), (None, False)],
)
def test_is_safe_idempotency_token(value, expected: bool) -> None:
    assert is_safe_idempotency_token(value) is expected
