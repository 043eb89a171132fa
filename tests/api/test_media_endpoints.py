"""HTTP tests for POST /media/presignUpload and POST /media/signedRead."""

import pytest
from httpx import AsyncClient

FAMILY = "fam_123"
OTHER_FAMILY = "fam_999"
BABY = "baby_1"


def _upload_body(**overrides) -> dict:
    body = {
        "familyId": FAMILY,
        "babyId": BABY,
        "contentType": "image/jpeg",
        "fileSizeBytes": 2_000_000,
        "mediaType": "photo",
    }
    body.update(overrides)
    return body


async def test_presign_upload_member_gets_put_url(
    client: AsyncClient, member_headers: dict[str, str], signer
) -> None:
    """A member gets a key under their family and a PUT URL bound to the content type."""
    response = await client.post(
        "/media/presignUpload", json=_upload_body(), headers=member_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["objectKey"].startswith(f"families/{FAMILY}/babies/{BABY}/moments/")
    assert data["objectKey"].endswith("/original")
    assert data["requiredHeaders"] == {"Content-Type": "image/jpeg"}
    assert data["signedPutUrl"].startswith("https://storage.test/test-bucket/")
    assert len(signer.calls) == 1
    assert signer.calls[0]["content_type"] == "image/jpeg"
    assert signer.calls[0]["verb"].value == "PUT"


async def test_presign_upload_non_member_is_forbidden(
    client: AsyncClient, outsider_headers: dict[str, str], signer
) -> None:
    """Non-members get 403 and the body does not say whether the family exists."""
    response = await client.post(
        "/media/presignUpload", json=_upload_body(), headers=outsider_headers
    )
    assert response.status_code == 403
    body = response.json()
    assert set(body) == {"error"}
    assert "exist" not in body["error"].lower()
    assert signer.calls == []


async def test_presign_upload_unknown_family_matches_non_member_response(
    client: AsyncClient, outsider_headers, member_headers
) -> None:
    """Unknown family and foreign family produce identical responses."""
    unknown = await client.post(
        "/media/presignUpload",
        json=_upload_body(familyId="no_such_family"),
        headers=member_headers,
    )
    foreign = await client.post(
        "/media/presignUpload", json=_upload_body(), headers=outsider_headers
    )
    assert unknown.status_code == foreign.status_code == 403
    assert unknown.json() == foreign.json()


async def test_presign_upload_video_over_ceiling_is_bad_request(
    client: AsyncClient, member_headers: dict[str, str], signer
) -> None:
    """A 300 MB video exceeds the 250 MB ceiling."""
    response = await client.post(
        "/media/presignUpload",
        json=_upload_body(
            mediaType="video", contentType="video/mp4", fileSizeBytes=300_000_000
        ),
        headers=member_headers,
    )
    assert response.status_code == 400
    assert "too large" in response.json()["error"]
    assert signer.calls == []


async def test_presign_upload_photo_over_ceiling_is_bad_request(
    client: AsyncClient, member_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/media/presignUpload",
        json=_upload_body(fileSizeBytes=25 * 1024 * 1024 + 1),
        headers=member_headers,
    )
    assert response.status_code == 400


@pytest.mark.parametrize(
    ("media_type", "content_type"),
    [
        ("photo", "video/mp4"),
        ("photo", "image/svg+xml"),
        ("photo", "IMAGE/JPEG"),
        ("video", "image/png"),
        ("video", "video/x-msvideo"),
    ],
)
async def test_presign_upload_rejects_content_type_outside_allow_list(
    client: AsyncClient, member_headers: dict[str, str], media_type: str, content_type: str
) -> None:
    response = await client.post(
        "/media/presignUpload",
        json=_upload_body(mediaType=media_type, contentType=content_type),
        headers=member_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("Bad request: invalid")


async def test_presign_upload_without_file_size_is_accepted(
    client: AsyncClient, member_headers: dict[str, str]
) -> None:
    body = _upload_body()
    del body["fileSizeBytes"]
    response = await client.post("/media/presignUpload", json=body, headers=member_headers)
    assert response.status_code == 200


@pytest.mark.parametrize("missing", ["familyId", "babyId", "contentType", "mediaType"])
async def test_presign_upload_missing_field_is_bad_request(
    client: AsyncClient, member_headers: dict[str, str], missing: str
) -> None:
    body = _upload_body()
    del body[missing]
    response = await client.post("/media/presignUpload", json=body, headers=member_headers)
    assert response.status_code == 400
    assert missing in response.json()["error"]


async def test_presign_upload_invalid_media_type_is_bad_request(
    client: AsyncClient, member_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/media/presignUpload",
        json=_upload_body(mediaType="audio"),
        headers=member_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Bad request: invalid media type"}


async def test_presign_upload_family_id_with_slash_is_bad_request(
    client: AsyncClient, member_headers: dict[str, str], membership_oracle
) -> None:
    response = await client.post(
        "/media/presignUpload",
        json=_upload_body(familyId="fam_123/../fam_999"),
        headers=member_headers,
    )
    assert response.status_code == 400
    assert membership_oracle.calls == []


async def test_presign_upload_reuses_safe_upload_id(
    client: AsyncClient, member_headers: dict[str, str]
) -> None:
    """A safe uploadId becomes the moment segment so retries get the same key."""
    body = _upload_body(uploadId="retry-abc-123")
    first = await client.post("/media/presignUpload", json=body, headers=member_headers)
    second = await client.post("/media/presignUpload", json=body, headers=member_headers)
    expected = f"families/{FAMILY}/babies/{BABY}/moments/retry-abc-123/original"
    assert first.json()["objectKey"] == expected
    assert second.json()["objectKey"] == expected


async def test_presign_upload_expiry_is_upload_window(
    client: AsyncClient, member_headers: dict[str, str]
) -> None:
    """expiresAt is the clock reading plus the 15 minute upload window."""
    response = await client.post(
        "/media/presignUpload", json=_upload_body(), headers=member_headers
    )
    assert response.json()["expiresAt"] == "2026-10-17T12:15:00.000Z"


@pytest.mark.parametrize("path", ["/media/presignUpload", "/media/signedRead"])
async def test_missing_authorization_is_unauthenticated(
    client: AsyncClient, path: str, identity_verifier
) -> None:
    """No Authorization header is 401 on both endpoints, even with a bad body."""
    response = await client.post(path, content=b"{not json")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized: missing auth token"}
    assert identity_verifier.calls == []


@pytest.mark.parametrize(
    "header",
    ["Basic dXNlcjpwYXNz", "Bearer", "Bearer ", "token-member", "Bearer a b"],
)
async def test_malformed_authorization_is_unauthenticated(
    client: AsyncClient, header: str
) -> None:
    response = await client.post(
        "/media/presignUpload", json=_upload_body(), headers={"Authorization": header}
    )
    assert response.status_code == 401


async def test_bearer_scheme_is_case_insensitive(client: AsyncClient) -> None:
    response = await client.post(
        "/media/presignUpload",
        json=_upload_body(),
        headers={"Authorization": "bearer token-member"},
    )
    assert response.status_code == 200


async def test_invalid_token_is_unauthenticated(
    client: AsyncClient, membership_oracle
) -> None:
    response = await client.post(
        "/media/presignUpload",
        json=_upload_body(),
        headers={"Authorization": "Bearer forged"},
    )
    assert response.status_code == 401
    assert "forged" not in response.text
    assert membership_oracle.calls == []


async def test_malformed_json_is_bad_request(
    client: AsyncClient, member_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/media/presignUpload",
        content=b'{"familyId": ',
        headers={**member_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Bad request: malformed JSON"}


async def test_json_array_body_is_bad_request(
    client: AsyncClient, member_headers: dict[str, str]
) -> None:
    response = await client.post("/media/presignUpload", json=[1, 2], headers=member_headers)
    assert response.status_code == 400


async def test_signed_read_member_gets_get_url(
    client: AsyncClient, member_headers: dict[str, str], signer
) -> None:
    key = f"families/{FAMILY}/babies/{BABY}/moments/1700000000000-abc/original"
    response = await client.post(
        "/media/signedRead",
        json={"familyId": FAMILY, "objectKey": key},
        headers=member_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"signedGetUrl", "expiresAt"}
    assert data["expiresAt"] == "2026-10-17T13:00:00.000Z"
    assert signer.calls[0]["verb"].value == "GET"
    assert signer.calls[0]["object_key"] == key


async def test_signed_read_foreign_key_is_forbidden(
    client: AsyncClient, member_headers: dict[str, str], signer
) -> None:
    """Authenticated for F, asking for a key under another family: 403."""
    response = await client.post(
        "/media/signedRead",
        json={
            "familyId": FAMILY,
            "objectKey": f"families/{OTHER_FAMILY}/babies/{BABY}/moments/x/original",
        },
        headers=member_headers,
    )
    assert response.status_code == 403
    assert signer.calls == []


@pytest.mark.parametrize(
    "object_key",
    [
        "families/fam_1234/babies/b/moments/x/original",
        f"families/{FAMILY}/../{OTHER_FAMILY}/babies/b/original",
        f"/families/{FAMILY}/babies/b/moments/x/original",
        f"families/{FAMILY}",
    ],
)
async def test_signed_read_rejects_lookalike_keys(
    client: AsyncClient, member_headers: dict[str, str], object_key: str
) -> None:
    response = await client.post(
        "/media/signedRead",
        json={"familyId": FAMILY, "objectKey": object_key},
        headers=member_headers,
    )
    assert response.status_code == 403


async def test_signed_read_non_member_is_forbidden_before_key_check(
    client: AsyncClient, outsider_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/media/signedRead",
        json={"familyId": FAMILY, "objectKey": f"families/{FAMILY}/babies/b/x/original"},
        headers=outsider_headers,
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: not a member of this family"}


async def test_signed_read_missing_object_key_is_bad_request(
    client: AsyncClient, member_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/media/signedRead", json={"familyId": FAMILY}, headers=member_headers
    )
    assert response.status_code == 400
    assert "objectKey" in response.json()["error"]


async def test_signer_failure_is_internal_error(
    client: AsyncClient, member_headers: dict[str, str], signer
) -> None:
    signer.error = RuntimeError("credentials exploded: AKIA...")
    response = await client.post(
        "/media/presignUpload", json=_upload_body(), headers=member_headers
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


async def test_membership_timeout_is_forbidden(
    client: AsyncClient, member_headers: dict[str, str], membership_oracle
) -> None:
    membership_oracle.delay = 1.0
    response = await client.post(
        "/media/presignUpload", json=_upload_body(), headers=member_headers
    )
    assert response.status_code == 403


async def test_identity_timeout_is_unauthenticated(
    client: AsyncClient, member_headers: dict[str, str], identity_verifier
) -> None:
    identity_verifier.delay = 1.0
    response = await client.post(
        "/media/presignUpload", json=_upload_body(), headers=member_headers
    )
    assert response.status_code == 401
