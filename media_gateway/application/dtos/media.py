"""Media request DTOs (camelCase on the wire, matching the browser client).

Structural validation for the two presign flows: required fields, the
media kind enum, and path-safe id formats.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from media_gateway.domain.enums import MediaKind
from media_gateway.domain.object_keys import ID_MAX_LENGTH, is_valid_segment_id

OBJECT_KEY_MAX_LENGTH = 1024


def _check_segment_id(value: str) -> str:
    if not is_valid_segment_id(value):
        raise ValueError("must be 1-128 characters: letters, digits, '-' or '_'")
    return value


class PresignUploadRequest(BaseModel):
    """Upload intent: body of POST /media/presignUpload."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    family_id: str = Field(
        ..., alias="familyId", min_length=1, max_length=ID_MAX_LENGTH,
        description="Family (tenant) the upload belongs to",
    )
    baby_id: str = Field(..., alias="babyId", min_length=1, max_length=ID_MAX_LENGTH)
    content_type: str = Field(..., alias="contentType", min_length=1, max_length=255)
    file_size_bytes: int | None = Field(
        default=None, alias="fileSizeBytes", ge=0, strict=True,
        description="Declared size; checked against the per-kind ceiling when present",
    )
    media_type: MediaKind = Field(..., alias="mediaType")
    original_filename: str | None = Field(
        default=None, alias="originalFilename", max_length=255
    )
    upload_id: str | None = Field(
        default=None, alias="uploadId", max_length=128,
        description="Optional idempotency token reused as the moment segment",
    )

    @field_validator("family_id", "baby_id")
    @classmethod
    def ids_are_path_segments(cls, value: str) -> str:
        return _check_segment_id(value)


class SignedReadRequest(BaseModel):
    """Body of POST /media/signedRead."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    family_id: str = Field(..., alias="familyId", min_length=1, max_length=ID_MAX_LENGTH)
    object_key: str = Field(
        ..., alias="objectKey", min_length=1, max_length=OBJECT_KEY_MAX_LENGTH
    )

    @field_validator("family_id")
    @classmethod
    def family_id_is_path_segment(cls, value: str) -> str:
        return _check_segment_id(value)
