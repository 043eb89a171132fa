"""Request validation: JSON parsing, structure, and upload policy.

Structure (required fields, enums, id formats) is checked by the pydantic
DTOs; policy (per-kind size ceilings and content-type allow-lists) is
checked here. Every failure becomes a BadRequestException whose message
names the field but never echoes the submitted value.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from media_gateway.application.dtos.media import PresignUploadRequest, SignedReadRequest
from media_gateway.domain.enums import MediaKind
from media_gateway.domain.exceptions import BadRequestException

if TYPE_CHECKING:
    from media_gateway.core.config import Settings

ModelT = TypeVar("ModelT", bound=BaseModel)

_MB = 1024 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    """Per-kind ceilings and allowed MIME types for uploads."""

    max_photo_size_bytes: int = 25 * _MB
    max_video_size_bytes: int = 250 * _MB
    photo_content_types: frozenset[str] = frozenset(
        {"image/jpeg", "image/png", "image/gif", "image/webp", "image/heic"}
    )
    video_content_types: frozenset[str] = frozenset(
        {"video/mp4", "video/quicktime", "video/webm"}
    )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "UploadPolicy":
        return cls(
            max_photo_size_bytes=settings.max_photo_size_bytes,
            max_video_size_bytes=settings.max_video_size_bytes,
            photo_content_types=frozenset(settings.photo_content_types),
            video_content_types=frozenset(settings.video_content_types),
        )

    def max_size_for(self, kind: MediaKind) -> int:
        if kind is MediaKind.PHOTO:
            return self.max_photo_size_bytes
        return self.max_video_size_bytes

    def content_types_for(self, kind: MediaKind) -> frozenset[str]:
        if kind is MediaKind.PHOTO:
            return self.photo_content_types
        return self.video_content_types


def _describe_validation_error(exc: ValidationError) -> BadRequestException:
    """Turn the first pydantic error into a client-safe BadRequestException."""
    errors = exc.errors(include_url=False, include_input=False)
    if not errors:
        return BadRequestException("Bad request: invalid payload")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    if first.get("type") == "missing":
        return BadRequestException(
            f"Bad request: missing required field '{field}'", field=field
        )
    if field == "mediaType":
        return BadRequestException("Bad request: invalid media type", field=field)
    return BadRequestException(f"Bad request: invalid field '{field}'", field=field)


class RequestValidator:
    """Parse and validate inbound media requests."""

    def __init__(self, policy: UploadPolicy | None = None) -> None:
        self.policy = policy or UploadPolicy()

    @staticmethod
    def parse_json(body: bytes | str | None) -> dict[str, Any]:
        """Decode body as a JSON object.

        Raises:
            BadRequestException: Empty body, malformed JSON, or not an object.
        """
        if not body:
            raise BadRequestException("Bad request: missing JSON body")
        try:
            data = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise BadRequestException("Bad request: malformed JSON") from e
        if not isinstance(data, dict):
            raise BadRequestException("Bad request: JSON body must be an object")
        return data

    @staticmethod
    def _parse_model(model: type[ModelT], data: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise _describe_validation_error(e) from e

    def check_upload_policy(self, request: PresignUploadRequest) -> None:
        """Enforce the size ceiling and content-type allow-list for the media kind.

        Raises:
            BadRequestException: File too large or content type not allowed.
        """
        kind = request.media_type
        max_size = self.policy.max_size_for(kind)
        if request.file_size_bytes is not None and request.file_size_bytes > max_size:
            raise BadRequestException(
                f"Bad request: file too large (max {max_size // _MB}MB for {kind.value})",
                field="fileSizeBytes",
            )
        if request.content_type not in self.policy.content_types_for(kind):
            noun = "image" if kind is MediaKind.PHOTO else "video"
            raise BadRequestException(
                f"Bad request: invalid {noun} type", field="contentType"
            )

    def parse_upload(self, body: bytes | str | None) -> PresignUploadRequest:
        """Parse, structurally validate, and policy-check a presign-upload body."""
        request = self._parse_model(PresignUploadRequest, self.parse_json(body))
        self.check_upload_policy(request)
        return request

    def parse_read(self, body: bytes | str | None) -> SignedReadRequest:
        """Parse and structurally validate a signed-read body."""
        return self._parse_model(SignedReadRequest, self.parse_json(body))
