"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from media_gateway.core.config import Settings, get_settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults_are_valid() -> None:
    settings = _settings()
    assert settings.upload_url_expiry_seconds == 900
    assert settings.signed_url_expiry_seconds == 3600
    assert settings.photo_content_types == (
        "image/jpeg", "image/png", "image/gif", "image/webp", "image/heic",
    )
    assert settings.cors_origins == ["*"]


def test_environment_must_be_known() -> None:
    with pytest.raises(ValidationError):
        _settings(environment="prod")


def test_emulator_verifier_refused_in_production() -> None:
    with pytest.raises(ValidationError, match="production"):
        _settings(
            environment="production",
            identity_verifier="emulator",
            firebase_auth_emulator_host="localhost:9099",
        )


def test_debug_refused_in_production() -> None:
    with pytest.raises(ValidationError, match="debug"):
        _settings(environment="production", debug=True)


def test_debug_allowed_in_development() -> None:
    assert _settings(environment="development", debug=True).debug is True


def test_emulator_verifier_requires_host() -> None:
    with pytest.raises(ValidationError):
        _settings(identity_verifier="emulator", firebase_auth_emulator_host=None)


def test_emulator_verifier_allowed_in_development() -> None:
    settings = _settings(
        identity_verifier="emulator", firebase_auth_emulator_host="localhost:9099"
    )
    assert settings.identity_verifier == "emulator"


@pytest.mark.parametrize(
    ("upload", "read"),
    [(3600, 3600), (4000, 3600), (0, 3600), (900, 8 * 24 * 3600)],
)
def test_expiry_windows_validated(upload: int, read: int) -> None:
    with pytest.raises(ValidationError):
        _settings(upload_url_expiry_seconds=upload, signed_url_expiry_seconds=read)


def test_membership_source_validated() -> None:
    with pytest.raises(ValidationError):
        _settings(membership_source="sql")


def test_content_type_lists_must_not_be_empty() -> None:
    with pytest.raises(ValidationError):
        _settings(allowed_video_types=" , ")


def test_csv_origins_are_split() -> None:
    settings = _settings(allowed_origins="https://a.example, https://b.example")
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_env_vars_override_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SIGNED_URL_EXPIRY_SECONDS", "7200")
    monkeypatch.setenv("S3_BUCKET", "media-prod")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.signed_url_expiry_seconds == 7200
        assert settings.s3_bucket == "media-prod"
    finally:
        get_settings.cache_clear()
