"""Gateway configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Cross-field rules (expiry ordering, emulator mode
never in production) are validated at load time; credentials are checked
by the factories that build the external collaborators.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "test", "staging", "production")
IDENTITY_VERIFIERS = ("firebase", "emulator")
MEMBERSHIP_SOURCES = ("family_document", "members_subcollection")

# SigV4 presigned URLs cannot outlive 7 days.
MAX_PRESIGN_EXPIRY_SECONDS = 7 * 24 * 60 * 60


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


class Settings(BaseSettings):
    """Gateway settings loaded from environment and .env.

    Defaults describe a local development setup (MinIO bucket, Firebase
    project id placeholder). Production deployments set credentials via
    environment variables.
    """

    # App
    app_name: str = "media-gateway"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # HTTP
    allowed_origins: str = "*"
    request_id_header: str = "X-Request-ID"
    max_request_body_bytes: int = 64 * 1024

    # Firebase: identity verification and membership lookups
    firebase_project_id: str = "timehut-local"
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    identity_verifier: str = "firebase"
    firebase_auth_emulator_host: str | None = None
    firestore_emulator_host: str | None = None
    membership_source: str = "family_document"

    # Object storage (S3, R2, MinIO)
    s3_bucket: str = "timehut-local"
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    s3_force_path_style: bool = False

    # Presigned URL lifetimes
    upload_url_expiry_seconds: int = 900  # 15 minutes
    signed_url_expiry_seconds: int = 3600  # 1 hour

    # Upload policy
    max_photo_size_bytes: int = 25 * 1024 * 1024
    max_video_size_bytes: int = 250 * 1024 * 1024
    allowed_photo_types: str = "image/jpeg,image/png,image/gif,image/webp,image/heic"
    allowed_video_types: str = "video/mp4,video/quicktime,video/webm"

    # Per-collaborator timeouts
    identity_timeout_seconds: float = 5.0
    membership_timeout_seconds: float = 5.0
    signer_timeout_seconds: float = 5.0

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def photo_content_types(self) -> tuple[str, ...]:
        return _split_csv(self.allowed_photo_types)

    @property
    def video_content_types(self) -> tuple[str, ...]:
        return _split_csv(self.allowed_video_types)

    @property
    def cors_origins(self) -> list[str]:
        return list(_split_csv(self.allowed_origins))

    @model_validator(mode="after")
    def validate_modes_and_expiry(self) -> "Settings":
        """Validate enumerated settings, expiry windows and emulator usage.

        - Debug mode exposes exception text and tracebacks, and the emulator
          identity verifier accepts unsigned tokens; both are refused when
          environment is 'production'.
        - Upload URLs must expire strictly before read URLs.
        """
        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {ENVIRONMENTS}, got: {self.environment!r}"
            )
        if self.identity_verifier not in IDENTITY_VERIFIERS:
            raise ValueError(
                f"identity_verifier must be one of {IDENTITY_VERIFIERS}, "
                f"got: {self.identity_verifier!r}"
            )
        if self.debug and self.is_production:
            raise ValueError("debug cannot be enabled when environment is 'production'")
        if self.identity_verifier == "emulator":
            if self.is_production:
                raise ValueError(
                    "identity_verifier 'emulator' cannot be used when environment is 'production'"
                )
            if not self.firebase_auth_emulator_host:
                raise ValueError(
                    "FIREBASE_AUTH_EMULATOR_HOST is required when identity_verifier is 'emulator'"
                )
        if self.membership_source not in MEMBERSHIP_SOURCES:
            raise ValueError(
                f"membership_source must be one of {MEMBERSHIP_SOURCES}, "
                f"got: {self.membership_source!r}"
            )
        for name in ("upload_url_expiry_seconds", "signed_url_expiry_seconds"):
            value = getattr(self, name)
            if value <= 0 or value > MAX_PRESIGN_EXPIRY_SECONDS:
                raise ValueError(
                    f"{name} must be between 1 and {MAX_PRESIGN_EXPIRY_SECONDS} seconds"
                )
        if self.upload_url_expiry_seconds >= self.signed_url_expiry_seconds:
            raise ValueError(
                "upload_url_expiry_seconds must be shorter than signed_url_expiry_seconds"
            )
        if self.max_photo_size_bytes <= 0 or self.max_video_size_bytes <= 0:
            raise ValueError("Media size ceilings must be positive")
        if not self.photo_content_types or not self.video_content_types:
            raise ValueError("Content-type allow-lists must not be empty")
        if not self.s3_bucket:
            raise ValueError("S3_BUCKET is required")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached gateway settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
