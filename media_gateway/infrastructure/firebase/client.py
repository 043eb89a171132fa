"""Firestore client factory (REST-based, no firebase-admin).

Credentials come from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON string,
e.g. on Vercel) or FIREBASE_SERVICE_ACCOUNT_PATH (file path). When
FIRESTORE_EMULATOR_HOST is set no credentials are needed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from media_gateway.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

if TYPE_CHECKING:
    from media_gateway.core.config import Settings

logger = logging.getLogger(__name__)


def load_service_account_info(settings: "Settings") -> dict | None:
    """Return service account dict from env key or file path, or None if neither is set.

    Raises:
        ValueError: Key is not valid JSON, or the configured path does not exist.
    """
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ValueError(
                f"FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: {resolved}"
            )
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def create_firestore_client(settings: "Settings") -> FirestoreRESTClient:
    """Build the Firestore REST client for membership lookups.

    Fails at startup rather than on the first request when production
    credentials are missing.
    """
    if settings.firestore_emulator_host:
        logger.info(
            "Using Firestore emulator at %s (project %s)",
            settings.firestore_emulator_host,
            settings.firebase_project_id,
        )
        return FirestoreRESTClient(
            settings.firebase_project_id,
            None,
            emulator_host=settings.firestore_emulator_host,
            timeout=settings.membership_timeout_seconds,
        )

    key_dict = load_service_account_info(settings)
    if not key_dict:
        raise ValueError(
            "Firestore credentials missing: set FIREBASE_SERVICE_ACCOUNT_KEY, "
            "FIREBASE_SERVICE_ACCOUNT_PATH or FIRESTORE_EMULATOR_HOST"
        )
    project_id = key_dict.get("project_id") or settings.firebase_project_id
    if not project_id:
        raise ValueError("Firebase service account JSON missing 'project_id'")
    if project_id != settings.firebase_project_id:
        logger.warning(
            "Service account project %s differs from FIREBASE_PROJECT_ID %s; using %s",
            project_id,
            settings.firebase_project_id,
            project_id,
        )
    return FirestoreRESTClient(
        project_id,
        _get_credentials(key_dict),
        timeout=settings.membership_timeout_seconds,
    )
