"""Thin Firestore REST API client (no firebase-admin).

Read-only: the gateway only fetches single documents to answer membership
questions. Uses google-auth for service account tokens and Firestore REST
v1; against the emulator it talks plain HTTP with the emulator's 'owner'
token. All HTTP calls use httpx.AsyncClient so they do not block the
event loop.
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import httpx

from media_gateway.infrastructure.exceptions import FirestoreRequestError
from media_gateway.infrastructure.firebase._rest_encoding import decode_document

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_EMULATOR_TOKEN = "owner"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await self._client.get_json(self._path)
        if out is None:
            return None
        return DocumentSnapshot(self._path.split("/")[-1], decode_document(out))

    def collection(self, collection_id: str) -> "CollectionReference":
        return CollectionReference(self._client, f"{self._path}/{collection_id}")


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(
            self._client, f"{self._path}/{quote(document_id, safe='')}"
        )


class FirestoreRESTClient:
    """Lightweight read-only Firestore client using the REST API.

    Pass credentials=None together with emulator_host to talk to the
    Firestore emulator.
    """

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        emulator_host: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        if credentials is None and not emulator_host:
            raise ValueError("Firestore credentials are required outside the emulator")
        self._project_id = project_id
        self._credentials = credentials
        self._base = f"http://{emulator_host}/v1" if emulator_host else _BASE
        self._emulator = bool(emulator_host)
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = (
            http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        )
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        if self._emulator:
            return _EMULATOR_TOKEN
        return await asyncio.to_thread(_get_access_token, self._credentials)

    async def get_json(self, path: str) -> dict[str, Any] | None:
        """GET a document by its full resource path. 404 returns None.

        Raises:
            FirestoreRequestError: Any other non-200 status.
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {await self.get_token()}",
        }
        resp = await self._http.get(f"{self._base}/{path}", headers=headers)
        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            raise FirestoreRequestError(resp.status_code, path)
        return resp.json() if resp.content else {}

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")
