"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Transport and server errors surface as StoreUnavailableException; 404 is
reported as a missing document (None).
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from app.domain.exceptions import StoreUnavailableException
from app.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    encode_document,
)

logger = logging.getLogger(__name__)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    if not credentials.valid:
        from google.auth.transport.requests import Request

        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
) -> Any:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method not in ("GET", "PATCH", "POST", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    try:
        resp = await client.request(method, url, headers=headers, json=body)
        if resp.status_code == 404:
            return None
        if resp.status_code == 409:
            raise DocumentExistsError("Document already exists")
        if resp.status_code not in (200, 204):
            resp.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("Firestore %s %s failed: %s", method, url, e)
        raise StoreUnavailableException(f"{method} {url.rsplit('/', 1)[-1]}") from e
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentExistsError(Exception):
    """Raised when createDocument returns 409 (document ID already exists)."""


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return dict(self._data)


def _snapshot(doc: dict) -> DocumentSnapshot:
    name = doc.get("name", "")
    doc_id = name.split("/")[-1] if name else ""
    return DocumentSnapshot(doc_id, decode_document(doc))


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.split("/")[-1]

    async def update(self, data: dict[str, Any]) -> DocumentSnapshot | None:
        """Merge the given fields into an existing document.

        Only the fields in data are written (update mask). Returns the full
        updated document, or None if the document does not exist.
        """
        params = [("updateMask.fieldPaths", k) for k in data]
        params.append(("currentDocument.exists", "true"))
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}?{urlencode(params)}",
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return _snapshot(out)

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="DELETE",
            access_token=await self._client.get_token(),
        )


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array-contains": "ARRAY_CONTAINS",
}

DESCENDING = "DESCENDING"
ASCENDING = "ASCENDING"


class _Query:
    """Fluent query builder for collection; runs via runQuery (filter and order on server)."""

    def __init__(self, client: "FirestoreRESTClient", parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict[str, Any]] = []
        self._order_by_field: str | None = None
        self._order_direction: str = ASCENDING

    def where(self, field: str, op: str, value: Any) -> "_Query":
        self._filters.append(
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": _OP_MAP.get(op, op),
                    "value": _encode_value(value),
                }
            }
        )
        return self

    def order_by(self, field: str, direction: str = ASCENDING) -> "_Query":
        self._order_by_field = field
        self._order_direction = direction
        return self

    def _structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if len(self._filters) == 1:
            structured["where"] = self._filters[0]
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {"op": "AND", "filters": self._filters}
            }
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": self._order_by_field},
                    "direction": self._order_direction,
                }
            ]
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": self._structured_query()},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            yield _snapshot(item["document"])


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        url = f"{_BASE}/{self._path}?documentId={quote(document_id, safe='')}"
        await _request_async(
            self._client._http,
            url,
            method="POST",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )

    def _query(self) -> _Query:
        parent = self._path.rsplit("/", 1)[0]
        collection_id = self._path.split("/")[-1]
        return _Query(self._client, parent, collection_id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Chain .where() and .order_by(), then .stream()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = ASCENDING) -> _Query:
        """Start an unfiltered, ordered query."""
        return self._query().order_by(field, direction)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")
