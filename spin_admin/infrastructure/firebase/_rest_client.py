"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.

Supports the primitives the service consumes:
- await db.collection(name).document(id).get() -> DocumentSnapshot | None
- async for doc in db.collection(name).stream()
- db.collection(name).order_by(field, "DESCENDING").limit(n).on_snapshot(cb, err)
- db.collection(name).document(id).on_snapshot(cb, err)
- batch = db.batch(); batch.delete(ref); await batch.commit()  (atomic, <= 500 writes)
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx

from spin_admin.core.constants import STORE_MAX_WRITES_PER_BATCH
from spin_admin.infrastructure.firebase._listen import PollingListener
from spin_admin.infrastructure.firebase._rest_encoding import decode_document


FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_DEFAULT_POLL_INTERVAL = 2.0


def _get_credentials(key_dict: dict, scopes: list[str] | None = None):
    """Return google.oauth2.service_account.Credentials for the given scopes."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=scopes or [FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: dict | None = None,
) -> Any:
    """Perform async HTTP request to a Google REST API. 404 returns None; other errors raise."""
    if method not in ("GET", "POST", "PATCH", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    resp = await client.request(method, url, headers=headers, json=body, params=params)
    if resp.status_code == 404:
        return None
    resp.raise_for_status()
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


def _doc_id(name: str) -> str:
    return name.split("/")[-1] if name else ""


class DocumentSnapshot:
    """Snapshot of a document (id + data). exists is False for a missing document."""

    def __init__(self, id_: str, data: dict, exists: bool = True):
        self.id = id_
        self._data = data
        self.exists = exists

    def to_dict(self) -> dict:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentSnapshot):
            return NotImplemented
        return (self.id, self.exists, self._data) == (other.id, other.exists, other._data)

    def __repr__(self) -> str:
        return f"DocumentSnapshot(id={self.id!r}, exists={self.exists})"


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    @property
    def path(self) -> str:
        """Full resource name (projects/.../documents/<collection>/<id>)."""
        return self._path

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            access_token=await self._client.get_token(),
        )
        if out is None:
            return None
        return DocumentSnapshot(self.id, decode_document(out.get("fields")))

    async def _current(self) -> DocumentSnapshot:
        snapshot = await self.get()
        return snapshot if snapshot is not None else DocumentSnapshot(self.id, {}, exists=False)

    def on_snapshot(
        self,
        callback: Callable[[DocumentSnapshot], Any],
        on_error: Callable[[Exception], Any] | None = None,
    ) -> PollingListener[DocumentSnapshot]:
        """Listen to this document. A missing document is delivered with exists=False."""
        return PollingListener(
            self._current,
            callback,
            on_error,
            interval=self._client.poll_interval,
            name=self._path.split("/documents/", 1)[-1],
        ).start()


class _Query:
    """Ordered, limited query over one collection; runs via runQuery (order/limit on server)."""

    def __init__(self, client: FirestoreRESTClient, parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._order_by_field: str | None = None
        self._order_direction: str = "ASCENDING"
        self._limit: int = 100

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        self._order_by_field = field
        self._order_direction = direction
        return self

    def limit(self, n: int) -> _Query:
        self._limit = n
        return self

    def _structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": self._order_by_field},
                    "direction": self._order_direction,
                }
            ]
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def get(self) -> list[DocumentSnapshot]:
        """Execute the query and return all matching snapshots in query order."""
        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": self._structured_query()},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        return [
            DocumentSnapshot(_doc_id(item["document"].get("name", "")), decode_document(item["document"].get("fields")))
            for item in items
            if "document" in item
        ]

    def on_snapshot(
        self,
        callback: Callable[[list[DocumentSnapshot]], Any],
        on_error: Callable[[Exception], Any] | None = None,
    ) -> PollingListener[list[DocumentSnapshot]]:
        """Listen to the query; each delivery is the full current result list."""
        return PollingListener(
            self.get,
            callback,
            on_error,
            interval=self._client.poll_interval,
            name=f"{self._collection_id}?orderBy={self._order_by_field}&limit={self._limit}",
        ).start()


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        """Start an ordered query. Chain .limit(), then .get() or .on_snapshot()."""
        parent, collection_id = self._path.rsplit("/", 1)
        return _Query(self._client, parent, collection_id).order_by(field, direction)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List documents in the collection (shallow), following page tokens."""
        params: dict[str, str] = {}
        while True:
            out = await _request_async(
                self._client._http,
                f"{_BASE}/{self._path}",
                access_token=await self._client.get_token(),
                params=params or None,
            )
            if not out:
                return
            for doc in out.get("documents", []):
                yield DocumentSnapshot(_doc_id(doc.get("name", "")), decode_document(doc.get("fields")))
            token = out.get("nextPageToken")
            if not token:
                return
            params = {"pageToken": token}


class WriteBatch:
    """Atomic group of writes committed with one documents:commit call.

    Either every write applies or none does. Holds at most
    STORE_MAX_WRITES_PER_BATCH writes.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._writes: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._writes)

    def _add(self, write: dict[str, Any]) -> None:
        if len(self._writes) >= STORE_MAX_WRITES_PER_BATCH:
            raise ValueError(
                f"A batch holds at most {STORE_MAX_WRITES_PER_BATCH} writes"
            )
        self._writes.append(write)

    def delete(self, reference: DocumentReference) -> None:
        """Queue a delete. Deleting a missing document is not an error."""
        self._add({"delete": reference.path})

    async def commit(self) -> None:
        """Apply all queued writes atomically. Raises httpx.HTTPError on failure."""
        if not self._writes:
            return
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._client.documents_path}:commit",
            method="POST",
            body={"writes": self._writes},
            access_token=await self._client.get_token(),
        )
        if out is None:
            raise httpx.HTTPStatusError(
                "Commit target not found",
                request=httpx.Request("POST", f"{_BASE}/{self._client.documents_path}:commit"),
                response=httpx.Response(404),
            )
        self._writes = []


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        poll_interval: float = _DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None
        self.poll_interval = poll_interval

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def documents_path(self) -> str:
        return self._prefix

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def batch(self) -> WriteBatch:
        return WriteBatch(self)
