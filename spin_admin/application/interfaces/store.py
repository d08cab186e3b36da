"""Document store ports consumed by feeds and use cases.

The Firestore REST client in infrastructure satisfies these structurally;
tests use an in-memory fake.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any, Protocol


class ISnapshot(Protocol):
    """A document as delivered by get(), stream() or a listener."""

    id: str
    exists: bool

    def to_dict(self) -> dict[str, Any]:
        """Decoded document fields."""


class IListenerRegistration(Protocol):
    """Handle returned by on_snapshot(); unsubscribe() stops delivery."""

    def unsubscribe(self) -> None:
        """Release the listener. Idempotent."""


class IWatchable(Protocol):
    """Anything that can be listened to: an ordered query or one document."""

    def on_snapshot(
        self,
        callback: Callable[[Any], Any],
        on_error: Callable[[Exception], Any] | None = None,
    ) -> IListenerRegistration:
        """Attach a listener; callback receives the full current result each time."""


class IQuery(IWatchable, Protocol):
    def limit(self, n: int) -> IQuery: ...

    async def get(self) -> list[Any]: ...


class IDocumentReference(IWatchable, Protocol):
    @property
    def id(self) -> str: ...

    async def get(self) -> Any | None: ...


class ICollectionReference(Protocol):
    def document(self, document_id: str) -> IDocumentReference: ...

    def order_by(self, field: str, direction: str = "ASCENDING") -> IQuery: ...

    def stream(self) -> AsyncIterator[Any]: ...


class IWriteBatch(Protocol):
    """Atomic group of at most 500 writes."""

    def delete(self, reference: Any) -> None: ...

    async def commit(self) -> None:
        """Apply every queued write or none of them."""


class IDocumentStore(Protocol):
    def collection(self, collection_id: str) -> ICollectionReference: ...

    def batch(self) -> IWriteBatch: ...
