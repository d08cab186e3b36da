"""Bulk delete spins in atomic chunks."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from spin_admin.application.dtos.delete import BulkDeleteResult
from spin_admin.core.constants import DEFAULT_DELETE_CHUNK_SIZE, STORE_MAX_WRITES_PER_BATCH
from spin_admin.domain.exceptions import InvalidRequestException, StoreCommitFailure
from spin_admin.infrastructure.firebase.collections import COLLECTION_SPINS
from spin_admin.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

if TYPE_CHECKING:
    from spin_admin.application.interfaces.store import IDocumentStore

logger = logging.getLogger(__name__)


def _normalize_ids(ids: Iterable[Any] | None) -> list[str]:
    """Drop empty entries and coerce the rest to str, keeping order."""
    return [str(i) for i in (ids or []) if i]


class BulkDeleteCoordinator:
    """Deletes documents one batch per chunk, strictly in order.

    Each chunk commits atomically. The first failing commit stops the run
    with StoreCommitFailure; chunks committed before it stay deleted and
    are reported in its deleted count. Nothing is retried.
    """

    def __init__(
        self,
        store: IDocumentStore,
        *,
        chunk_size: int = DEFAULT_DELETE_CHUNK_SIZE,
        collection: str = COLLECTION_SPINS,
    ) -> None:
        if not 1 <= chunk_size <= STORE_MAX_WRITES_PER_BATCH:
            raise ValueError(
                f"chunk_size must be between 1 and {STORE_MAX_WRITES_PER_BATCH}"
            )
        self._store = store
        self._chunk_size = chunk_size
        self._collection = collection

    @traced("spins.bulk_delete")
    async def delete_spins(self, ids: Iterable[Any] | None) -> BulkDeleteResult:
        """Delete the given spin ids.

        Missing documents count as deleted: the count covers every id
        submitted in a committed chunk.

        Raises:
            InvalidRequestException: If an id contains '/'; nothing is committed.
            StoreCommitFailure: If a chunk commit fails.
        """
        doc_ids = _normalize_ids(ids)
        add_span_attributes(requested=len(doc_ids), chunk_size=self._chunk_size)
        if not doc_ids:
            return BulkDeleteResult(deleted=0)
        for doc_id in doc_ids:
            if "/" in doc_id:
                raise InvalidRequestException(
                    "Document ids must not contain '/'", field="ids"
                )

        collection = self._store.collection(self._collection)
        deleted = 0
        committed: list[int] = []
        for index, start in enumerate(range(0, len(doc_ids), self._chunk_size), start=1):
            chunk = doc_ids[start : start + self._chunk_size]
            batch = self._store.batch()
            for doc_id in chunk:
                batch.delete(collection.document(doc_id))
            try:
                await batch.commit()
            except Exception as e:
                logger.error(
                    "Bulk delete stopped at chunk %d (%d ids); %d already deleted: %s",
                    index,
                    len(chunk),
                    deleted,
                    e,
                )
                add_span_attributes(deleted=deleted, failed_chunk=index)
                raise StoreCommitFailure(
                    deleted=deleted,
                    failed_chunk=index,
                    chunk_size=len(chunk),
                    reason=str(e) or e.__class__.__name__,
                ) from e
            deleted += len(chunk)
            committed.append(len(chunk))
            add_span_event("chunk_committed", chunk=index, size=len(chunk))
            logger.debug("Committed chunk %d (%d ids)", index, len(chunk))

        add_span_attributes(deleted=deleted, chunks=len(committed))
        logger.info("Bulk delete removed %d %s in %d chunks", deleted, self._collection, len(committed))
        return BulkDeleteResult(deleted=deleted, chunks=committed)
