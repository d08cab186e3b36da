"""Read-only dashboard lookups: prize catalogue and user records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from spin_admin.domain.exceptions import ResourceNotFoundException
from spin_admin.infrastructure.firebase.collections import COLLECTION_PRIZES, COLLECTION_USERS

if TYPE_CHECKING:
    from spin_admin.application.interfaces.store import IDocumentStore


class DashboardQueries:
    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def list_prizes(self) -> list[dict[str, Any]]:
        """Every prize document as {id, **fields}."""
        return [
            {"id": doc.id, **doc.to_dict()}
            async for doc in self._store.collection(COLLECTION_PRIZES).stream()
        ]

    async def get_user_details(self, user_id: str) -> dict[str, Any]:
        """The users/{user_id} document as {id, **fields}.

        Raises:
            ResourceNotFoundException: If the document does not exist.
        """
        doc = await self._store.collection(COLLECTION_USERS).document(user_id).get()
        if doc is None or not doc.exists:
            raise ResourceNotFoundException("user", user_id)
        return {"id": doc.id, **doc.to_dict()}
