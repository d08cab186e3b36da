"""Application interfaces (ports): store and identity protocols.

No runtime imports from spin_admin.infrastructure or spin_admin.api.
"""

from spin_admin.application.interfaces.identity import IIdentityProvider
from spin_admin.application.interfaces.store import (
    ICollectionReference,
    IDocumentReference,
    IDocumentStore,
    IListenerRegistration,
    IQuery,
    ISnapshot,
    IWatchable,
    IWriteBatch,
)

__all__ = [
    "ICollectionReference",
    "IDocumentReference",
    "IDocumentStore",
    "IIdentityProvider",
    "IListenerRegistration",
    "IQuery",
    "ISnapshot",
    "IWatchable",
    "IWriteBatch",
]
