"""Presentation-layer dependency injection (composition root).

Components are built here from the Firebase clients stored on app.state
at startup; routes depend only on these providers. Tests override
get_optional_firebase (or any narrower provider) with fakes.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.requests import HTTPConnection

from spin_admin.api.websocket import FeedSessionRegistry
from spin_admin.application.dtos.principal import Principal
from spin_admin.application.interfaces.identity import IIdentityProvider
from spin_admin.application.interfaces.store import IDocumentStore
from spin_admin.application.services.privilege_gate import PrivilegeGate
from spin_admin.application.use_cases.dashboard_queries import DashboardQueries
from spin_admin.application.use_cases.delete_spins import BulkDeleteCoordinator
from spin_admin.core.config import get_settings
from spin_admin.domain.exceptions import StoreUnavailableException
from spin_admin.infrastructure.firebase.client import FirebaseApp

_bearer = HTTPBearer(auto_error=False)


def get_optional_firebase(connection: HTTPConnection) -> FirebaseApp | None:
    """Firebase clients built in lifespan, or None when credentials are not configured."""
    return getattr(connection.app.state, "firebase", None)


def get_firebase(
    firebase: Annotated[FirebaseApp | None, Depends(get_optional_firebase)],
) -> FirebaseApp:
    if firebase is None:
        raise StoreUnavailableException()
    return firebase


def get_store(firebase: Annotated[FirebaseApp, Depends(get_firebase)]) -> IDocumentStore:
    return firebase.firestore


def get_identity(
    firebase: Annotated[FirebaseApp, Depends(get_firebase)],
) -> IIdentityProvider:
    return firebase.auth


def build_privilege_gate(identity: IIdentityProvider) -> PrivilegeGate:
    """PrivilegeGate configured from settings (also used by the WebSocket endpoint)."""
    settings = get_settings()
    secret = (
        settings.admin_setup_secret.get_secret_value()
        if settings.admin_setup_secret
        else None
    )
    return PrivilegeGate(
        identity, secret, check_revoked=settings.verify_token_revocation
    )


def get_privilege_gate(
    identity: Annotated[IIdentityProvider, Depends(get_identity)],
) -> PrivilegeGate:
    return build_privilege_gate(identity)


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    gate: Annotated[PrivilegeGate, Depends(get_privilege_gate)],
) -> Principal:
    """Verified caller from the Authorization: Bearer <ID token> header (401 otherwise)."""
    token = credentials.credentials if credentials else None
    return await gate.authenticate(token)


def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
    gate: Annotated[PrivilegeGate, Depends(get_privilege_gate)],
) -> Principal:
    """Caller with the admin claim (403 otherwise)."""
    return gate.require_admin(principal)


def get_bulk_delete_coordinator(
    store: Annotated[IDocumentStore, Depends(get_store)],
) -> BulkDeleteCoordinator:
    return BulkDeleteCoordinator(store, chunk_size=get_settings().delete_chunk_size)


def get_dashboard_queries(
    store: Annotated[IDocumentStore, Depends(get_store)],
) -> DashboardQueries:
    return DashboardQueries(store)


def get_feed_registry(connection: HTTPConnection) -> FeedSessionRegistry:
    """Session registry from app.state (set in lifespan)."""
    registry = getattr(connection.app.state, "feed_sessions", None)
    if registry is None:
        registry = FeedSessionRegistry()
        connection.app.state.feed_sessions = registry
    return registry
