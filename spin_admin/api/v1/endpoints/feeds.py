"""Live dashboard feeds over WebSocket.

Connect to /api/v1/feeds/ws?token=<Firebase ID token>. The caller must
carry the admin claim. The server pushes recent_spins, prize_stats and
feed_error messages; send 'refresh' (or {"action": "refresh", "feed":
"recent_spins"}) to re-subscribe.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from spin_admin.api.v1.dependencies import (
    build_privilege_gate,
    get_feed_registry,
    get_optional_firebase,
)
from spin_admin.api.websocket import FeedSession, FeedSessionRegistry
from spin_admin.api.websocket.sessions import parse_refresh
from spin_admin.core.config import get_settings
from spin_admin.domain.exceptions import (
    PermissionDeniedException,
    UnauthenticatedException,
)
from spin_admin.infrastructure.firebase.client import FirebaseApp

logger = logging.getLogger(__name__)

router = APIRouter()


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


@router.websocket("/ws")
async def feeds_websocket(
    websocket: WebSocket,
    firebase: Annotated[FirebaseApp | None, Depends(get_optional_firebase)],
    registry: Annotated[FeedSessionRegistry, Depends(get_feed_registry)],
) -> None:
    """Authenticate, open both feeds, and serve refresh requests until disconnect."""
    if firebase is None:
        await _reject_websocket(websocket, "Document store is not configured", code=1011)
        return
    gate = build_privilege_gate(firebase.auth)
    try:
        principal = gate.require_admin(
            await gate.authenticate(websocket.query_params.get("token"))
        )
    except (UnauthenticatedException, PermissionDeniedException) as e:
        await _reject_websocket(websocket, e.message)
        return

    await websocket.accept()
    session = FeedSession(
        websocket,
        firebase.firestore,
        uid=principal.uid,
        recent_limit=get_settings().recent_spins_limit,
    )
    await registry.register(session)
    logger.info("Feed session opened for uid %s", principal.uid)
    try:
        session.open()
        while True:
            text = await websocket.receive_text()
            try:
                is_refresh, feed = parse_refresh(text)
            except ValueError:
                await session.send({"type": "error", "error": "Unknown feed"})
                continue
            if is_refresh:
                session.refresh(feed)
    except WebSocketDisconnect:
        logger.info("Feed session closed by uid %s", principal.uid)
    finally:
        await registry.unregister(session)
