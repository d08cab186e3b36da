"""Live dashboard sessions over WebSocket.

Each accepted connection owns one FeedSession: a FeedManager whose feed
events are rendered to JSON messages and sent under a per-session lock.
Sessions are tracked in FeedSessionRegistry (app.state.feed_sessions, set
in lifespan) so shutdown can tear every live feed down.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from fastapi import WebSocket, WebSocketDisconnect

from spin_admin.application.dtos.feeds import FeedEvent
from spin_admin.application.feeds import FeedManager
from spin_admin.application.services.stats_projector import project_distribution
from spin_admin.domain.entities import SpinEvent
from spin_admin.domain.enums import FeedName
from spin_admin.schemas.feeds import (
    FeedErrorMessage,
    PrizeShareItem,
    PrizeStatsMessage,
    RecentSpinsMessage,
    SpinItem,
)
from spin_admin.shared.utils.datetime import time_ago, utc_now

if TYPE_CHECKING:
    from spin_admin.application.interfaces.store import IDocumentStore

logger = logging.getLogger(__name__)

REFRESH_ACTION = "refresh"


def render_feed_event(event: FeedEvent, now: datetime | None = None) -> dict[str, Any]:
    """Build the JSON message for one feed event."""
    if event.error is not None:
        return FeedErrorMessage(feed=event.feed.value, error=event.error.message).model_dump()
    if event.feed is FeedName.RECENT_SPINS:
        now = now or utc_now()
        spins: list[SpinEvent] = event.data
        return RecentSpinsMessage(
            spins=[
                SpinItem(
                    id=spin.id,
                    user_id=spin.principal_id,
                    prize=spin.prize_label,
                    timestamp=spin.occurred_at.isoformat() if spin.occurred_at else None,
                    time_ago=time_ago(spin.occurred_at, now) if spin.occurred_at else None,
                )
                for spin in spins
            ]
        ).model_dump()
    counts: dict[str, int] = event.data
    return PrizeStatsMessage(
        total=sum(counts.values()),
        shares=[
            PrizeShareItem(label=s.label, count=s.count, percentage=s.percentage)
            for s in project_distribution(counts)
        ],
    ).model_dump()


def parse_refresh(text: str) -> tuple[bool, FeedName | None]:
    """Parse a client frame: 'refresh' or {"action": "refresh", "feed": <name>}.

    Returns (is_refresh, feed); feed None means every feed.

    Raises:
        ValueError: If the frame names an unknown feed.
    """
    stripped = text.strip()
    if stripped == REFRESH_ACTION:
        return True, None
    try:
        payload = json.loads(stripped)
    except json.JSONDecodeError:
        return False, None
    if not isinstance(payload, dict) or payload.get("action") != REFRESH_ACTION:
        return False, None
    feed = payload.get("feed")
    return True, FeedName(feed) if feed else None


class FeedSession:
    """One dashboard connection and the feeds it watches."""

    def __init__(
        self,
        websocket: WebSocket,
        store: IDocumentStore,
        *,
        uid: str,
        recent_limit: int,
    ) -> None:
        self.websocket = websocket
        self.uid = uid
        self.feeds = FeedManager(store, recent_limit=recent_limit)
        self._send_lock = asyncio.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> None:
        """Attach both feeds; each pushes its first snapshot when it arrives."""
        self.feeds.recent_events(self.on_event)
        self.feeds.distribution_stats(self.on_event)

    async def send(self, message: dict[str, Any]) -> None:
        if self._closed:
            return
        async with self._send_lock:
            await self.websocket.send_json(message)

    async def on_event(self, event: FeedEvent) -> None:
        """Feed callback: forward the event; a dead socket closes the session.

        A snapshot that cannot be rendered is reported as a feed_error
        for that feed.
        """
        if self._closed:
            return
        try:
            message = render_feed_event(event)
        except (ValueError, TypeError) as e:
            logger.error("Could not render %s snapshot for uid %s: %s", event.feed.value, self.uid, e)
            message = FeedErrorMessage(
                feed=event.feed.value,
                error=f"Live feed '{event.feed.value}' sent data that could not be displayed",
            ).model_dump()
        try:
            await self.send(message)
        except (WebSocketDisconnect, RuntimeError) as e:
            logger.info("Feed session for uid %s lost its socket: %s", self.uid, e)
            self.close()

    def refresh(self, feed: FeedName | None = None) -> None:
        if not self._closed:
            self.feeds.refresh(feed)

    def close(self) -> None:
        """Tear the feeds down. Idempotent."""
        self._closed = True
        self.feeds.teardown_all()


class FeedSessionRegistry:
    """Tracks live sessions; lock-protected for concurrent connects."""

    def __init__(self) -> None:
        self._sessions: set[FeedSession] = set()
        self._lock = asyncio.Lock()

    async def register(self, session: FeedSession) -> None:
        async with self._lock:
            self._sessions.add(session)

    async def unregister(self, session: FeedSession) -> None:
        """Close the session and forget it (call on disconnect)."""
        session.close()
        async with self._lock:
            self._sessions.discard(session)

    async def close_all(self) -> int:
        """Close every live session; returns how many were open."""
        async with self._lock:
            sessions, self._sessions = list(self._sessions), set()
        for session in sessions:
            session.close()
        return len(sessions)

    async def get_session_count(self) -> int:
        async with self._lock:
            return len(self._sessions)
