"""Feed manager: the named live feeds of one dashboard session."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from spin_admin.application.dtos.feeds import FeedEvent
from spin_admin.application.feeds.subscription import SubscriptionHandle
from spin_admin.core.constants import (
    DEFAULT_RECENT_SPINS_LIMIT,
    MAX_RECENT_SPINS_LIMIT,
)
from spin_admin.domain.entities import FIELD_TIMESTAMP, PrizeDistribution, SpinEvent
from spin_admin.domain.enums import FeedName
from spin_admin.domain.exceptions import InvalidRequestException
from spin_admin.infrastructure.firebase.collections import (
    COLLECTION_SPINS,
    COLLECTION_STATS,
    DOC_PRIZE_DISTRIBUTION,
)

if TYPE_CHECKING:
    from spin_admin.application.interfaces.store import IDocumentStore, IWatchable

logger = logging.getLogger(__name__)

FeedCallback = Callable[[FeedEvent], Any]


@dataclass
class _Feed:
    handle: SubscriptionHandle
    source: Callable[[], IWatchable]


class FeedManager:
    """Owns one SubscriptionHandle per FeedName.

    Each feed slot is written only here: opening a feed again replaces
    its handle after stopping the old one. Consumers receive FeedEvent
    objects carrying either the full current data or an error.
    """

    def __init__(
        self,
        store: IDocumentStore,
        *,
        recent_limit: int = DEFAULT_RECENT_SPINS_LIMIT,
    ) -> None:
        self._store = store
        self._recent_limit = recent_limit
        self._feeds: dict[FeedName, _Feed] = {}

    @property
    def active_count(self) -> int:
        """Number of feeds with an attached listener."""
        return sum(1 for f in self._feeds.values() if f.handle.is_active)

    def handle(self, feed: FeedName) -> SubscriptionHandle | None:
        entry = self._feeds.get(feed)
        return entry.handle if entry else None

    def recent_events(
        self, callback: FeedCallback, limit: int | None = None
    ) -> SubscriptionHandle:
        """Listen to the newest spins; each push is the full bounded list of SpinEvent."""
        limit = self._recent_limit if limit is None else limit
        if not 1 <= limit <= MAX_RECENT_SPINS_LIMIT:
            raise InvalidRequestException(
                f"limit must be between 1 and {MAX_RECENT_SPINS_LIMIT}", field="limit"
            )

        def source() -> IWatchable:
            return (
                self._store.collection(COLLECTION_SPINS)
                .order_by(FIELD_TIMESTAMP, "DESCENDING")
                .limit(limit)
            )

        def transform(snapshots: list[Any]) -> list[SpinEvent]:
            return [SpinEvent.from_document(s.id, s.to_dict()) for s in snapshots]

        return self._open(FeedName.RECENT_SPINS, source, transform, callback)

    def distribution_stats(self, callback: FeedCallback) -> SubscriptionHandle:
        """Listen to the prize aggregate; each push is the decoded label -> count mapping."""

        def source() -> IWatchable:
            return self._store.collection(COLLECTION_STATS).document(DOC_PRIZE_DISTRIBUTION)

        def transform(snapshot: Any) -> dict[str, int]:
            data = snapshot.to_dict() if snapshot is not None and snapshot.exists else None
            return PrizeDistribution.from_document(data).counts

        return self._open(FeedName.PRIZE_STATS, source, transform, callback)

    def _open(
        self,
        feed: FeedName,
        source: Callable[[], IWatchable],
        transform: Callable[[Any], Any],
        callback: FeedCallback,
    ) -> SubscriptionHandle:
        previous = self._feeds.pop(feed, None)
        if previous is not None:
            previous.handle.stop()
        handle = SubscriptionHandle(
            feed,
            lambda raw: callback(FeedEvent(feed, data=transform(raw))),
            lambda failure: callback(FeedEvent(feed, error=failure)),
        )
        handle.start(source())
        self._feeds[feed] = _Feed(handle=handle, source=source)
        logger.info("Feed %s opened", feed.value)
        return handle

    def refresh(self, feed: FeedName | None = None) -> None:
        """Re-subscribe one feed (or every configured feed) from scratch."""
        targets = [feed] if feed is not None else list(self._feeds)
        for name in targets:
            entry = self._feeds.get(name)
            if entry is None:
                logger.info("Refresh ignored for unconfigured feed %s", name.value)
                continue
            entry.handle.start(entry.source())
            logger.debug("Feed %s refreshed", name.value)

    def teardown_all(self) -> None:
        """Stop every handle. Safe to repeat; refresh() re-attaches afterwards."""
        for entry in self._feeds.values():
            entry.handle.stop()
        logger.debug("Feeds torn down (%d configured)", len(self._feeds))
