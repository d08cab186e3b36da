"""One live query with exactly one attached listener.

start() always releases the previous listener before attaching the next,
and every attachment is stamped with a generation number. A callback that
arrives from a released listener carries a stale generation and is
dropped, so after stop() returns nothing reaches the consumer.

Consumer callbacks may be coroutines. The handle returns their awaitable
to the store's listener, which awaits it before the next delivery.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from spin_admin.domain.enums import FeedName, FeedState
from spin_admin.domain.exceptions import SubscriptionDeliveryFailure

if TYPE_CHECKING:
    from spin_admin.application.interfaces.store import (
        IListenerRegistration,
        IWatchable,
    )

logger = logging.getLogger(__name__)


class SubscriptionHandle:
    """Start/stop wrapper around query.on_snapshot for one logical feed."""

    def __init__(
        self,
        feed: FeedName,
        on_next: Callable[[Any], Any],
        on_error: Callable[[SubscriptionDeliveryFailure], Any],
    ) -> None:
        self.feed = feed
        self._on_next = on_next
        self._on_error = on_error
        self._registration: IListenerRegistration | None = None
        self._generation = 0
        self._state = FeedState.INACTIVE
        self._last_error: SubscriptionDeliveryFailure | None = None

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def last_error(self) -> SubscriptionDeliveryFailure | None:
        return self._last_error

    @property
    def is_active(self) -> bool:
        """True while a listener is attached (including the errored state)."""
        return self._registration is not None

    def start(self, query: IWatchable) -> None:
        """Attach a listener to query, releasing any current one first."""
        self.stop()
        self._generation += 1
        generation = self._generation
        self._registration = query.on_snapshot(
            lambda snapshot: self._deliver(generation, snapshot),
            lambda exc: self._fail(generation, exc),
        )
        self._state = FeedState.ACTIVE
        self._last_error = None
        logger.debug("Feed %s attached (generation %d)", self.feed.value, generation)

    def stop(self) -> None:
        """Release the listener. Idempotent; a no-op on a never-started handle."""
        registration, self._registration = self._registration, None
        self._generation += 1
        self._state = FeedState.INACTIVE
        if registration is not None:
            registration.unsubscribe()
            logger.debug("Feed %s released", self.feed.value)

    def _is_current(self, generation: int) -> bool:
        return self._registration is not None and generation == self._generation

    def _deliver(self, generation: int, snapshot: Any) -> Any:
        if not self._is_current(generation):
            logger.debug("Dropped late snapshot for feed %s", self.feed.value)
            return None
        self._state = FeedState.ACTIVE
        self._last_error = None
        return self._on_next(snapshot)

    def _fail(self, generation: int, exc: Exception) -> Any:
        if not self._is_current(generation):
            return None
        failure = SubscriptionDeliveryFailure(self.feed.value, str(exc))
        self._state = FeedState.ERRORED
        self._last_error = failure
        logger.warning("Feed %s reported an error: %s", self.feed.value, exc)
        return self._on_error(failure)
