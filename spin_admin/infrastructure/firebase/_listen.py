"""Live listeners for the Firestore REST client.

The REST API has no push channel, so a listener polls its query (or
document) on an interval and emits a snapshot only when the result
differs from the last one emitted. The first successful fetch is always
emitted. Callbacks may be plain functions or coroutines; a coroutine is
awaited before the next poll, so deliveries for one listener never
overlap or reorder.

unsubscribe() takes effect immediately: the active flag is checked
after every await, so no callback starts once it has returned.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOTHING = object()


async def _invoke(callback: Callable[[Any], Any], arg: Any) -> None:
    result = callback(arg)
    if inspect.isawaitable(result):
        await result


class PollingListener(Generic[T]):
    """One attached listener; returned by on_snapshot() as its registration."""

    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        on_snapshot: Callable[[T], Any],
        on_error: Callable[[Exception], Any] | None,
        *,
        interval: float,
        name: str,
    ) -> None:
        self._fetch = fetch
        self._on_snapshot = on_snapshot
        self._on_error = on_error
        self._interval = interval
        self._name = name
        self._active = False
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> PollingListener[T]:
        """Schedule the poll loop on the running event loop."""
        if self._active:
            return self
        self._active = True
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"listen:{self._name}"
        )
        return self

    def unsubscribe(self) -> None:
        """Stop delivery. Idempotent."""
        if not self._active:
            return
        self._active = False
        task, self._task = self._task, None
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # Called from inside our own callback: the loop exits on its next check.
        if task is not current:
            task.cancel()
        logger.debug("Listener %s unsubscribed", self._name)

    async def _run(self) -> None:
        last: Any = _NOTHING
        while self._active:
            try:
                snapshot = await self._fetch()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.warning("Listener %s fetch failed: %s", self._name, exc)
                last = _NOTHING
                if self._active and self._on_error is not None:
                    await self._deliver(self._on_error, exc)
            else:
                if self._active and snapshot != last:
                    last = snapshot
                    await self._deliver(self._on_snapshot, snapshot)
            if self._active:
                await asyncio.sleep(self._interval)

    async def _deliver(self, callback: Callable[[Any], Any], arg: Any) -> None:
        try:
            await _invoke(callback, arg)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Listener %s callback raised", self._name)
