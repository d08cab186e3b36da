"""Tests for FeedManager: feed queries, replacement, refresh, teardown."""

from datetime import UTC, datetime

import pytest

from spin_admin.application.dtos.feeds import FeedEvent
from spin_admin.application.feeds import FeedManager
from spin_admin.core.constants import MAX_RECENT_SPINS_LIMIT
from spin_admin.domain.entities import SpinEvent
from spin_admin.domain.enums import FeedName, FeedState
from spin_admin.domain.exceptions import InvalidRequestException
from tests.fakes import FakeFirestore


def _spin(store: FakeFirestore, doc_id: str, minute: int, prize: str | None = "gold") -> None:
    data = {"userId": f"user-{doc_id}", "timestamp": datetime(2024, 5, 1, 12, minute, tzinfo=UTC)}
    if prize is not None:
        data["prize"] = prize
    store.put("spins", doc_id, data)


@pytest.fixture
def store() -> FakeFirestore:
    return FakeFirestore()


async def test_recent_events_queries_newest_first_with_limit(store: FakeFirestore) -> None:
    for minute, doc_id in enumerate(["a", "b", "c", "d"]):
        _spin(store, doc_id, minute)
    events: list[FeedEvent] = []
    manager = FeedManager(store, recent_limit=3)

    manager.recent_events(events.append)
    query = store.listeners[0].target
    await store.listeners[0].emit()

    assert (query.collection, query.field, query.direction, query.limit_value) == (
        "spins",
        "timestamp",
        "DESCENDING",
        3,
    )
    assert events[0].feed == FeedName.RECENT_SPINS
    assert [s.id for s in events[0].data] == ["d", "c", "b"]
    assert all(isinstance(s, SpinEvent) for s in events[0].data)


async def test_recent_events_delivers_full_list_each_time(store: FakeFirestore) -> None:
    _spin(store, "a", 1)
    events: list[FeedEvent] = []
    manager = FeedManager(store)
    manager.recent_events(events.append, limit=10)

    await store.listeners[0].emit()
    _spin(store, "b", 2, prize=None)
    await store.listeners[0].emit()

    assert [s.id for s in events[1].data] == ["b", "a"]
    assert events[1].data[0].prize_label == "N/A"


@pytest.mark.parametrize("limit", [0, MAX_RECENT_SPINS_LIMIT + 1])
def test_recent_events_rejects_out_of_range_limit(store: FakeFirestore, limit: int) -> None:
    manager = FeedManager(store)
    with pytest.raises(InvalidRequestException):
        manager.recent_events(lambda e: None, limit=limit)
    assert store.listeners == []


def test_recent_events_accepts_largest_window(store: FakeFirestore) -> None:
    FeedManager(store).recent_events(lambda e: None, limit=MAX_RECENT_SPINS_LIMIT)
    assert store.listeners[0].target.limit_value == MAX_RECENT_SPINS_LIMIT


async def test_distribution_stats_decodes_mapping(store: FakeFirestore) -> None:
    store.put("stats", "prizeDistribution", {"gold": 3, "silver": 1, "updatedAt": "x"})
    events: list[FeedEvent] = []
    FeedManager(store).distribution_stats(events.append)

    await store.listeners[0].emit()

    assert events[0].feed == FeedName.PRIZE_STATS
    assert events[0].data == {"gold": 3, "silver": 1}


async def test_distribution_stats_missing_document_is_empty(store: FakeFirestore) -> None:
    events: list[FeedEvent] = []
    FeedManager(store).distribution_stats(events.append)

    await store.listeners[0].emit()

    assert events[0].data == {}


async def test_feed_error_becomes_error_event(store: FakeFirestore) -> None:
    events: list[FeedEvent] = []
    manager = FeedManager(store)
    manager.distribution_stats(events.append)

    await store.listeners[0].fail(RuntimeError("unavailable"))

    assert events[0].is_error
    assert events[0].error.feed == "prize_stats"
    assert manager.handle(FeedName.PRIZE_STATS).state == FeedState.ERRORED


def test_back_to_back_refresh_leaves_one_listener_per_feed(store: FakeFirestore) -> None:
    manager = FeedManager(store)
    manager.recent_events(lambda e: None)
    manager.distribution_stats(lambda e: None)

    manager.refresh()
    manager.refresh()

    assert len(store.active_listeners) == 2
    assert manager.active_count == 2


def test_refresh_single_feed(store: FakeFirestore) -> None:
    manager = FeedManager(store)
    manager.recent_events(lambda e: None)
    manager.distribution_stats(lambda e: None)

    manager.refresh(FeedName.PRIZE_STATS)

    assert len(store.listeners) == 3
    assert len(store.active_listeners) == 2
    assert store.listeners[0].active


def test_refresh_unconfigured_feed_is_noop(store: FakeFirestore) -> None:
    manager = FeedManager(store)
    manager.refresh(FeedName.RECENT_SPINS)
    manager.refresh()
    assert store.listeners == []


def test_reopening_feed_replaces_handle(store: FakeFirestore) -> None:
    manager = FeedManager(store)
    first = manager.recent_events(lambda e: None)
    second = manager.recent_events(lambda e: None, limit=5)

    assert first is not second
    assert first.state == FeedState.INACTIVE
    assert manager.handle(FeedName.RECENT_SPINS) is second
    assert len(store.active_listeners) == 1


def test_teardown_all_is_repeatable_and_safe_without_feeds(store: FakeFirestore) -> None:
    empty = FeedManager(store)
    empty.teardown_all()
    empty.teardown_all()

    manager = FeedManager(store)
    manager.recent_events(lambda e: None)
    manager.teardown_all()
    manager.teardown_all()

    assert store.active_listeners == []
    assert manager.active_count == 0


async def test_teardown_then_refresh_reattaches(store: FakeFirestore) -> None:
    events: list[FeedEvent] = []
    manager = FeedManager(store)
    manager.distribution_stats(events.append)
    old = store.listeners[0]

    manager.teardown_all()
    await old.emit()
    manager.refresh()

    assert events == []
    assert len(store.active_listeners) == 1
