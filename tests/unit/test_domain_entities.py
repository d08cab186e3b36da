"""Tests for SpinEvent and PrizeDistribution decoding."""

from datetime import UTC, datetime, timedelta, timezone

from spin_admin.domain.entities import PrizeDistribution, SpinEvent
from spin_admin.domain.enums import FeedName, FeedState


def test_spin_event_from_document() -> None:
    ts = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    spin = SpinEvent.from_document(
        "s1", {"userId": "u1", "prize": "gold", "timestamp": ts, "device": "kiosk-2"}
    )
    assert spin.id == "s1"
    assert spin.principal_id == "u1"
    assert spin.prize_label == "gold"
    assert spin.occurred_at == ts
    assert spin.attributes == {"device": "kiosk-2"}


def test_spin_event_missing_prize_falls_back() -> None:
    assert SpinEvent.from_document("s", {}).prize_label == "N/A"
    assert SpinEvent.from_document("s", {"prize": ""}).prize_label == "N/A"
    assert SpinEvent.from_document("s", {"prize": None}).prize_label == "N/A"


def test_spin_event_non_string_prize_is_stringified() -> None:
    assert SpinEvent.from_document("s", {"prize": 50}).prize_label == "50"
    assert SpinEvent.from_document("s", {"prize": 0}).prize_label == "0"


def test_spin_event_timestamp_normalization() -> None:
    eat = timezone(timedelta(hours=3))
    aware = SpinEvent.from_document("s", {"timestamp": datetime(2024, 5, 1, 15, tzinfo=eat)})
    naive = SpinEvent.from_document("s", {"timestamp": datetime(2024, 5, 1, 12)})
    text = SpinEvent.from_document("s", {"timestamp": "2024-05-01T12:00:00Z"})
    expected = datetime(2024, 5, 1, 12, tzinfo=UTC)
    assert aware.occurred_at == naive.occurred_at == text.occurred_at == expected
    assert aware.occurred_at.tzinfo == UTC


def test_spin_event_bad_timestamp_is_none() -> None:
    assert SpinEvent.from_document("s", {"timestamp": "yesterday"}).occurred_at is None
    assert SpinEvent.from_document("s", {"timestamp": 12345}).occurred_at is None
    assert SpinEvent.from_document("s", {}).occurred_at is None
    assert SpinEvent.from_document("s", {}).principal_id is None


def test_prize_distribution_filters_values() -> None:
    dist = PrizeDistribution.from_document(
        {
            "gold": 3,
            "silver": 2.0,
            "bronze": -1,
            "flag": True,
            "updatedAt": datetime(2024, 5, 1, tzinfo=UTC),
            "label": "x",
            "half": 1.5,
        }
    )
    assert dist.counts == {"gold": 3, "silver": 2}
    assert dist.total == 5


def test_prize_distribution_missing_document() -> None:
    assert PrizeDistribution.from_document(None).counts == {}
    assert PrizeDistribution.from_document({}).total == 0


def test_enum_values() -> None:
    assert FeedName("recent_spins") is FeedName.RECENT_SPINS
    assert FeedName.PRIZE_STATS.value == "prize_stats"
    assert {s.value for s in FeedState} == {"inactive", "active", "errored"}
