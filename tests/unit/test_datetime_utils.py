"""Tests for UTC helpers and time_ago."""

from datetime import UTC, datetime, timedelta

import pytest

from spin_admin.shared.utils.datetime import ensure_utc, time_ago, utc_now

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=0), "just now"),
        (timedelta(seconds=59), "just now"),
        (timedelta(seconds=60), "1m ago"),
        (timedelta(minutes=59, seconds=59), "59m ago"),
        (timedelta(hours=1), "1h ago"),
        (timedelta(hours=23), "23h ago"),
        (timedelta(days=1), "1d ago"),
        (timedelta(days=29), "29d ago"),
        (timedelta(days=30), "1mo ago"),
        (timedelta(days=364), "12mo ago"),
        (timedelta(days=365), "1y ago"),
        (timedelta(days=800), "2y ago"),
    ],
)
def test_time_ago(delta: timedelta, expected: str) -> None:
    assert time_ago(NOW - delta, NOW) == expected


def test_time_ago_future_is_just_now() -> None:
    assert time_ago(NOW + timedelta(hours=2), NOW) == "just now"


def test_time_ago_treats_naive_as_utc() -> None:
    assert time_ago(datetime(2024, 5, 1, 11, 0), NOW) == "1h ago"


def test_ensure_utc() -> None:
    assert ensure_utc(None) is None
    assert ensure_utc(datetime(2024, 1, 1)).tzinfo == UTC


def test_utc_now_is_aware() -> None:
    assert utc_now().tzinfo == UTC
