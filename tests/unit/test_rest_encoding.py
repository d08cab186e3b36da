"""Tests for Firestore REST value decoding."""

from datetime import UTC, datetime

from spin_admin.infrastructure.firebase._rest_encoding import decode_document, parse_timestamp


def test_parse_timestamp_trims_nanoseconds() -> None:
    parsed = parse_timestamp("2024-05-01T12:00:00.123456789Z")
    assert parsed == datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=UTC)


def test_parse_timestamp_without_fraction() -> None:
    assert parse_timestamp("2024-05-01T12:00:00Z") == datetime(2024, 5, 1, 12, tzinfo=UTC)


def test_decode_document_fields() -> None:
    fields = {
        "userId": {"stringValue": "u1"},
        "prize": {"stringValue": "gold"},
        "count": {"integerValue": "3"},
        "timestamp": {"timestampValue": "2024-05-01T12:00:00.5Z"},
        "ref": {"referenceValue": "projects/p/databases/(default)/documents/users/u1"},
        "where": {"geoPointValue": {"latitude": 0.3, "longitude": 32.5}},
        "empty": {"arrayValue": {}},
    }
    decoded = decode_document(fields)
    assert decoded["userId"] == "u1"
    assert decoded["count"] == 3
    assert decoded["timestamp"] == datetime(2024, 5, 1, 12, 0, 0, 500000, tzinfo=UTC)
    assert decoded["ref"].endswith("/users/u1")
    assert decoded["where"] == {"latitude": 0.3, "longitude": 32.5}
    assert decoded["empty"] == []


def test_decode_document_empty() -> None:
    assert decode_document(None) == {}
    assert decode_document({}) == {}


def test_decode_document_nested_values() -> None:
    fields = {
        "raw": {"bytesValue": "AAE="},
        "meta": {"mapValue": {"fields": {"n": {"integerValue": "1"}, "ok": {"booleanValue": True}}}},
        "tags": {"arrayValue": {"values": [{"stringValue": "a"}, {"nullValue": None}]}},
        "odd": {"someFutureValue": "x"},
    }
    assert decode_document(fields) == {
        "raw": b"\x00\x01",
        "meta": {"n": 1, "ok": True},
        "tags": ["a", None],
        "odd": None,
    }
