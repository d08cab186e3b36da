"""WebSocket tests for /api/v1/feeds/ws (live dashboard feeds).

Runs through Starlette's TestClient with a polling FakeFirestore so the
real listener loop drives deliveries.
"""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from spin_admin.api.v1.dependencies import get_optional_firebase
from spin_admin.main import app
from tests.conftest import ADMIN_TOKEN, USER_TOKEN
from tests.fakes import FakeFirestore

URL = "/api/v1/feeds/ws"


@pytest.fixture
def polling_store() -> FakeFirestore:
    store = FakeFirestore(poll_interval=0.01)
    store.put(
        "spins",
        "s1",
        {"userId": "u1", "prize": "gold", "timestamp": datetime(2024, 1, 1, tzinfo=UTC)},
    )
    store.put("stats", "prizeDistribution", {"gold": 1, "silver": 3})
    return store


@pytest.fixture
def ws_client(polling_store: FakeFirestore, identity: AsyncMock) -> TestClient:
    stub = SimpleNamespace(firestore=polling_store, auth=identity)
    app.dependency_overrides[get_optional_firebase] = lambda: stub
    return TestClient(app)


def _receive_both(ws) -> dict[str, dict]:
    messages = {}
    while len(messages) < 2:
        message = ws.receive_json()
        messages[message["type"]] = message
    return messages


def test_admin_receives_both_feeds(ws_client: TestClient) -> None:
    with ws_client.websocket_connect(f"{URL}?token={ADMIN_TOKEN}") as ws:
        messages = _receive_both(ws)

    spins = messages["recent_spins"]["spins"]
    assert [s["id"] for s in spins] == ["s1"]
    assert spins[0]["user_id"] == "u1"
    assert spins[0]["prize"] == "gold"

    stats = messages["prize_stats"]
    assert stats["total"] == 4
    assert {s["label"]: s["percentage"] for s in stats["shares"]} == {"gold": 25, "silver": 75}


def test_changes_are_pushed(ws_client: TestClient, polling_store: FakeFirestore) -> None:
    with ws_client.websocket_connect(f"{URL}?token={ADMIN_TOKEN}") as ws:
        _receive_both(ws)
        polling_store.put("stats", "prizeDistribution", {"gold": 2, "silver": 2})
        message = ws.receive_json()

    assert message["type"] == "prize_stats"
    assert message["total"] == 4
    assert [s["percentage"] for s in message["shares"]] == [50, 50]


def test_unknown_feed_refresh_reports_error(ws_client: TestClient) -> None:
    with ws_client.websocket_connect(f"{URL}?token={ADMIN_TOKEN}") as ws:
        _receive_both(ws)
        ws.send_text('{"action": "refresh", "feed": "leaderboard"}')
        message = ws.receive_json()

    assert message == {"type": "error", "error": "Unknown feed"}


def test_missing_token_rejected(ws_client: TestClient) -> None:
    with ws_client.websocket_connect(URL) as ws:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()
    assert exc_info.value.code == 1008


def test_non_admin_rejected(ws_client: TestClient, polling_store: FakeFirestore) -> None:
    with ws_client.websocket_connect(f"{URL}?token={USER_TOKEN}") as ws:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()
    assert exc_info.value.code == 1008
    assert polling_store.listeners == []


def test_rejected_without_store() -> None:
    with TestClient(app).websocket_connect(URL) as ws:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()
    assert exc_info.value.code == 1011
