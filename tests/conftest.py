"""Pytest configuration and fixtures for spin-admin.

HTTP tests run against spin_admin.main:app through ASGITransport with the
Firebase clients replaced by an in-memory Firestore and a mocked identity
provider (see tests/fakes.py).
"""

import os

os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["ADMIN_SETUP_SECRET"] = "test-setup-secret"
os.environ.pop("FIREBASE_SERVICE_ACCOUNT_KEY", None)
os.environ.pop("FIREBASE_SERVICE_ACCOUNT_PATH", None)

from types import SimpleNamespace  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from spin_admin.api.v1.dependencies import get_optional_firebase  # noqa: E402
from spin_admin.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from spin_admin.core.limiter import limiter  # noqa: E402
from spin_admin.main import app  # noqa: E402
from tests.fakes import FakeFirestore  # noqa: E402

TEST_SETUP_SECRET = "test-setup-secret"
ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"
ADMIN_HEADERS = {"Authorization": f"Bearer {ADMIN_TOKEN}"}
USER_HEADERS = {"Authorization": f"Bearer {USER_TOKEN}"}

_TOKENS = {
    ADMIN_TOKEN: {"uid": "admin-uid", "sub": "admin-uid", "admin": True},
    USER_TOKEN: {"uid": "user-uid", "sub": "user-uid"},
}


async def _verify_id_token(token: str, check_revoked: bool = False) -> dict:
    if token not in _TOKENS:
        raise ValueError("Invalid token: signature verification failed")
    return dict(_TOKENS[token])


@pytest.fixture
def fake_store() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def identity() -> AsyncMock:
    """Identity provider mock: admin-token and user-token verify, anything else fails."""
    provider = AsyncMock()
    provider.verify_id_token.side_effect = _verify_id_token
    provider.get_user.return_value = None
    return provider


@pytest.fixture
def firebase_stub(fake_store: FakeFirestore, identity: AsyncMock) -> SimpleNamespace:
    return SimpleNamespace(firestore=fake_store, auth=identity)


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Fresh rate-limit windows and no leftover dependency overrides per test."""
    limiter.reset()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(firebase_stub: SimpleNamespace) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with fake Firebase clients."""
    app.dependency_overrides[get_optional_firebase] = lambda: firebase_stub
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
