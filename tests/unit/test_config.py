"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from spin_admin.core.config import Settings
from spin_admin.core.constants import MAX_RECENT_SPINS_LIMIT


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.delete_chunk_size == 400
    assert settings.recent_spins_limit == 10
    assert settings.admin_setup_secret_header == "X-Admin-Setup-Secret"


@pytest.mark.parametrize(
    "overrides",
    [
        {"delete_chunk_size": 0},
        {"delete_chunk_size": 501},
        {"recent_spins_limit": 0},
        {"recent_spins_limit": MAX_RECENT_SPINS_LIMIT + 1},
        {"feed_poll_interval_seconds": 0},
        {"telemetry_sample_rate": 1.5},
    ],
)
def test_out_of_range_values_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_secret_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_SETUP_SECRET", "from-env")
    assert Settings(_env_file=None).admin_setup_secret.get_secret_value() == "from-env"
