"""Tests for init_firebase credential loading."""

import json

from spin_admin.core.config import Settings
from spin_admin.infrastructure.firebase import init_firebase


def test_no_credentials_returns_none() -> None:
    settings = Settings(
        _env_file=None,
        firebase_service_account_key=None,
        firebase_service_account_path=None,
    )
    assert init_firebase(settings) is None


def test_invalid_key_json_returns_none() -> None:
    settings = Settings(_env_file=None, firebase_service_account_key="{not json")
    assert init_firebase(settings) is None


def test_missing_key_file_returns_none(tmp_path) -> None:
    settings = Settings(
        _env_file=None,
        firebase_service_account_path=str(tmp_path / "missing.json"),
    )
    assert init_firebase(settings) is None


def test_key_without_project_id_returns_none() -> None:
    settings = Settings(
        _env_file=None,
        firebase_service_account_key=json.dumps({"type": "service_account"}),
    )
    assert init_firebase(settings) is None
