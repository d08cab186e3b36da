"""Tests for PrivilegeGate: authentication, admin check, claim issuance."""

from unittest.mock import AsyncMock

import pytest

from spin_admin.application.dtos.principal import Principal
from spin_admin.application.services.privilege_gate import PrivilegeGate
from spin_admin.domain.exceptions import (
    ConfigurationException,
    InvalidRequestException,
    PermissionDeniedException,
    UnauthenticatedException,
)

SECRET = "s3cret"


@pytest.fixture
def identity() -> AsyncMock:
    return AsyncMock()


async def test_authenticate_missing_token(identity: AsyncMock) -> None:
    with pytest.raises(UnauthenticatedException):
        await PrivilegeGate(identity, SECRET).authenticate(None)
    identity.verify_id_token.assert_not_called()


async def test_authenticate_invalid_token(identity: AsyncMock) -> None:
    identity.verify_id_token.side_effect = ValueError("Token has been revoked")
    with pytest.raises(UnauthenticatedException) as exc_info:
        await PrivilegeGate(identity, SECRET).authenticate("bad")
    assert exc_info.value.kind == "unauthenticated"


async def test_authenticate_passes_revocation_flag(identity: AsyncMock) -> None:
    identity.verify_id_token.return_value = {"uid": "u1", "admin": True}
    principal = await PrivilegeGate(identity, SECRET, check_revoked=False).authenticate("t")
    identity.verify_id_token.assert_awaited_once_with("t", check_revoked=False)
    assert principal == Principal(uid="u1", claims={"uid": "u1", "admin": True})
    assert principal.is_admin


def test_require_admin() -> None:
    gate = PrivilegeGate(AsyncMock(), SECRET)
    admin = Principal("a", {"admin": True})
    assert gate.require_admin(admin) is admin
    with pytest.raises(PermissionDeniedException):
        gate.require_admin(Principal("u", {}))
    # Only a literal true grants the capability
    with pytest.raises(PermissionDeniedException):
        gate.require_admin(Principal("u", {"admin": "true"}))


async def test_issue_claim_success(identity: AsyncMock) -> None:
    uid = await PrivilegeGate(identity, SECRET).issue_admin_claim(" u1 ", SECRET)
    assert uid == "u1"
    identity.set_custom_user_claims.assert_awaited_once_with("u1", {"admin": True})
    identity.revoke_refresh_tokens.assert_awaited_once_with("u1")


async def test_issue_claim_without_server_secret(identity: AsyncMock) -> None:
    with pytest.raises(ConfigurationException) as exc_info:
        await PrivilegeGate(identity, None).issue_admin_claim("u1", "anything")
    assert "Missing server secret" in exc_info.value.message
    identity.set_custom_user_claims.assert_not_called()


@pytest.mark.parametrize("provided", ["wrong", "", None, SECRET + "x"])
async def test_issue_claim_secret_mismatch(identity: AsyncMock, provided) -> None:
    with pytest.raises(PermissionDeniedException) as exc_info:
        await PrivilegeGate(identity, SECRET).issue_admin_claim("u1", provided)
    assert exc_info.value.message == "Forbidden: invalid secret"
    identity.set_custom_user_claims.assert_not_called()
    identity.revoke_refresh_tokens.assert_not_called()


async def test_issue_claim_checks_secret_before_uid(identity: AsyncMock) -> None:
    with pytest.raises(PermissionDeniedException):
        await PrivilegeGate(identity, SECRET).issue_admin_claim("", "wrong")


async def test_issue_claim_requires_uid(identity: AsyncMock) -> None:
    with pytest.raises(InvalidRequestException) as exc_info:
        await PrivilegeGate(identity, SECRET).issue_admin_claim("  ", SECRET)
    assert exc_info.value.message == "uid is required"


async def test_issue_claim_provider_failure_propagates(identity: AsyncMock) -> None:
    identity.set_custom_user_claims.side_effect = ValueError("No user record for uid 'u1'")
    with pytest.raises(ValueError):
        await PrivilegeGate(identity, SECRET).issue_admin_claim("u1", SECRET)
    identity.revoke_refresh_tokens.assert_not_called()
