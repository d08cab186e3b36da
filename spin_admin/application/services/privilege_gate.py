"""Privilege gate: caller authentication, admin checks, and admin claim issuance."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from spin_admin.application.dtos.principal import ADMIN_CLAIM, Principal
from spin_admin.domain.exceptions import (
    ConfigurationException,
    InvalidRequestException,
    PermissionDeniedException,
    UnauthenticatedException,
)

if TYPE_CHECKING:
    from spin_admin.application.interfaces.identity import IIdentityProvider

logger = logging.getLogger(__name__)

SETUP_SECRET_SETTING = "ADMIN_SETUP_SECRET"


class PrivilegeGate:
    """Authorizes privileged operations against the identity provider.

    The setup secret guards claim issuance only; bulk operations require
    an ID token whose claims carry admin=true.
    """

    def __init__(
        self,
        identity: IIdentityProvider,
        setup_secret: str | None,
        *,
        check_revoked: bool = True,
    ) -> None:
        self._identity = identity
        self._setup_secret = setup_secret or None
        self._check_revoked = check_revoked

    async def authenticate(self, id_token: str | None) -> Principal:
        """Verify an ID token and return the caller.

        Raises:
            UnauthenticatedException: If the token is missing, invalid, expired, or revoked.
        """
        if not id_token:
            raise UnauthenticatedException()
        try:
            claims = await self._identity.verify_id_token(
                id_token, check_revoked=self._check_revoked
            )
        except ValueError as e:
            logger.info("Rejected ID token: %s", e)
            raise UnauthenticatedException("Invalid or expired token.") from e
        return Principal(uid=str(claims["uid"]), claims=claims)

    def require_admin(self, principal: Principal) -> Principal:
        if not principal.is_admin:
            logger.warning("Admin capability denied for uid %s", principal.uid)
            raise PermissionDeniedException(capability=ADMIN_CLAIM)
        return principal

    async def issue_admin_claim(self, uid: str | None, provided_secret: str | None) -> str:
        """Grant {admin: true} to uid and revoke its refresh tokens.

        The secret is checked before uid so an unauthorized caller learns
        nothing about the request. Provider errors propagate unchanged.

        Returns:
            The uid that was granted.

        Raises:
            ConfigurationException: If no setup secret is configured on the server.
            PermissionDeniedException: If provided_secret does not match.
            InvalidRequestException: If uid is empty.
        """
        if not self._setup_secret:
            raise ConfigurationException(
                f"Missing server secret ({SETUP_SECRET_SETTING}).",
                setting=SETUP_SECRET_SETTING,
            )
        if not hmac.compare_digest(
            (provided_secret or "").encode(), self._setup_secret.encode()
        ):
            logger.warning("Admin claim issuance refused: invalid secret")
            raise PermissionDeniedException("Forbidden: invalid secret")
        uid = (uid or "").strip()
        if not uid:
            raise InvalidRequestException("uid is required", field="uid")

        await self._identity.set_custom_user_claims(uid, {ADMIN_CLAIM: True})
        await self._identity.revoke_refresh_tokens(uid)
        logger.info("Admin claim granted to uid %s", uid)
        return uid
