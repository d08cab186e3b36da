"""Identity provider port (Firebase Auth in production)."""

from __future__ import annotations

from typing import Any, Protocol


class IIdentityProvider(Protocol):
    """Protocol for token verification and custom-claim management."""

    async def verify_id_token(
        self, token: str, check_revoked: bool = False
    ) -> dict[str, Any]:
        """Return the token's claims (including 'uid'); raise ValueError if invalid."""

    async def get_user(self, uid: str) -> dict[str, Any] | None:
        """Return the account record, or None if it does not exist."""

    async def set_custom_user_claims(self, uid: str, claims: dict[str, Any]) -> None:
        """Replace the user's custom claims."""

    async def revoke_refresh_tokens(self, uid: str) -> None:
        """Force the user to sign in again so new claims take effect."""
