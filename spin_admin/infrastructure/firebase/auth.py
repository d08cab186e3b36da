"""Firebase Auth over REST (no firebase-admin).

ID tokens are verified locally with python-jose against Google's
securetoken JWKS; the signing keys are cached for jwks_ttl seconds.
Claim issuance and refresh-token revocation go through the Identity
Toolkit accounts:update endpoint with the service account's OAuth token.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

import httpx
from jose import JWTError, jwt

from spin_admin.infrastructure.firebase._rest_client import (
    _get_access_token,
    _request_async,
)

logger = logging.getLogger(__name__)

IDENTITY_SCOPES = [
    "https://www.googleapis.com/auth/identitytoolkit",
    "https://www.googleapis.com/auth/cloud-platform",
]
JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/"
    "securetoken@system.gserviceaccount.com"
)
_IDENTITY_BASE = "https://identitytoolkit.googleapis.com/v1"
_ISSUER_PREFIX = "https://securetoken.google.com/"

# Unknown key ids force a JWKS refetch at most this often.
DEFAULT_FORCED_REFETCH_INTERVAL = 60.0


class FirebaseAuthClient:
    """Verify ID tokens and manage custom claims for one Firebase project."""

    def __init__(
        self,
        project_id: str,
        credentials,
        http_client: httpx.AsyncClient,
        *,
        jwks_ttl: float = 3600,
        forced_refetch_interval: float = DEFAULT_FORCED_REFETCH_INTERVAL,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._http = http_client
        self._jwks_ttl = jwks_ttl
        self._keys: dict[str, dict] = {}
        self._keys_expire_at = 0.0
        self._forced_refetch_interval = forced_refetch_interval
        self._last_forced_fetch: float | None = None
        self._keys_lock = asyncio.Lock()

    @property
    def project_id(self) -> str:
        return self._project_id

    async def _get_token(self) -> str:
        return await asyncio.to_thread(_get_access_token, self._credentials)

    async def _signing_keys(self, force: bool = False) -> dict[str, dict]:
        """Return kid -> JWK, refetching when the cache expired or force is set.

        A forced refetch happens at most once per forced_refetch_interval;
        inside that window the cached keys are returned as they are.
        """
        async with self._keys_lock:
            now = time.monotonic()
            fresh = bool(self._keys) and now < self._keys_expire_at
            if fresh and not force:
                return self._keys
            if fresh and self._recently_forced(now):
                return self._keys
            if force:
                self._last_forced_fetch = now
            resp = await self._http.get(JWKS_URL)
            resp.raise_for_status()
            self._keys = {k["kid"]: k for k in resp.json().get("keys", []) if "kid" in k}
            self._keys_expire_at = time.monotonic() + self._jwks_ttl
            logger.debug("Fetched %d token signing keys", len(self._keys))
            return self._keys

    def _recently_forced(self, now: float) -> bool:
        return (
            self._last_forced_fetch is not None
            and now - self._last_forced_fetch < self._forced_refetch_interval
        )

    async def verify_id_token(
        self, token: str, check_revoked: bool = False
    ) -> dict[str, Any]:
        """Verify a Firebase ID token and return its claims (with 'uid').

        Raises:
            ValueError: If the token is malformed, expired, signed by an
                unknown key, issued for another project, or revoked.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise ValueError(f"Invalid token: {e!s}") from e
        kid = header.get("kid")
        if not kid:
            raise ValueError("Invalid token: missing key id")

        keys = await self._signing_keys()
        if kid not in keys:
            keys = await self._signing_keys(force=True)
        key = keys.get(kid)
        if key is None:
            raise ValueError("Invalid token: unknown signing key")

        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=["RS256"],
                audience=self._project_id,
                issuer=f"{_ISSUER_PREFIX}{self._project_id}",
                options={"require_exp": True, "require_iat": True, "require_sub": True},
            )
        except JWTError as e:
            raise ValueError(f"Invalid token: {e!s}") from e
        if not claims.get("sub"):
            raise ValueError("Token missing required claim: sub")
        claims["uid"] = claims["sub"]

        if check_revoked:
            await self._check_not_revoked(claims)
        return claims

    async def _check_not_revoked(self, claims: dict[str, Any]) -> None:
        user = await self.get_user(claims["uid"])
        if user is None:
            raise ValueError("Token subject no longer exists")
        if user.get("disabled"):
            raise ValueError("User account is disabled")
        valid_since = int(user.get("validSince", 0) or 0)
        issued = int(claims.get("auth_time", claims["iat"]))
        if issued < valid_since:
            raise ValueError("Token has been revoked")

    async def get_user(self, uid: str) -> dict[str, Any] | None:
        """Look up an account record; None if no such user."""
        out = await _request_async(
            self._http,
            f"{_IDENTITY_BASE}/projects/{self._project_id}/accounts:lookup",
            method="POST",
            body={"localId": [uid]},
            access_token=await self._get_token(),
        )
        users = (out or {}).get("users") or []
        return users[0] if users else None

    async def _update_account(self, body: dict[str, Any]) -> None:
        out = await _request_async(
            self._http,
            f"{_IDENTITY_BASE}/projects/{self._project_id}/accounts:update",
            method="POST",
            body=body,
            access_token=await self._get_token(),
        )
        if out is None:
            raise ValueError(f"No user record for uid {body.get('localId')!r}")

    async def set_custom_user_claims(self, uid: str, claims: dict[str, Any]) -> None:
        """Replace the custom claims carried by the user's future ID tokens."""
        await self._update_account(
            {"localId": uid, "customAttributes": json.dumps(claims)}
        )
        logger.info("Custom claims updated for uid %s", uid)

    async def revoke_refresh_tokens(self, uid: str) -> None:
        """Invalidate refresh tokens issued before now, forcing a fresh sign-in."""
        await self._update_account({"localId": uid, "validSince": str(int(time.time()))})
        logger.info("Refresh tokens revoked for uid %s", uid)
