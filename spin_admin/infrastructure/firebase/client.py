"""Firebase wiring (REST-based, no firebase-admin).

Built once at app startup from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON
string) or FIREBASE_SERVICE_ACCOUNT_PATH (file path). The returned
FirebaseApp is stored on app.state and handed to components explicitly;
there is no module-level client.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from spin_admin.core.config import Settings
from spin_admin.infrastructure.firebase._rest_client import (
    FIRESTORE_SCOPE,
    FirestoreRESTClient,
    _get_credentials,
)
from spin_admin.infrastructure.firebase.auth import IDENTITY_SCOPES, FirebaseAuthClient

logger = logging.getLogger(__name__)


@dataclass
class FirebaseApp:
    """Store and identity clients sharing one HTTP connection pool."""

    firestore: FirestoreRESTClient
    auth: FirebaseAuthClient
    http: httpx.AsyncClient

    @property
    def project_id(self) -> str:
        return self.firestore.project_id

    async def aclose(self) -> None:
        """Close the shared HTTP connection pool. Call from app shutdown."""
        await self.firestore.aclose()
        await self.http.aclose()
        logger.info("Firebase HTTP client closed")


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def init_firebase(settings: Settings) -> FirebaseApp | None:
    """Build the Firestore and Auth clients from service account credentials.

    Safe to call when no credentials are configured (returns None). On
    malformed credentials or any initialization error, logs the exception
    and returns None so the app can start without Firebase; store-backed
    routes then answer 503.
    """
    try:
        key_dict = _load_key_dict(settings)
        if not key_dict:
            logger.info("Firebase credentials not configured; store disabled")
            return None

        project_id = settings.firebase_project_id or key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return None

        cred = _get_credentials(key_dict, [FIRESTORE_SCOPE, *IDENTITY_SCOPES])
        http = httpx.AsyncClient(timeout=30.0)
        firestore = FirestoreRESTClient(
            project_id,
            cred,
            http_client=http,
            poll_interval=settings.feed_poll_interval_seconds,
        )
        auth = FirebaseAuthClient(
            project_id, cred, http, jwks_ttl=settings.jwks_cache_ttl_seconds
        )
        logger.info("Firebase initialized for project %s", project_id)
        return FirebaseApp(firestore=firestore, auth=auth, http=http)
    except Exception:
        logger.exception("Firebase initialization failed")
        return None
