"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Out-of-range values (chunk size, feed limits, poll
interval) are rejected at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spin_admin.core.constants import (
    DEFAULT_DELETE_CHUNK_SIZE,
    DEFAULT_RECENT_SPINS_LIMIT,
    MAX_RECENT_SPINS_LIMIT,
    STORE_MAX_WRITES_PER_BATCH,
)


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Firebase credentials are optional: without them the app starts but
    store-backed routes answer 503 and the admin-claim endpoint cannot
    reach the identity provider.
    """

    # App
    app_name: str = "spin-admin"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS (claim issuance is called manually from browsers/tools)
    allowed_origins: str = "*"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    firebase_project_id: str | None = None  # Overrides project_id from the key

    # Privilege gate
    admin_setup_secret: SecretStr | None = None
    admin_setup_secret_header: str = "X-Admin-Setup-Secret"
    verify_token_revocation: bool = True
    jwks_cache_ttl_seconds: int = 3600

    # Bulk delete
    delete_chunk_size: int = DEFAULT_DELETE_CHUNK_SIZE

    # Live feeds
    recent_spins_limit: int = DEFAULT_RECENT_SPINS_LIMIT
    feed_poll_interval_seconds: float = 2.0

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Validate batch and feed bounds against the store's per-request ceilings."""
        if not 1 <= self.delete_chunk_size <= STORE_MAX_WRITES_PER_BATCH:
            raise ValueError(
                f"DELETE_CHUNK_SIZE must be between 1 and {STORE_MAX_WRITES_PER_BATCH}, "
                f"got: {self.delete_chunk_size}"
            )
        if not 1 <= self.recent_spins_limit <= MAX_RECENT_SPINS_LIMIT:
            raise ValueError(
                f"RECENT_SPINS_LIMIT must be between 1 and {MAX_RECENT_SPINS_LIMIT}, "
                f"got: {self.recent_spins_limit}"
            )
        if self.feed_poll_interval_seconds <= 0:
            raise ValueError("FEED_POLL_INTERVAL_SECONDS must be positive")
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("TELEMETRY_SAMPLE_RATE must be between 0.0 and 1.0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
