"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend credentials (Firestore service account, storage
bucket) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_storage (service account for the firestore backend,
    bucket for the firebase storage backend).
    """

    # App
    app_name: str = "concierge"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database: "firestore" (Firestore REST) or "memory" (in-process, dev/tests)
    database_backend: str = "firestore"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Storage: "firebase" (Firebase Storage bucket) or "memory"
    storage_backend: str = "firebase"
    firebase_storage_bucket: str | None = None
    # Prefixes scanned when relocating villa photos that moved in the bucket.
    photo_storage_prefixes: str = (
        "villas/shared,company1/villas,company2/villas,villas,public/villas"
    )

    # Company (tenant) and caller identity headers, set by the upstream gateway.
    company_header_name: str = "X-Company-ID"
    user_id_header: str = "X-User-ID"
    user_email_header: str = "X-User-Email"
    user_role_header: str = "X-User-Role"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    # Business defaults
    offer_follow_up_days: int = 7
    default_commission_rate_percent: float = 15.0

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def photo_prefixes(self) -> list[str]:
        """Storage prefixes as a list (comma-separated in env)."""
        return [p.strip() for p in self.photo_storage_prefixes.split(",") if p.strip()]

    @model_validator(mode="after")
    def validate_required_and_storage(self) -> "Settings":
        """Validate required env and storage backend.

        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - Firebase storage: FIREBASE_STORAGE_BUCKET required (service account reused).
        """
        has_key = bool(
            self.firebase_service_account_key
            and self.firebase_service_account_key.get_secret_value()
        )
        has_credentials = has_key or bool(self.firebase_service_account_path)
        if self.database_backend == "firestore":
            if not has_credentials:
                raise ValueError(
                    "When database_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'firestore' or 'memory', got: {self.database_backend!r}"
            )
        if self.storage_backend == "firebase":
            if not self.firebase_storage_bucket:
                raise ValueError(
                    "firebase_storage_bucket is required when storage_backend is 'firebase'. "
                    "Set FIREBASE_STORAGE_BUCKET environment variable or update .env file."
                )
            if not has_credentials:
                raise ValueError(
                    "When storage_backend is 'firebase', set FIREBASE_SERVICE_ACCOUNT_KEY "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH."
                )
        elif self.storage_backend != "memory":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'firebase', 'memory'"
            )
        if self.offer_follow_up_days < 0:
            raise ValueError("offer_follow_up_days must be >= 0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
