"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)
are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (supabase_url, supabase_service_role_key).
    """

    # App
    app_name: str = "question-bank"
    app_version: str = "1.0.0"
    debug: bool = False

    # Supabase (hosted auth, table store, object storage)
    supabase_url: str = ""
    supabase_service_role_key: SecretStr = SecretStr("")
    # Public key used for auth calls made on behalf of users; falls back to the service key.
    supabase_anon_key: SecretStr | None = None
    # Optional: verify access tokens locally (HS256) instead of calling /auth/v1/user.
    supabase_jwt_secret: SecretStr | None = None
    upstream_timeout_seconds: float = 30.0

    # Storage
    storage_bucket: str = "past-questions"
    storage_upsert: bool = False
    max_upload_size: int = 50 * 1024 * 1024  # 50MB

    # Storage proxies
    proxy_allowed_origin: str = "*"
    proxy_cache_control: str = "public, max-age=3600, stale-while-revalidate=60"

    # CORS for /api/v1
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Auth
    session_cache_ttl_seconds: int = 60
    password_reset_redirect_url: str = "http://localhost:3000/"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required Supabase settings and upload limit."""
        if not self.supabase_url:
            raise ValueError(
                "SUPABASE_URL is required (e.g. https://<project>.supabase.co). "
                "Set in environment or .env file."
            )
        if not self.supabase_service_role_key.get_secret_value():
            raise ValueError(
                "SUPABASE_SERVICE_ROLE_KEY is required. Copy it from the Supabase "
                "dashboard (Project Settings → API); it is never sent to clients."
            )
        if self.max_upload_size <= 0:
            raise ValueError(
                f"max_upload_size must be positive, got: {self.max_upload_size}"
            )
        self.supabase_url = self.supabase_url.rstrip("/")
        return self

    @property
    def auth_api_key(self) -> str:
        """Key sent as `apikey` on auth calls (anon key when set, else service key)."""
        if self.supabase_anon_key and self.supabase_anon_key.get_secret_value():
            return self.supabase_anon_key.get_secret_value()
        return self.supabase_service_role_key.get_secret_value()


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
