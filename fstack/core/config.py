"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Variable names match the setup script's environment
(PB_URL, PB_ADMIN_EMAIL, PB_ADMIN_PASS, GOOGLE_CLIENT_ID, ...).
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fstack.core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_PB_URL


class Settings(BaseSettings):
    """Provisioning settings loaded from environment and .env.

    Admin credentials are optional here: the setup script prompts for
    whatever is missing.
    """

    # App
    debug: bool = False

    # PocketBase
    pb_url: str = DEFAULT_PB_URL
    pb_admin_email: str | None = None
    pb_admin_pass: SecretStr | None = None
    pb_update_existing: bool = False

    # Transport
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS

    # Google OAuth2 for the users collection (both or neither)
    google_client_id: str | None = None
    google_client_secret: SecretStr | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_url_and_oauth(self) -> "Settings":
        """Validate server URL scheme and the Google OAuth pair.

        - PB_URL must start with http:// or https://.
        - GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be set together.
        """
        if not self.pb_url.startswith(("http://", "https://")):
            raise ValueError(
                f"PB_URL must start with http:// or https://, got: {self.pb_url!r}"
            )
        self.pb_url = self.pb_url.rstrip("/")
        has_secret = bool(
            self.google_client_secret
            and self.google_client_secret.get_secret_value()
        )
        if bool(self.google_client_id) != has_secret:
            raise ValueError(
                "GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be set together."
            )
        if self.http_timeout_seconds <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be positive")
        return self

    @property
    def google_auth_enabled(self) -> bool:
        return bool(self.google_client_id)


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
