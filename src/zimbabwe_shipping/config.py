"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class ConfigurationError(RuntimeError):
    """Raised when a handler needs a setting that is not configured."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every third-party secret is optional here so the app always starts;
    handlers call :func:`require_setting` when they actually need one.
    """

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_anon_key: str | None = None
    stripe_secret_key: str | None = None
    stripe_base_url: str = "https://api.stripe.com/v1"
    resend_api_key: str | None = None
    resend_base_url: str = "https://api.resend.com"
    email_sender: str = "Zimbabwe Shipping <noreply@zimbabweshipping.com>"
    site_url: str = "https://zimbabweshipping.com"
    mfa_issuer: str = "Zimbabwe Shipping"
    mfa_encryption_key: str | None = None
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    client_state_path: str = ".zimbabwe_shipping/client_state.json"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def require_setting(value: str | None, env_name: str) -> str:
    """Return a configured value or raise a descriptive error."""
    if value is None or not value.strip():
        raise ConfigurationError(f"{env_name} is not configured")
    return value
