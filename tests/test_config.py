"""Tests for settings loading."""

import pytest

from zimbabwe_shipping.config import ConfigurationError, Settings, require_setting


def test_settings_load_without_secrets(monkeypatch) -> None:
    for name in ("SUPABASE_URL", "STRIPE_SECRET_KEY", "RESEND_API_KEY"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.supabase_url is None
    assert settings.stripe_secret_key is None
    assert settings.stripe_base_url == "https://api.stripe.com/v1"
    assert settings.mfa_issuer == "Zimbabwe Shipping"


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_live_123")
    monkeypatch.setenv("MFA_ENCRYPTION_KEY", "at-rest")

    settings = Settings(_env_file=None)

    assert settings.stripe_secret_key == "sk_live_123"
    assert settings.mfa_encryption_key == "at-rest"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_require_setting_rejects_missing_values(value: str | None) -> None:
    with pytest.raises(ConfigurationError, match="RESEND_API_KEY is not configured"):
        require_setting(value, "RESEND_API_KEY")


def test_require_setting_returns_value() -> None:
    assert require_setting("key", "RESEND_API_KEY") == "key"
