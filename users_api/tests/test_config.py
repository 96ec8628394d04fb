from __future__ import annotations

import pytest

from users_api.shared.config import AppConfig, SecurityConfig


def test_defaults_issue_three_day_tokens(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TOKEN_TTL_SECONDS", raising=False)

    assert SecurityConfig().token_ttl_seconds == 3 * 24 * 60 * 60


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("EXPOSE_INTERNAL_ERRORS", "yes")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp.db")

    config = AppConfig()

    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]
    assert config.security.expose_internal_errors is True
    assert config.database.url == "sqlite:///tmp.db"


def test_production_rejects_insecure_secret() -> None:
    with pytest.raises(SystemExit):
        AppConfig(app_env="production", secret_key="dev")
