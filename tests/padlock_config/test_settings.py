"""Tests for padlock_config settings loading."""

import pytest
from pydantic import ValidationError

from padlock_config import Settings, clear_settings_cache, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("IDENTITY_SESSION_TTL_DAYS", raising=False)
        monkeypatch.delenv("SMTP_ENABLED", raising=False)

        settings = Settings(_env_file=None)

        assert settings.identity_similarity_threshold == 0.7
        assert settings.identity_password_reset_ttl_hours == 4
        assert settings.identity_session_ttl_days == 90
        assert settings.smtp_enabled is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("IDENTITY_SESSION_TTL_DAYS", "30")
        monkeypatch.setenv("IDENTITY_REQUIRE_VERIFIED_EMAIL", "true")
        monkeypatch.setenv("SMTP_PASSWORD", "hunter2")

        settings = Settings(_env_file=None)

        assert settings.identity_session_ttl_days == 30
        assert settings.identity_require_verified_email is True
        assert settings.smtp_password.get_secret_value() == "hunter2"
        assert "hunter2" not in repr(settings)

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("ARGON2_TIME_COST=5\nLOG_LEVEL=debug\n")

        settings = Settings(_env_file=env_file)

        assert settings.argon2_time_cost == 5
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "field",
        [
            {"identity_similarity_threshold": 1.5},
            {"identity_password_reset_ttl_hours": 0},
            {"argon2_parallelism": 0},
        ],
    )
    def test_rejects_invalid_values(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **field)

    def test_frontend_url_trailing_slash(self):
        settings = Settings(_env_file=None, frontend_base_url="https://app.example.com/")

        assert settings.frontend_base_url == "https://app.example.com"

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("sqlite+aiosqlite:///./padlock.db", "sqlite"),
            ("postgresql+asyncpg://u:p@db/padlock", "postgresql"),
        ],
    )
    def test_database_type(self, url, expected):
        assert Settings(_env_file=None, database_url=url).database_type == expected


class TestGetSettings:
    def test_is_cached(self):
        clear_settings_cache()

        assert get_settings() is get_settings()

    def test_cache_can_be_cleared(self):
        first = get_settings()
        clear_settings_cache()

        assert get_settings() is not first
