"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. PADLOCK_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path.cwd()


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. PADLOCK_ENV_FILE env var (full or project-relative path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("PADLOCK_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Padlock"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./padlock.db"
    database_echo: bool = False

    # Identity policy (IDENTITY_ prefix)
    identity_similarity_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    identity_password_reset_ttl_hours: int = Field(default=4, gt=0)
    identity_session_ttl_days: int = Field(default=90, gt=0)
    identity_require_verified_email: bool = False

    # Argon2id parameters (ARGON2_ prefix)
    argon2_memory_cost: int = Field(default=32 * 1024, ge=8)  # KiB
    argon2_time_cost: int = Field(default=2, ge=1)
    argon2_parallelism: int = Field(default=2, ge=1)

    # SMTP (SMTP_ prefix)
    smtp_enabled: bool = False
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: SecretStr | None = None
    smtp_from_email: str = ""
    smtp_from_name: str = "Padlock"
    smtp_use_tls: bool = True
    smtp_starttls: bool = True

    # Frontend URL (for verification and password reset links)
    frontend_base_url: str = "http://localhost:5173"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("frontend_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"

    @property
    def database_type(self) -> str:
        """Database backend name derived from the URL scheme."""
        return self.database_url.split(":", 1)[0].split("+", 1)[0]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
