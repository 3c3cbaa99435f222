"""Explicit identity configuration handed to the application services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from padlock_identity.validation.defaults import DEFAULT_SIMILARITY_THRESHOLD

if TYPE_CHECKING:
    from padlock_config.settings import Settings

DEFAULT_PASSWORD_RESET_TTL = timedelta(hours=4)
DEFAULT_SESSION_TTL = timedelta(days=90)


@dataclass(frozen=True)
class IdentityPolicy:
    """Tunable behaviour of the identity core.

    Attributes
    ----------
    similarity_threshold
        Passwords more similar than this to the username or email are refused
    password_reset_ttl
        Lifetime of a password reset token
    session_ttl
        Sliding lifetime of a session, renewed on every rotation
    require_verified_email
        Refuse authentication for accounts with an unverified email
    frontend_base_url
        Base of the links put into verification and reset mails
    """

    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    password_reset_ttl: timedelta = DEFAULT_PASSWORD_RESET_TTL
    session_ttl: timedelta = DEFAULT_SESSION_TTL
    require_verified_email: bool = False
    frontend_base_url: str = "http://localhost:5173"

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity_threshold <= 1.0:
            msg = "similarity_threshold must be between 0 and 1"
            raise ValueError(msg)
        if self.password_reset_ttl <= timedelta(0) or self.session_ttl <= timedelta(0):
            msg = "Token lifetimes must be positive"
            raise ValueError(msg)
        object.__setattr__(self, "frontend_base_url", self.frontend_base_url.rstrip("/"))

    @classmethod
    def from_settings(cls, settings: Settings) -> IdentityPolicy:
        return cls(
            similarity_threshold=settings.identity_similarity_threshold,
            password_reset_ttl=timedelta(hours=settings.identity_password_reset_ttl_hours),
            session_ttl=timedelta(days=settings.identity_session_ttl_days),
            require_verified_email=settings.identity_require_verified_email,
            frontend_base_url=settings.frontend_base_url,
        )

    def verification_link(self, token: str) -> str:
        return f"{self.frontend_base_url}/verify-email?token={token}"

    def password_reset_link(self, token: str) -> str:
        return f"{self.frontend_base_url}/reset-password?token={token}"
