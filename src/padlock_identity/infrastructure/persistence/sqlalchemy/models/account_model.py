"""SQLAlchemy model for the Account aggregate."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from padlock_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)


class AccountModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting Account aggregates.

    ``bootstrap_admin`` is True for the first account and NULL for every
    other one. Its unique constraint lets at most one row ever claim it,
    since NULLs never collide.

    ``version`` goes up by one on every write, so a stale in-memory copy
    can be refused instead of overwriting newer state.
    """

    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("email", name="uq_accounts_email"),
        UniqueConstraint("username", name="uq_accounts_username"),
        UniqueConstraint("verification_token", name="uq_accounts_verification_token"),
        UniqueConstraint("bootstrap_admin", name="uq_accounts_bootstrap_admin"),
        Index("ix_accounts_password_reset_token", "password_reset_token"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    username: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    verification_token: Mapped[str] = mapped_column(String(128), nullable=False)
    verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    password_reset_token: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )
    password_reset_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    bootstrap_admin: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    locale: Mapped[str] = mapped_column(String(16), default="en", nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    def __repr__(self) -> str:
        return f"<AccountModel(id={self.id}, username={self.username})>"
