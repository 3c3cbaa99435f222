"""SQLAlchemy model for refresh-token sessions."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from padlock_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)


class SessionModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting Session entities."""

    __tablename__ = "sessions"
    __table_args__ = (
        UniqueConstraint("refresh_token", name="uq_sessions_refresh_token"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )
    refresh_token: Mapped[str] = mapped_column(String(128), nullable=False)
    kind: Mapped[str] = mapped_column(String(16), default="user", nullable=False)
    client_ip: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    user_agent: Mapped[str] = mapped_column(Text, default="", nullable=False)
    last_used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<SessionModel(id={self.id}, account_id={self.account_id})>"
