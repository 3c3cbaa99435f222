"""Session entity: one refresh-token holder per account and device."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID, uuid4

from padlock_identity.domain.session.value_objects import SessionKind


@dataclass(frozen=True)
class Session:
    """Immutable session record.

    ``refresh_token`` is single-use: the repository rotates it in place,
    sliding ``expires_at`` and recording the latest ``client_ip``. A session
    at or past ``expires_at`` is revoked.
    """

    id: UUID
    account_id: UUID
    refresh_token: str
    kind: SessionKind
    client_ip: str
    user_agent: str
    created_at: datetime
    last_used_at: datetime
    expires_at: datetime

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        account_id: UUID,
        refresh_token: str,
        client_ip: str,
        user_agent: str,
        kind: SessionKind,
        now: datetime,
        ttl: timedelta,
    ) -> "Session":
        return cls(
            id=uuid4(),
            account_id=account_id,
            refresh_token=refresh_token,
            kind=SessionKind(kind),
            client_ip=client_ip,
            user_agent=user_agent,
            created_at=now,
            last_used_at=now,
            expires_at=now + ttl,
        )

    def is_expired(self, now: datetime) -> bool:
        """Check if the session is expired (or was revoked)."""
        return now >= self.expires_at
