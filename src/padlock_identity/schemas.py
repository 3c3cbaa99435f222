"""Identity schemas and data structures.

These are simple data classes used for transferring identity
data between components.
"""

from dataclasses import dataclass
from datetime import datetime

from padlock_identity.domain.account import Account


@dataclass(frozen=True)
class PasswordResetTicket:
    """A freshly issued password reset.

    Attributes
    ----------
    token
        The raw single-use token; only its digest is stored
    expires_at
        When the token stops being accepted
    account
        The account the reset was issued for
    """

    token: str
    expires_at: datetime
    account: Account

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
