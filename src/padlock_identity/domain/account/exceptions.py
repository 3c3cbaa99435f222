"""Account domain exceptions raised by repositories.

Repositories report unique constraint violations with these; the account
service turns them into the public taxonomy in ``padlock_identity.exceptions``.
"""

from uuid import UUID


class EmailAlreadyExistsError(Exception):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class UsernameAlreadyExistsError(Exception):
    """Username already registered."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username already registered: {username}")


class BootstrapAdminClaimedError(Exception):
    """Another account already holds the bootstrap admin marker."""

    def __init__(self) -> None:
        super().__init__("The bootstrap admin has already been claimed")


class StaleAccountError(Exception):
    """The stored account changed after this copy was loaded."""

    def __init__(self, account_id: UUID) -> None:
        self.account_id = account_id
        super().__init__(f"Account {account_id} was modified concurrently")
