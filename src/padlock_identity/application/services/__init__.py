"""Application services for identity management."""

from padlock_identity.application.services.account_service import AccountService
from padlock_identity.application.services.identity_service import IdentityService
from padlock_identity.application.services.session_service import SessionService

__all__ = ["AccountService", "IdentityService", "SessionService"]
