"""Ports the application services depend on besides the repositories."""

from padlock_identity.application.ports.mailer import Mailer
from padlock_identity.domain.shared.time import Clock, SystemClock
from padlock_identity.services.token_service import TokenGenerator

__all__ = [
    "Clock",
    "Mailer",
    "SystemClock",
    "TokenGenerator",
]
