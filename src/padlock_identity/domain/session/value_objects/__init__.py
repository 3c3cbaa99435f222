"""Value objects for the session domain."""

from padlock_identity.domain.session.value_objects.session_kind import SessionKind

__all__ = [
    "SessionKind",
]
