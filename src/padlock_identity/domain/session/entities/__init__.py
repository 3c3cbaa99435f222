from padlock_identity.domain.session.entities.session import Session

__all__ = ["Session"]
