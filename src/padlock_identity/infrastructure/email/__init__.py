from padlock_identity.infrastructure.email.email_service import (
    LoggingMailer,
    SmtpMailer,
    build_mailer,
)

__all__ = ["LoggingMailer", "SmtpMailer", "build_mailer"]
