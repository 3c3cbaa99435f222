"""Mail delivery adapters.

``SmtpMailer`` renders the templates and sends them over SMTP; ``LoggingMailer``
only logs what would have been sent. ``build_mailer`` picks one from settings.
"""

import logging
import smtplib
import ssl
from collections.abc import Mapping
from email.mime.text import MIMEText
from typing import Any

from padlock_config.settings import Settings
from padlock_identity.application.ports import Mailer
from padlock_identity.infrastructure.email.templates import SUBJECTS, TEMPLATES

logger = logging.getLogger(__name__)


class SmtpMailer(Mailer):
    """Mailer delivering plain-text mails over SMTP.

    Uses implicit TLS when ``smtp_use_tls`` is set without ``smtp_starttls``,
    otherwise a plain connection upgraded with STARTTLS if enabled.
    """

    def __init__(
        self,
        settings: Settings,
        subjects: Mapping[str, str] | None = None,
        templates: Mapping[str, str] | None = None,
    ):
        if not settings.smtp_host:
            msg = "SMTP host not configured"
            raise ValueError(msg)
        self._settings = settings
        self._subjects = subjects if subjects is not None else SUBJECTS
        self._templates = templates if templates is not None else TEMPLATES

    def send(
        self,
        recipient: str,
        subject_key: str,
        body_template: str,
        data: Mapping[str, Any],
    ) -> None:
        message = self._create_message(
            to_email=recipient,
            subject=self._subjects.get(subject_key, subject_key),
            text_body=self._render(body_template, data),
        )
        self._send_email(recipient, message)

    def _render(self, body_template: str, data: Mapping[str, Any]) -> str:
        template = self._templates.get(body_template)
        if template is None:
            msg = f"Unknown mail template: {body_template}"
            raise ValueError(msg)
        return template.format(**data)

    def _create_message(self, to_email: str, subject: str, text_body: str) -> MIMEText:
        msg = MIMEText(text_body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email
        return msg

    def _send_email(self, to_email: str, message: MIMEText) -> None:
        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        try:
            if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
                # Implicit TLS (port 465)
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    context=context,
                ) as server:
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)
            else:
                # STARTTLS (port 587) or plain
                with smtplib.SMTP(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                ) as server:
                    if self._settings.smtp_starttls:
                        context = ssl.create_default_context()
                        server.starttls(context=context)
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)

            logger.info("Email sent to %s", to_email)

        except Exception as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise


class LoggingMailer(Mailer):
    """Mailer used while SMTP is disabled: logs instead of sending.

    Links in ``data`` carry live tokens, so only the message names are logged.
    """

    def send(
        self,
        recipient: str,
        subject_key: str,
        body_template: str,
        data: Mapping[str, Any],
    ) -> None:
        logger.warning(
            "SMTP disabled, %s email to %s not sent (subject: %s)",
            body_template,
            recipient,
            subject_key,
        )


def build_mailer(settings: Settings) -> Mailer:
    """Pick the SMTP mailer when SMTP is enabled, the logging one otherwise."""
    if settings.smtp_enabled:
        return SmtpMailer(settings)
    return LoggingMailer()
