"""Plain-text English fallback templates for the SMTP mailer.

Subjects are keyed by the subject key the identity service sends, bodies by
the template name. Deployments with a string catalog pass their own.
"""

SUBJECTS = {
    "email.verify.subject": "Confirm your email address - Padlock",
    "email.reset.subject": "Password Reset Request - Padlock",
}

VERIFY_EMAIL_TEXT = """Hello {username},

Please confirm your email address by opening the link below:
{link}

If you didn't create an account, you can safely ignore this email.

-- Padlock
"""

RESET_PASSWORD_TEXT = """Hello {username},

You requested a password reset for your Padlock account.

Click the link below to reset your password (valid until {expires_at:%Y-%m-%d %H:%M} UTC):
{link}

If you didn't request this, you can safely ignore this email.

-- Padlock
"""

TEMPLATES = {
    "verify_email": VERIFY_EMAIL_TEXT,
    "reset_password": RESET_PASSWORD_TEXT,
}
