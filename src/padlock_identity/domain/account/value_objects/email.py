"""Email value object.

Provides validated, normalized email addresses for account identification.
"""

import re
from dataclasses import dataclass

from padlock_identity.exceptions import ValidationFailedError, ValidationRule

# Simple but effective email regex
# Validates: user@domain.tld (minimum requirements)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

EMAIL_MAX_LENGTH = 100


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationFailedError(
                ValidationRule.EMAIL_INVALID, "Email cannot be empty"
            )

        normalized = self.value.strip().lower()

        if len(normalized) > EMAIL_MAX_LENGTH:
            raise ValidationFailedError(
                ValidationRule.EMAIL_TOO_LONG,
                f"Email cannot exceed {EMAIL_MAX_LENGTH} characters",
            )

        if not EMAIL_PATTERN.match(normalized):
            raise ValidationFailedError(
                ValidationRule.EMAIL_INVALID, f"Invalid email format: {self.value}"
            )

        # Replace value with normalized version (frozen dataclass workaround)
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
