"""Default username and password rule sets."""

from __future__ import annotations

import string
from collections.abc import Iterable

from padlock_identity.exceptions import ValidationRule
from padlock_identity.validation.rules import (
    RuleSet,
    contains_any,
    contains_only,
    max_length,
    min_length,
    not_similar_to,
)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 32
USERNAME_ALPHABET = string.ascii_letters + string.digits + ".-_"

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 64

DEFAULT_SIMILARITY_THRESHOLD = 0.7


def _is_symbol(char: str) -> bool:
    # Anything that is neither a letter nor a number, whitespace included
    return not (char.isalpha() or char.isnumeric())


USERNAME_RULES = RuleSet(
    min_length(USERNAME_MIN_LENGTH, ValidationRule.USERNAME_TOO_SHORT),
    max_length(USERNAME_MAX_LENGTH, ValidationRule.USERNAME_TOO_LONG),
    contains_only(USERNAME_ALPHABET, ValidationRule.USERNAME_INVALID_CHARACTERS),
)

PASSWORD_STRENGTH_RULES = RuleSet(
    min_length(PASSWORD_MIN_LENGTH, ValidationRule.PASSWORD_TOO_SHORT),
    max_length(PASSWORD_MAX_LENGTH, ValidationRule.PASSWORD_TOO_LONG),
    contains_any(str.islower, ValidationRule.PASSWORD_MISSING_LOWERCASE),
    contains_any(str.isupper, ValidationRule.PASSWORD_MISSING_UPPERCASE),
    contains_any(str.isnumeric, ValidationRule.PASSWORD_MISSING_DIGIT),
    contains_any(_is_symbol, ValidationRule.PASSWORD_MISSING_SYMBOL),
)


def password_rules(
    similar_to: Iterable[str] = (),
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> RuleSet:
    """Build the password rule set for one account.

    Parameters
    ----------
    similar_to
        Values the password must not resemble (username, email)
    threshold
        Maximum accepted similarity ratio
    """
    return PASSWORD_STRENGTH_RULES.extend(
        not_similar_to(similar_to, threshold, ValidationRule.PASSWORD_TOO_SIMILAR),
    )
