"""Validation engine: ordered, fail-fast rule sets for user input."""

from padlock_identity.validation.defaults import (
    DEFAULT_SIMILARITY_THRESHOLD,
    PASSWORD_STRENGTH_RULES,
    USERNAME_RULES,
    password_rules,
)
from padlock_identity.validation.rules import (
    Rule,
    RuleSet,
    contains_any,
    contains_only,
    max_length,
    min_length,
    not_similar_to,
)
from padlock_identity.validation.similarity import similarity_ratio

__all__ = [
    "DEFAULT_SIMILARITY_THRESHOLD",
    "PASSWORD_STRENGTH_RULES",
    "USERNAME_RULES",
    "Rule",
    "RuleSet",
    "contains_any",
    "contains_only",
    "max_length",
    "min_length",
    "not_similar_to",
    "password_rules",
    "similarity_ratio",
]
