"""Composable validation rules.

A ``Rule`` is a named predicate over a string. A ``RuleSet`` evaluates its
rules in order and stops at the first failure, so the reported violation is
deterministic and always names the first rule that failed.

Rule sets are immutable: ``extend`` returns a new set, which keeps existing
sets untouched when new policies are composed from them.

Examples
--------
>>> rules = RuleSet(min_length(3, ValidationRule.USERNAME_TOO_SHORT))
>>> rules.first_violation("ab")
<ValidationRule.USERNAME_TOO_SHORT: 'username_too_short'>
>>> rules.first_violation("abc") is None
True
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from padlock_identity.exceptions import ValidationFailedError, ValidationRule
from padlock_identity.validation.similarity import similarity_ratio

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class Rule:
    """A named predicate; ``predicate`` returns True when the text is acceptable."""

    name: ValidationRule
    predicate: Predicate

    def accepts(self, candidate: str) -> bool:
        return self.predicate(candidate)


class RuleSet:
    """Ordered, fail-fast collection of rules."""

    def __init__(self, *rules: Rule):
        if not rules:
            msg = "A rule set must contain at least one rule"
            raise ValueError(msg)
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def extend(self, *rules: Rule) -> RuleSet:
        """Return a new rule set with ``rules`` appended."""
        return RuleSet(*self._rules, *rules)

    def first_violation(self, candidate: str) -> ValidationRule | None:
        """Return the name of the first rule ``candidate`` violates, if any."""
        for rule in self._rules:
            if not rule.accepts(candidate):
                return rule.name
        return None

    def validate(self, candidate: str) -> None:
        """Validate ``candidate``.

        Raises
        ------
        ValidationFailedError
            Naming the first violated rule
        """
        violation = self.first_violation(candidate)
        if violation is not None:
            raise ValidationFailedError(violation)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        names = ", ".join(rule.name.value for rule in self._rules)
        return f"RuleSet({names})"


def min_length(length: int, name: ValidationRule) -> Rule:
    """Text must have at least ``length`` characters."""
    return Rule(name, lambda text: len(text) >= length)


def max_length(length: int, name: ValidationRule) -> Rule:
    """Text must have at most ``length`` characters."""
    return Rule(name, lambda text: len(text) <= length)


def contains_only(chars: str, name: ValidationRule) -> Rule:
    """Every character of the text must belong to ``chars``."""
    allowed = frozenset(chars)
    return Rule(name, lambda text: all(char in allowed for char in text))


def contains_any(char_predicate: Callable[[str], bool], name: ValidationRule) -> Rule:
    """At least one character of the text must satisfy ``char_predicate``."""
    return Rule(name, lambda text: any(char_predicate(char) for char in text))


def not_similar_to(
    attributes: Iterable[str],
    threshold: float,
    name: ValidationRule,
) -> Rule:
    """Text must not be more than ``threshold`` similar to any attribute.

    See ``similarity_ratio`` for the metric.
    """
    values = tuple(attributes)

    def _predicate(text: str) -> bool:
        return all(similarity_ratio(text, value) <= threshold for value in values)

    return Rule(name, _predicate)
