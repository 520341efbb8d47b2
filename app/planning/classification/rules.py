"""Ordered keyword rules shared by the exercise classifiers.

Each classifier is a tuple of rules evaluated top-to-bottom; the first rule
whose predicate accepts the lower-cased exercise name wins. Order is part of
the contract: e.g. hinge must be tested before squat.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

NamePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class ClassificationRule(Generic[T]):
    """A single (predicate, result) rule.

    Attributes:
        label: Short name used in logs and tests
        predicate: Receives the lower-cased, stripped exercise name
        result: Value returned when the predicate matches
    """

    label: str
    predicate: NamePredicate
    result: T

    def matches(self, name: str) -> bool:
        return self.predicate(name)


def contains_any(*keywords: str) -> NamePredicate:
    return lambda name: any(keyword in name for keyword in keywords)


def normalize_name(name: str | None) -> str:
    return (name or "").strip().lower()


def first_match(rules: Sequence[ClassificationRule[T]], name: str | None, default: T) -> T:
    """Return the result of the first matching rule, or default."""
    normalized = normalize_name(name)
    if not normalized:
        return default
    for rule in rules:
        if rule.matches(normalized):
            return rule.result
    return default


def matching_rule(rules: Sequence[ClassificationRule[T]], name: str | None) -> ClassificationRule[T] | None:
    """Return the first matching rule itself (for debugging and tests)."""
    normalized = normalize_name(name)
    if not normalized:
        return None
    return next((rule for rule in rules if rule.matches(normalized)), None)
