"""
Priority-ordered rule lists.

A rule list is evaluated top to bottom and the first rule whose predicate
holds decides the category. Lists should end with a catch-all rule.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, TypeVar

T = TypeVar("T")
C = TypeVar("C")


@dataclass(frozen=True)
class Rule(Generic[T, C]):
    """Named (predicate, category) pair."""
    name: str
    predicate: Callable[[T], bool]
    category: C

    def matches(self, value: T) -> bool:
        return self.predicate(value)


def always(_value: object) -> bool:
    """Predicate for catch-all rules."""
    return True


def first_match(rules: Sequence[Rule[T, C]], value: T) -> Optional[Rule[T, C]]:
    """
    Return the first rule matching `value`.

    Args:
        rules: Rules in priority order
        value: Input the predicates are evaluated on

    Returns:
        Matching rule, or None if no rule matches
    """
    for rule in rules:
        if rule.matches(value):
            return rule
    return None
