"""
ChowPilot Rule Cascade

Every decision in the engine is an ordered table of rules evaluated
first-match-wins. A rule is a guard over the normalized facts plus an
outcome builder; the table's last rule must always match.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")
F = TypeVar("F")


@dataclass(frozen=True)
class Rule(Generic[F, T]):
    """
    One row of a first-match table.

    Attributes:
        rule_id: Stable identifier, used in logs and results
        guard: Predicate over the facts
        outcome: Builds the result when the guard matches
    """
    rule_id: str
    guard: Callable[[F], bool]
    outcome: Callable[[F], T]


def always(_facts: object) -> bool:
    """Guard for the terminal default row."""
    return True


def first_match(rules: Sequence[Rule[F, T]], facts: F) -> tuple[str, T]:
    """
    Evaluate rules in order and return (rule_id, outcome) of the first match.

    Raises:
        LookupError: If no rule matches (a table without a default row)
    """
    for rule in rules:
        if rule.guard(facts):
            return rule.rule_id, rule.outcome(facts)
    raise LookupError("rule table has no matching row")
