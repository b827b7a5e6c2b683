"""Condition abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ruleexpr.facts import Facts

FactsLike = Facts | Mapping[str, Any]


class Condition(ABC):
    """A boolean predicate over a fact collection.

    Conditions plug into any rule evaluation pipeline that asks whether a
    rule applies to the facts at hand.
    """

    @abstractmethod
    def evaluate(self, facts: FactsLike) -> bool:
        """Return True if the condition holds for the given facts."""
        pass
