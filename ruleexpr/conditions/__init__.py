"""Conditions: boolean predicates over facts."""

from ruleexpr.conditions.base import Condition, FactsLike
from ruleexpr.conditions.expression import ExpressionCondition

__all__ = ["Condition", "ExpressionCondition", "FactsLike"]
