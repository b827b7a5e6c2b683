"""ruleexpr: expression-language conditions for rules engines.

Compile a condition once, then evaluate it against any number of fact
collections:

    from ruleexpr import ExpressionCondition, Facts

    adult = ExpressionCondition("age >= 18")
    adult.evaluate(Facts({"age": 20}))  # True
"""

from ruleexpr.conditions import Condition, ExpressionCondition
from ruleexpr.exceptions import (
    CoercionError,
    EvaluationError,
    ParseError,
    RuleExprError,
    UndefinedFactError,
)
from ruleexpr.expressions import (
    ExpressionEngine,
    ParseOptions,
    SandboxEngine,
    create_engine,
)
from ruleexpr.facts import Fact, Facts

__version__ = "0.1.0"
__all__ = [
    "CoercionError",
    "Condition",
    "EvaluationError",
    "ExpressionCondition",
    "ExpressionEngine",
    "Fact",
    "Facts",
    "ParseError",
    "ParseOptions",
    "RuleExprError",
    "SandboxEngine",
    "UndefinedFactError",
    "create_engine",
]
