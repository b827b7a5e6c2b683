"""Expression compilation and evaluation.

Defines the narrow engine capability used by conditions and its Jinja2
sandbox implementation.
"""

from ruleexpr.expressions.coercion import BooleanCoercer
from ruleexpr.expressions.engine import ExpressionEngine
from ruleexpr.expressions.factory import create_engine
from ruleexpr.expressions.models import CompiledExpression, ParseOptions
from ruleexpr.expressions.sandbox import SandboxEngine, SandboxExpression

__all__ = [
    "BooleanCoercer",
    "CompiledExpression",
    "ExpressionEngine",
    "ParseOptions",
    "SandboxEngine",
    "SandboxExpression",
    "create_engine",
]
