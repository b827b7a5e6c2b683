"""ExpressionEngine abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ruleexpr.expressions.coercion import BooleanCoercer
from ruleexpr.expressions.models import CompiledExpression, ParseOptions


class ExpressionEngine(ABC):
    """Abstract capability to compile expression text and evaluate it.

    Compilation happens once per expression; evaluation happens many times,
    each time against a fresh name to value mapping. Implementations must
    not keep per-evaluation state on the engine or on compiled expressions,
    so one compiled expression can be evaluated from many threads at once.
    """

    def __init__(self, coercer: BooleanCoercer | None = None) -> None:
        self.coercer = coercer or BooleanCoercer()

    @abstractmethod
    def compile(
        self,
        expression: str,
        options: ParseOptions | None = None,
    ) -> CompiledExpression:
        """Parse expression text.

        Raises:
            ParseError: If the text is not a valid expression
        """
        pass

    @abstractmethod
    def evaluate(
        self,
        compiled: CompiledExpression,
        root: Mapping[str, Any],
        variables: Mapping[str, Any],
    ) -> Any:
        """Evaluate a compiled expression.

        Args:
            compiled: Expression produced by this engine's compile()
            root: Mapping against which bare names resolve
            variables: Mapping behind explicit #name references

        Returns:
            The raw expression result
        """
        pass

    def evaluate_boolean(
        self,
        compiled: CompiledExpression,
        root: Mapping[str, Any],
        variables: Mapping[str, Any],
    ) -> bool:
        """Evaluate a compiled expression and coerce the result to bool."""
        value = self.evaluate(compiled, root, variables)
        return self.coercer.coerce(value, expression=compiled.source)
