"""Conditions written in an expression language.

An ExpressionCondition compiles its expression once and evaluates it for
every fact collection it is asked about. The facts are bound twice per
evaluation: as the root mapping that bare names resolve against, and as
variables reachable with #name.

    condition = ExpressionCondition("age > 18 and #country == 'FR'")
    condition.evaluate({"age": 20, "country": "FR"})  # True
"""

from collections.abc import Mapping
from typing import Any

import structlog

from ruleexpr.conditions.base import Condition, FactsLike
from ruleexpr.expressions.engine import ExpressionEngine
from ruleexpr.expressions.factory import create_engine
from ruleexpr.expressions.models import CompiledExpression, ParseOptions
from ruleexpr.observability.logging import get_logger

_default_logger = get_logger(__name__)


class ExpressionCondition(Condition):
    """Condition that evaluates an expression against facts.

    Parse errors surface from the constructor as ParseError. Evaluation
    never raises: any failure is logged at error level and reported as
    False, so one inapplicable fact set cannot abort a batch of rules.
    """

    def __init__(
        self,
        expression: str,
        parse_options: ParseOptions | None = None,
        *,
        engine: ExpressionEngine | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Compile the expression.

        Args:
            expression: Condition written in the expression language
            parse_options: Non-standard parsing, e.g. template delimiters
            engine: Expression engine, a sandbox engine configured from
                get_settings().evaluation when omitted
            logger: Diagnostic sink for evaluation failures

        Raises:
            ParseError: If the expression is not syntactically valid
        """
        self._expression = expression
        self._parse_options = parse_options
        self._engine = engine if engine is not None else create_engine()
        self._logger = logger if logger is not None else _default_logger
        self._compiled: CompiledExpression = self._engine.compile(expression, parse_options)

    @property
    def expression(self) -> str:
        """The expression source text."""
        return self._expression

    @property
    def parse_options(self) -> ParseOptions | None:
        """Options the expression was parsed with."""
        return self._parse_options

    @property
    def referenced_facts(self) -> frozenset[str]:
        """Fact names the expression reads, by bare name or #name."""
        return self._compiled.names

    def evaluate(self, facts: FactsLike) -> bool:
        """Evaluate the expression against the given facts.

        Returns:
            The boolean result, or False if evaluation failed for any reason
        """
        try:
            snapshot = _snapshot(facts)
            return self._engine.evaluate_boolean(self._compiled, snapshot, snapshot)
        except Exception as e:  # noqa: BLE001
            self._log_failure(facts, e)
            return False

    def _log_failure(self, facts: Any, error: Exception) -> None:
        # A broken sink must not turn a False answer into an exception
        try:
            self._logger.error(
                "expression_evaluation_failed",
                expression=self._expression,
                facts=_describe(facts),
                error=str(error),
                error_type=type(error).__name__,
            )
        except Exception:  # noqa: BLE001
            pass

    def __str__(self) -> str:
        return self._expression

    def __repr__(self) -> str:
        return f"ExpressionCondition({self._expression!r})"


def _snapshot(facts: FactsLike) -> dict[str, Any]:
    """Copy facts into a plain dict owned by one evaluation."""
    as_map = getattr(facts, "as_map", None)
    if callable(as_map):
        return dict(as_map())
    if isinstance(facts, Mapping):
        return dict(facts)
    raise TypeError(
        f"Facts must be a Facts object or a mapping, got {type(facts).__name__}"
    )


def _describe(facts: Any) -> str:
    """Render facts for a log entry without letting rendering fail."""
    try:
        return str(facts)
    except Exception:  # noqa: BLE001
        return f"<unprintable {type(facts).__name__}>"
