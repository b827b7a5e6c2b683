"""Exception hierarchy for expression conditions.

Two error domains exist:
- ParseError is raised while compiling an expression and always reaches the
  caller, since an unparseable condition is a configuration defect.
- EvaluationError (and subclasses) describe failures while evaluating a
  compiled expression against facts. ExpressionCondition catches them, logs
  them and answers False.
"""

from typing import Any


class RuleExprError(Exception):
    """Base exception for all ruleexpr errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(RuleExprError):
    """Raised when expression text cannot be compiled.

    position is a 0-based character offset and line a 1-based line number
    into the full expression text; either is None when unknown.
    """

    def __init__(
        self,
        message: str,
        expression: str,
        position: int | None = None,
        line: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expression = expression
        self.position = position
        self.line = line

    def __str__(self) -> str:
        if self.position is not None:
            where = f" at position {self.position}"
        elif self.line is not None:
            where = f" on line {self.line}"
        else:
            where = ""
        return f"{self.message}{where} in expression '{self.expression}'"


class EvaluationError(RuleExprError):
    """Raised when a compiled expression fails against a set of facts."""

    def __init__(self, message: str, expression: str | None = None) -> None:
        super().__init__(message)
        self.expression = expression


class UndefinedFactError(EvaluationError):
    """Raised when an expression references a fact that was not supplied."""

    def __init__(
        self,
        message: str,
        expression: str | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(message, expression)
        self.name = name


class CoercionError(EvaluationError):
    """Raised when an expression result cannot be converted to a boolean."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        expression: str | None = None,
    ) -> None:
        super().__init__(message, expression)
        self.value = value
