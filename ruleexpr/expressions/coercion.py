"""Conversion of expression results to booleans."""

from collections.abc import Iterable
from typing import Any

from ruleexpr.exceptions import CoercionError

DEFAULT_TRUE_VALUES: frozenset[str] = frozenset({"true", "on", "yes", "1"})
DEFAULT_FALSE_VALUES: frozenset[str] = frozenset({"false", "off", "no", "0"})


class BooleanCoercer:
    """Convert an expression result to a bool.

    Strict mode only accepts booleans and the configured boolean strings.
    Non-strict mode additionally falls back to Python truthiness for any
    other non-None value.
    """

    def __init__(
        self,
        strict: bool = True,
        true_values: Iterable[str] = DEFAULT_TRUE_VALUES,
        false_values: Iterable[str] = DEFAULT_FALSE_VALUES,
    ) -> None:
        self.strict = strict
        self.true_values = frozenset(v.strip().lower() for v in true_values)
        self.false_values = frozenset(v.strip().lower() for v in false_values)
        overlap = self.true_values & self.false_values
        if overlap:
            raise ValueError(f"Values cannot be both true and false: {sorted(overlap)}")

    def coerce(self, value: Any, expression: str | None = None) -> bool:
        """Coerce a value to bool.

        Raises:
            CoercionError: If the value has no boolean interpretation
        """
        if isinstance(value, bool):
            return value

        if value is None:
            raise CoercionError(
                "Expression evaluated to None, expected a boolean",
                value=value,
                expression=expression,
            )

        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in self.true_values:
                return True
            if normalized in self.false_values:
                return False
            raise CoercionError(
                f"Cannot convert string {value!r} to a boolean",
                value=value,
                expression=expression,
            )

        if not self.strict:
            return bool(value)

        raise CoercionError(
            f"Cannot convert {type(value).__name__} value {value!r} to a boolean",
            value=value,
            expression=expression,
        )
