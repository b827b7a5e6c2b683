"""Engine construction from configuration."""

from collections.abc import Callable, Mapping
from typing import Any

from ruleexpr.config import get_settings
from ruleexpr.config.models.evaluation import EvaluationConfig
from ruleexpr.expressions.coercion import BooleanCoercer
from ruleexpr.expressions.sandbox import SandboxEngine


def create_engine(
    config: EvaluationConfig | None = None,
    functions: Mapping[str, Callable[..., Any]] | None = None,
) -> SandboxEngine:
    """Build the default expression engine.

    Args:
        config: Evaluation settings, get_settings().evaluation when omitted
        functions: Extra functions made available to expressions

    Returns:
        A SandboxEngine with a coercer matching the configuration
    """
    if config is None:
        config = get_settings().evaluation
    coercer = BooleanCoercer(
        strict=config.strict_boolean,
        true_values=config.true_values,
        false_values=config.false_values,
    )
    return SandboxEngine(coercer=coercer, functions=functions)
