"""Configuration model exports.

    from ruleexpr.config.models import EvaluationConfig, LoggingConfig
"""

from ruleexpr.config.models.evaluation import EvaluationConfig
from ruleexpr.config.models.observability import (
    LogFormat,
    LoggingConfig,
    LogLevel,
    ObservabilityConfig,
)

__all__ = [
    "EvaluationConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ObservabilityConfig",
]
