"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from ruleexpr.config.models import EvaluationConfig, LoggingConfig, ObservabilityConfig


class TestEvaluationConfig:
    """Tests for EvaluationConfig."""

    def test_defaults(self) -> None:
        config = EvaluationConfig()

        assert config.strict_boolean is True
        assert config.true_values == ["true", "on", "yes", "1"]
        assert config.false_values == ["false", "off", "no", "0"]

    def test_overlapping_values_rejected(self) -> None:
        with pytest.raises(ValidationError, match="overlap"):
            EvaluationConfig(true_values=["yes"], false_values=["YES"])


class TestObservabilityConfig:
    """Tests for ObservabilityConfig."""

    def test_defaults(self) -> None:
        config = ObservabilityConfig()

        assert config.logging.level == "INFO"
        assert config.logging.format == "json"
        assert config.logging.redact_pii is True

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")  # type: ignore[arg-type]

    def test_invalid_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")  # type: ignore[arg-type]
