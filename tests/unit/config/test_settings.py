"""Unit tests for Settings class and get_settings function."""

from collections.abc import Callable
from pathlib import Path

import pytest

from ruleexpr.config import get_settings, reload_settings
from ruleexpr.config.settings import Settings


class TestSettings:
    """Tests for Settings model."""

    def test_model_defaults_without_configuration(self) -> None:
        """With no TOML files in reach the model defaults apply."""
        settings = Settings()
        assert settings.app_name == "ruleexpr"
        assert settings.debug is False
        assert settings.evaluation.strict_boolean is True
        assert settings.observability.logging.level == "INFO"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """RULEEXPR_* variables override defaults, nested with '__'."""
        monkeypatch.setenv("RULEEXPR_DEBUG", "true")
        monkeypatch.setenv("RULEEXPR_EVALUATION__STRICT_BOOLEAN", "false")

        settings = Settings()
        assert settings.debug is True
        assert settings.evaluation.strict_boolean is False

    def test_init_kwargs_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Constructor arguments take precedence over the environment."""
        monkeypatch.setenv("RULEEXPR_APP_NAME", "from-env")
        assert Settings(app_name="from-init").app_name == "from-init"

    def test_reads_toml_layers(self, write_config: Callable[..., Path]) -> None:
        """Settings objects read the TOML files when built."""
        write_config(
            default=(
                "app_name = 'rules'\n"
                "[evaluation]\nstrict_boolean = false\n"
                "[observability.logging]\nformat = 'console'\n"
            ),
        )

        settings = Settings()
        assert settings.app_name == "rules"
        assert settings.evaluation.strict_boolean is False
        assert settings.evaluation.true_values == ["true", "on", "yes", "1"]
        assert settings.observability.logging.format == "console"

    def test_nested_env_merges_with_toml(
        self, write_config: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """One nested variable overrides one key and keeps the other TOML keys."""
        write_config(default="[evaluation]\ntrue_values = ['y']\nstrict_boolean = true")
        monkeypatch.setenv("RULEEXPR_EVALUATION__STRICT_BOOLEAN", "false")

        evaluation = Settings().evaluation
        assert evaluation.strict_boolean is False
        assert evaluation.true_values == ["y"]


class TestGetSettings:
    """Tests for get_settings function."""

    def test_env_beats_toml(
        self, write_config: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_config(default="app_name = 'from-toml'")
        monkeypatch.setenv("RULEEXPR_APP_NAME", "from-env")

        assert get_settings().app_name == "from-env"

    def test_settings_cached_until_reloaded(self, write_config: Callable[..., Path]) -> None:
        write_config(default="app_name = 'first'")

        first = get_settings()
        assert get_settings() is first

        write_config(default="app_name = 'second'")
        assert get_settings().app_name == "first"
        assert reload_settings().app_name == "second"
