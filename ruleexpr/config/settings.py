"""Root settings model for ruleexpr configuration."""

from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ruleexpr.config.loader import load_config
from ruleexpr.config.models.evaluation import EvaluationConfig
from ruleexpr.config.models.observability import ObservabilityConfig


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the layered TOML files.

    The files are read when a Settings object is built, like the dotenv
    source reads its file.
    """

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        # Values are supplied all at once through __call__
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return load_config()


class Settings(BaseSettings):
    """ruleexpr configuration.

    Sources, lowest to highest priority: model defaults, config/default.toml,
    config/{RULEEXPR_ENV}.toml, RULEEXPR_* environment variables (nested keys
    joined with '__'), constructor arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix="RULEEXPR_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="ruleexpr", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    evaluation: EvaluationConfig = Field(
        default_factory=EvaluationConfig,
        description="How condition results are coerced to booleans",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Logging of evaluation failures",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
