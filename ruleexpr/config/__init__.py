"""Configuration for ruleexpr.

The default engine of every ExpressionCondition is built from
get_settings().evaluation, so TOML files and RULEEXPR_* variables change how
all conditions coerce their results:

    RULEEXPR_EVALUATION__STRICT_BOOLEAN=false
"""

from functools import lru_cache

from ruleexpr.config.settings import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once.

    Call reload_settings() after changing files or the environment.
    """
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and read configuration again."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
