"""Locating and reading ruleexpr TOML configuration.

ruleexpr is embedded in host applications, so configuration files are
optional. A directory counts as ruleexpr configuration only when it holds a
default.toml; without one every setting keeps its model default.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

from ruleexpr.observability.logging import get_logger

logger = get_logger(__name__)

CONFIG_DIR_ENV = "RULEEXPR_CONFIG_DIR"
ENVIRONMENT_ENV = "RULEEXPR_ENV"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_FILE = "default.toml"

# Working directory plus this many ancestors are searched for config/
SEARCH_DEPTH = 5


def find_config_dir(start: Path | None = None) -> Path | None:
    """Find the directory holding ruleexpr TOML files.

    RULEEXPR_CONFIG_DIR wins when set and must exist. Otherwise the nearest
    config/ directory containing default.toml, searching upwards from start
    (the working directory by default), is used.

    Returns:
        The config directory, or None if there is no configuration

    Raises:
        FileNotFoundError: If RULEEXPR_CONFIG_DIR names a missing directory
    """
    explicit = os.environ.get(CONFIG_DIR_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"{CONFIG_DIR_ENV} is not a directory: {explicit}")
        return path

    current = (start or Path.cwd()).resolve()
    for directory in [current, *current.parents][: SEARCH_DEPTH + 1]:
        candidate = directory / "config"
        if (candidate / DEFAULT_FILE).is_file():
            return candidate
    return None


def get_environment() -> str:
    """Name of the environment overlay, from RULEEXPR_ENV."""
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    with path.open("rb") as f:
        return tomllib.load(f)


def merge_config(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Lay overlay on top of base without modifying either.

    Tables merge key by key; any other overlay value replaces the base value,
    so an overlay list of true_values replaces the default list outright.
    """
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_config(current, value)
        else:
            merged[key] = value
    return merged


def load_config(config_dir: Path | None = None) -> dict[str, Any]:
    """Load default.toml overlaid with {RULEEXPR_ENV}.toml.

    Args:
        config_dir: Directory to read, found with find_config_dir() if omitted

    Returns:
        Merged configuration, empty when no configuration exists

    Raises:
        FileNotFoundError: If an explicitly chosen directory lacks default.toml
    """
    if config_dir is None:
        config_dir = find_config_dir()
        if config_dir is None:
            logger.debug("configuration_not_found", search_start=str(Path.cwd()))
            return {}

    default_path = config_dir / DEFAULT_FILE
    if not default_path.is_file():
        raise FileNotFoundError(
            f"Configuration directory {config_dir} has no {DEFAULT_FILE}"
        )

    config = read_toml(default_path)
    layers = [default_path.name]

    environment = get_environment()
    overlay_path = config_dir / f"{environment}.toml"
    if overlay_path.is_file():
        config = merge_config(config, read_toml(overlay_path))
        layers.append(overlay_path.name)

    logger.debug(
        "configuration_loaded",
        config_dir=str(config_dir),
        environment=environment,
        layers=layers,
    )
    return config
