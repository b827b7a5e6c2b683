"""Shared test fixtures for the ruleexpr test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ruleexpr.config import get_settings


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Run each test without any ruleexpr configuration in reach.

    The working directory moves to an empty directory and RULEEXPR_* variables
    are cleared, so default engines see model defaults unless a test writes
    configuration of its own.
    """
    monkeypatch.chdir(tmp_path_factory.mktemp("workdir"))
    for name in [name for name in os.environ if name.startswith("RULEEXPR_")]:
        monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty configuration directory selected through RULEEXPR_CONFIG_DIR."""
    path = tmp_path / "ruleexpr-config"
    path.mkdir()
    monkeypatch.setenv("RULEEXPR_CONFIG_DIR", str(path))
    return path


@pytest.fixture
def write_config(config_dir: Path) -> Callable[..., Path]:
    """Write TOML layers into config_dir, one keyword per file.

    Usage:
        def test_something(write_config):
            write_config(
                default="[evaluation]\\nstrict_boolean = false",
                production="debug = true",
            )
    """

    def _write(**layers: str) -> Path:
        for environment, content in layers.items():
            (config_dir / f"{environment}.toml").write_text(content)
        return config_dir

    return _write


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double injected into conditions."""
    return MagicMock()
