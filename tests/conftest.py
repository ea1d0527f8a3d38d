"""Shared pytest fixtures for ctxignore tests."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml

from ctxignore.core.path_utils import PosixPathStrategy, WindowsPathStrategy
from ctxignore.ignore_filter import Ignore
from ctxignore.infrastructure.config_manager import ConfigManager, set_global_config
from ctxignore.infrastructure.logger import set_global_logger


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config() -> ConfigManager:
    """Configuration manager isolated from the environment."""
    return ConfigManager(load_environment=False)


@pytest.fixture
def posix_ignore(config: ConfigManager) -> Ignore:
    """Empty filter using the POSIX path strategy."""
    return Ignore(config=config, path_strategy=PosixPathStrategy())


@pytest.fixture
def windows_ignore(config: ConfigManager) -> Ignore:
    """Empty filter using the Windows path strategy."""
    return Ignore(config=config, path_strategy=WindowsPathStrategy())


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample ctxignore configuration."""
    return {
        "ctxignore": {
            "platform": "posix",
            "cache": {
                "enabled": True,
                "max_entries": 256,
            },
            "logging": {
                "level": "DEBUG",
            },
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "ctxignore.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset global instances, the ctxignore logger and CTXIGNORE_* variables."""
    for key in list(os.environ):
        if key.startswith("CTXIGNORE_"):
            monkeypatch.delenv(key)

    reset_library_logger()
    set_global_config(None)
    set_global_logger(None)
    yield
    set_global_config(None)
    set_global_logger(None)
    reset_library_logger()


def reset_library_logger() -> None:
    """Restore the stdlib ``ctxignore`` logger to its unconfigured state."""
    stdlib_logger = logging.getLogger("ctxignore")
    stdlib_logger.handlers.clear()
    stdlib_logger.setLevel(logging.NOTSET)
    stdlib_logger.propagate = True
