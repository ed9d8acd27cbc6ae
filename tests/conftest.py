"""Pytest configuration and shared fixtures."""

import logging
import tempfile
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from harvest_client.core.config import ConfigManager


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")


@pytest.fixture
def temp_config_path():
    """Create a temporary config file path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "config.yml"


@pytest.fixture
def configured(temp_config_path: Path) -> ConfigManager:
    """Configuration with account and token set."""
    config = ConfigManager(temp_config_path)
    config.set("harvest.account", "acme")
    config.set("harvest.access_token", "secret-token")
    return config


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers that CLI invocations attach to the package logger."""
    yield
    package_logger = logging.getLogger("harvest_client")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
