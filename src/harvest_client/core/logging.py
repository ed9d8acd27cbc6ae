"""Logging setup for the Harvest client."""

import logging
from pathlib import Path
from typing import Optional

from harvest_client.core.config import ConfigManager

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: ConfigManager, level: Optional[str] = None) -> logging.Logger:
    """Configure the ``harvest_client`` logger from configuration.

    Args:
        config: Configuration manager (reads logging.level and logging.file)
        level: Override for the configured level (e.g. "DEBUG")

    Returns:
        The package logger
    """
    log_level = getattr(logging, (level or config.get("logging.level", "WARNING")).upper())

    package_logger = logging.getLogger("harvest_client")
    package_logger.setLevel(log_level)

    # Repeated setup (tests, nested CLI invocations) must not stack handlers
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)

    log_file = config.get("logging.file")
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    return package_logger
