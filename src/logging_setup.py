"""Process-wide logging setup."""

import logging

from src.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: LoggingConfig) -> None:
    """Apply the configured log level to the root logger."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # The driver logs every heartbeat at DEBUG
    logging.getLogger("pymongo").setLevel(max(level, logging.INFO))
