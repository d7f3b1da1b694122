"""Configuration module."""

from src.config.configuration import (
    ApiConfig,
    AppConfig,
    ConfigurationError,
    LoggingConfig,
    MongoDBConfig,
    ReportingConfig,
    get_config,
    get_environment,
    load_config,
    reset_config,
)

__all__ = [
    "ApiConfig",
    "AppConfig",
    "ConfigurationError",
    "LoggingConfig",
    "MongoDBConfig",
    "ReportingConfig",
    "get_config",
    "get_environment",
    "load_config",
    "reset_config",
]
