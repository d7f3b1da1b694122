"""Configuration module for the inventory API.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (local MongoDB replica set)
- APP_ENV=test → config_test.yaml (throwaway database for integration tests)
- Default      → config.yaml

Secrets (the MongoDB connection string) are loaded from the .env file.
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from src/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_positive_int(section: dict, key: str, default: int) -> int:
    value = section.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ConfigurationError(f"'{key}' must be a non-negative integer, got {value!r}")
    return value


@dataclass(frozen=True)
class MongoDBConfig:
    """MongoDB connection configuration."""
    uri: str
    database_name: str
    server_selection_timeout_ms: int


@dataclass(frozen=True)
class ApiConfig:
    """HTTP surface configuration."""
    default_limit: int
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class ReportingConfig:
    """Stock reporting thresholds."""
    low_stock_threshold: int
    critical_stock_threshold: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    mongodb: MongoDBConfig
    api: ApiConfig
    reporting: ReportingConfig
    logging: LoggingConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config for non-sensitive settings and .env for the
    database connection string. Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build MongoDB config
    mongodb_section = yaml_config.get("mongodb", {})

    mongodb_config = MongoDBConfig(
        uri=_get_required_env("MONGODB_URI"),
        database_name=mongodb_section.get("database_name", "ims"),
        server_selection_timeout_ms=_get_positive_int(
            mongodb_section, "server_selection_timeout_ms", 5000
        ),
    )

    # Build API config
    api_section = yaml_config.get("api", {})

    api_config = ApiConfig(
        default_limit=_get_positive_int(api_section, "default_limit", 1000),
        cors_origins=list(api_section.get("cors_origins", ["*"])),
    )

    # Build Reporting config
    reporting_section = yaml_config.get("reporting", {})

    reporting_config = ReportingConfig(
        low_stock_threshold=_get_positive_int(reporting_section, "low_stock_threshold", 10),
        critical_stock_threshold=_get_positive_int(
            reporting_section, "critical_stock_threshold", 5
        ),
    )

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    return AppConfig(
        mongodb=mongodb_config,
        api=api_config,
        reporting=reporting_config,
        logging=logging_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev', 'test', or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
