"""Tests for configuration loading.

These tests verify:
- The config file is chosen by APP_ENV
- The MongoDB connection string comes from the environment
- Missing sections fall back to defaults
- Invalid numeric settings fail fast
"""

import pytest

from src.config import configuration
from src.config.configuration import (
    ConfigurationError,
    get_config,
    get_environment,
    load_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    monkeypatch.setattr(configuration, "load_dotenv", lambda: None)
    monkeypatch.setenv("MONGODB_URI", "mongodb://db.test:27017/?replicaSet=rs0")
    monkeypatch.delenv("APP_ENV", raising=False)
    reset_config()
    yield
    reset_config()


def use_yaml(monkeypatch, data):
    monkeypatch.setattr(configuration, "_load_yaml_config", lambda: data)


class TestConfigFileSelection:
    def test_default(self):
        assert configuration._get_config_filename() == "config.yaml"
        assert get_environment() == "default"

    @pytest.mark.parametrize("app_env, filename", [("dev", "config_dev.yaml"), ("TEST", "config_test.yaml")])
    def test_app_env(self, monkeypatch, app_env, filename):
        monkeypatch.setenv("APP_ENV", app_env)

        assert configuration._get_config_filename() == filename
        assert get_environment() == app_env.lower()

    def test_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.setattr(configuration, "_get_project_root", lambda: tmp_path)

        with pytest.raises(ConfigurationError, match="config.yaml"):
            configuration._load_yaml_config()

    def test_shipped_config_files_load(self, monkeypatch):
        for app_env in ("", "dev", "test"):
            monkeypatch.setenv("APP_ENV", app_env)
            assert "mongodb" in configuration._load_yaml_config()


class TestLoadConfig:
    def test_full_config(self, monkeypatch):
        use_yaml(
            monkeypatch,
            {
                "mongodb": {"database_name": "inventory", "server_selection_timeout_ms": 1500},
                "api": {"default_limit": 50, "cors_origins": ["https://shop.test"]},
                "reporting": {"low_stock_threshold": 20, "critical_stock_threshold": 3},
                "logging": {"level": "DEBUG"},
            },
        )

        config = load_config()

        assert config.mongodb.uri == "mongodb://db.test:27017/?replicaSet=rs0"
        assert config.mongodb.database_name == "inventory"
        assert config.mongodb.server_selection_timeout_ms == 1500
        assert config.api.default_limit == 50
        assert config.api.cors_origins == ["https://shop.test"]
        assert config.reporting.low_stock_threshold == 20
        assert config.reporting.critical_stock_threshold == 3
        assert config.logging.level == "DEBUG"

    def test_defaults(self, monkeypatch):
        use_yaml(monkeypatch, {})

        config = load_config()

        assert config.mongodb.database_name == "ims"
        assert config.api.default_limit == 1000
        assert config.api.cors_origins == ["*"]
        assert config.reporting.low_stock_threshold == 10
        assert config.reporting.critical_stock_threshold == 5
        assert config.logging.level == "INFO"

    def test_missing_connection_string(self, monkeypatch):
        use_yaml(monkeypatch, {})
        monkeypatch.delenv("MONGODB_URI")

        with pytest.raises(ConfigurationError, match="MONGODB_URI"):
            load_config()

    @pytest.mark.parametrize("value", [-1, "ten", 2.5, True])
    def test_invalid_threshold(self, monkeypatch, value):
        use_yaml(monkeypatch, {"reporting": {"low_stock_threshold": value}})

        with pytest.raises(ConfigurationError, match="low_stock_threshold"):
            load_config()


class TestConfigSingleton:
    def test_get_config_is_cached(self, monkeypatch):
        use_yaml(monkeypatch, {})

        assert get_config() is get_config()

    def test_reset_config_reloads(self, monkeypatch):
        use_yaml(monkeypatch, {})
        first = get_config()

        reset_config()

        assert get_config() is not first
