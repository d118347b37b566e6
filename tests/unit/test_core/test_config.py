#!/usr/bin/env python3
"""Tests for environment-based configuration."""

from pathlib import Path

import pytest

from forkthebill.core.config import (
    Config,
    Environment,
    StoreBackend,
    get_config,
    get_data_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)


class TestConfigLoading:
    """Test configuration loading and structure."""

    def test_config_uses_test_environment(self, tmp_path):
        config = get_config()

        assert config.environment == Environment.TEST
        assert config.data_dir == tmp_path / "data"
        assert config.data_dir.exists()
        assert config.store.backend == StoreBackend.JSON
        assert config.store.expenses_dir == config.data_dir / "expenses"

    def test_environment_detection_functions(self):
        assert is_test() is True
        assert is_development() is False
        assert is_production() is False

    def test_get_data_dir_returns_path(self):
        assert isinstance(get_data_dir(), Path)

    def test_memory_backend_selected_from_environment(self, monkeypatch):
        monkeypatch.setenv("FORKTHEBILL_STORE", "memory")
        config = reload_config()
        assert config.store.backend == StoreBackend.MEMORY

    def test_get_config_is_cached(self):
        assert get_config() is get_config()


class TestConfigValidation:
    """Test configuration validation rules."""

    def test_valid_configuration_has_no_errors(self):
        assert Config.from_environment().validate() == []

    def test_unknown_log_level_is_reported(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")
        errors = Config.from_environment().validate()
        assert any("LOG_LEVEL" in error for error in errors)

    def test_memory_store_rejected_in_production(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FORKTHEBILL_ENV", "production")
        monkeypatch.setenv("FORKTHEBILL_STORE", "memory")
        monkeypatch.setenv("FORKTHEBILL_DATA_DIR", str(tmp_path / "prod"))

        with pytest.raises(ValueError, match="Configuration validation failed"):
            reload_config()

    def test_unknown_store_backend_raises(self, monkeypatch):
        monkeypatch.setenv("FORKTHEBILL_STORE", "postgres")
        with pytest.raises(ValueError):
            Config.from_environment()

    def test_to_dict_is_plain_data(self):
        data = get_config().to_dict()
        assert data["environment"] == "test"
        assert data["store"]["backend"] == "json"
        assert isinstance(data["data_dir"], str)
