"""
Unit tests for configuration resolution
"""

import pytest
from pydantic import ValidationError

from vibelogger.core.config.models import DEFAULT_MAX_MEMORY_LOGS, LoggerConfig
from vibelogger.core.config.settings import Settings


def test_defaults():
    config = LoggerConfig()
    assert config.log_file is None
    assert config.auto_save is True
    assert config.keep_logs_in_memory is True
    assert config.max_memory_logs == DEFAULT_MAX_MEMORY_LOGS
    assert config.persists_to_file is False


def test_config_is_frozen():
    config = LoggerConfig()
    with pytest.raises(ValidationError):
        config.auto_save = False


def test_blank_strings_are_unset():
    config = LoggerConfig(log_file="  ", correlation_id="")
    assert config.log_file is None
    assert config.correlation_id is None


def test_non_positive_capacity_uses_default():
    assert LoggerConfig(max_memory_logs=0).max_memory_logs == DEFAULT_MAX_MEMORY_LOGS
    assert LoggerConfig(max_memory_logs=-3).max_memory_logs == DEFAULT_MAX_MEMORY_LOGS
    assert LoggerConfig(max_memory_logs=None).max_memory_logs is None


def test_resolve_passes_through_config():
    config = LoggerConfig(max_memory_logs=5)
    assert LoggerConfig.resolve(config) is config


def test_resolve_drops_invalid_fields():
    config = LoggerConfig.resolve(
        {"max_memory_logs": "many", "auto_save": False, "unknown_option": 1}
    )
    assert config.max_memory_logs == DEFAULT_MAX_MEMORY_LOGS
    assert config.auto_save is False


def test_resolve_ignores_unsupported_types():
    assert LoggerConfig.resolve(["not", "a", "mapping"]) == LoggerConfig()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("VIBE_LOG_FILE", "/tmp/test.log")
    monkeypatch.setenv("VIBE_AUTO_SAVE", "false")
    monkeypatch.setenv("VIBE_MAX_FILE_SIZE_MB", "25")
    monkeypatch.setenv("VIBE_CORRELATION_ID", "env-test-id")

    config = Settings().to_logger_config()

    assert config.log_file == "/tmp/test.log"
    assert config.auto_save is False
    assert config.max_file_size_mb == 25
    assert config.correlation_id == "env-test-id"


def test_settings_log_level_validation():
    assert Settings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")


def test_settings_log_format_validation():
    assert Settings(log_format="JSON").log_format == "json"
    with pytest.raises(ValidationError):
        Settings(log_format="xml")
