"""Application Configuration — defaults, environment overrides, validation."""

import pytest
from pydantic import ValidationError

from envelope_kit.config import Settings, get_settings


def test_defaults_work_without_environment(monkeypatch):
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.service_name == "envelope-kit"
    assert settings.log_format == "json"
    assert settings.log_level == "INFO"


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("SERVICE_NAME", "orders-api")
    assert Settings(_env_file=None).service_name == "orders-api"


def test_log_format_is_normalized():
    assert Settings(_env_file=None, log_format="TEXT").log_format == "text"


def test_unknown_log_format_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_format="xml")


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
