"""Tests for environment-driven settings."""

from unittest.mock import patch

import pytest

from scripts.lib.config import load_settings
from scripts.lib.errors import ConfigError

CLEAN_ENV = {
    "WEBHOOK_URL": "",
    "WEBHOOK_TIMEOUT_SECONDS": "",
    "WEBHOOK_MAX_RETRIES": "",
    "UNKNOWN_ADVISOR_LABEL": "",
    "NO_PROGRAM_LABEL": "",
    "DASHBOARD_PORT": "",
}


class TestLoadSettings:
    def test_defaults(self):
        with patch.dict("os.environ", CLEAN_ENV, clear=False):
            settings = load_settings()
        assert settings.webhook_url == ""
        assert settings.webhook_timeout_seconds == 15.0
        assert settings.webhook_max_retries == 3
        assert settings.unknown_advisor_label == "Unknown"
        assert settings.no_program_label == "No Program"
        assert settings.dashboard_port == 8001

    def test_overrides(self):
        env = {
            **CLEAN_ENV,
            "WEBHOOK_URL": " https://hooks.example.com/deals ",
            "WEBHOOK_TIMEOUT_SECONDS": "2.5",
            "UNKNOWN_ADVISOR_LABEL": "Desconocido",
            "NO_PROGRAM_LABEL": "Sin Programa",
            "CORS_ORIGINS": "http://a.test, http://b.test,",
        }
        with patch.dict("os.environ", env, clear=False):
            settings = load_settings()
        assert settings.webhook_url == "https://hooks.example.com/deals"
        assert settings.webhook_timeout_seconds == 2.5
        assert settings.unknown_advisor_label == "Desconocido"
        assert settings.no_program_label == "Sin Programa"
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    @pytest.mark.parametrize("name,value", [
        ("WEBHOOK_TIMEOUT_SECONDS", "soon"),
        ("WEBHOOK_TIMEOUT_SECONDS", "0"),
        ("WEBHOOK_MAX_RETRIES", "1.5"),
        ("DASHBOARD_PORT", "0"),
    ])
    def test_invalid_numbers(self, name, value):
        with patch.dict("os.environ", {**CLEAN_ENV, name: value}, clear=False):
            with pytest.raises(ConfigError) as exc:
                load_settings()
        assert exc.value.details["setting"] == name
