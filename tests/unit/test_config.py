"""Tests for settings loading."""

from __future__ import annotations

import pytest

from core.config import DEFAULT_API_BASE_URL, DEFAULT_APP_BASE_URL, load_settings, parse_overrides
from core.errors import ConfigurationError


class TestParseOverrides:
    def test_key_value_pairs(self):
        assert parse_overrides(["API_KEY=abc", "ORGANIZATION_ID=org"]) == {
            "API_KEY": "abc",
            "ORGANIZATION_ID": "org",
        }

    def test_quotes_are_stripped(self):
        assert parse_overrides(['API_KEY="abc"', "LOG_LEVEL='debug'"]) == {
            "API_KEY": "abc",
            "LOG_LEVEL": "debug",
        }

    def test_value_may_contain_equals(self):
        assert parse_overrides(["API_KEY=a=b"]) == {"API_KEY": "a=b"}

    def test_other_arguments_are_ignored(self):
        assert parse_overrides(["--verbose", "positional"]) == {}


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings([], {"API_KEY": "key", "ORGANIZATION_ID": "org"})
        assert settings.api_key == "key"
        assert settings.organization_id == "org"
        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.app_base_url == DEFAULT_APP_BASE_URL
        assert settings.log_level == "INFO"

    def test_arguments_override_environment(self):
        settings = load_settings(
            ["API_KEY=from-args", "LOG_LEVEL=debug"],
            {"API_KEY": "from-env", "ORGANIZATION_ID": "org"},
        )
        assert settings.api_key == "from-args"
        assert settings.log_level == "DEBUG"

    def test_base_urls_can_be_overridden(self):
        settings = load_settings([], {
            "API_KEY": "key",
            "ORGANIZATION_ID": "org",
            "ICEPANEL_API_BASE_URL": "http://localhost:8080/v1",
            "ICEPANEL_APP_BASE_URL": "http://localhost:3000",
        })
        assert settings.api_base_url == "http://localhost:8080/v1"
        assert settings.app_base_url == "http://localhost:3000"

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError, match="API_KEY"):
            load_settings([], {"ORGANIZATION_ID": "org"})

    def test_missing_organization(self):
        with pytest.raises(ConfigurationError, match="ORGANIZATION_ID"):
            load_settings(["API_KEY=key"], {})

    def test_unknown_log_level_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            load_settings(["LOG_LEVEL=verbose"], {"API_KEY": "key", "ORGANIZATION_ID": "org"})

    def test_empty_log_level_falls_back_to_info(self):
        settings = load_settings([], {"API_KEY": "key", "ORGANIZATION_ID": "org", "LOG_LEVEL": ""})
        assert settings.log_level == "INFO"
