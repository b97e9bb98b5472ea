"""Tests for qwixx/config/settings.py."""

import logging
from unittest.mock import patch

import pytest

from qwixx.config.settings import Settings, configure_logging
from qwixx.database import client as client_module


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("QWIXX_AUTO_SAVE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.auto_save is False
        assert settings.log_level == "INFO"
        assert settings.snapshot_table == "game_snapshots"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("QWIXX_AUTO_SAVE", "true")
        monkeypatch.setenv("QWIXX_LOG_LEVEL", "debug")
        settings = Settings(_env_file=None)
        assert settings.auto_save is True
        assert settings.log_level == "debug"


class TestConfigureLogging:
    def test_applies_level(self):
        with patch("qwixx.config.settings.logging.basicConfig") as basic:
            configure_logging(Settings(_env_file=None, log_level="warning"))
        assert basic.call_args.kwargs["level"] == "WARNING"

    def test_debug_flag(self):
        with patch("qwixx.config.settings.logging.basicConfig") as basic:
            configure_logging(Settings(_env_file=None, debug=True))
        assert basic.call_args.kwargs["level"] == logging.DEBUG


class TestSupabaseClient:
    def test_requires_credentials(self):
        client_module.get_supabase_client.cache_clear()
        unconfigured = Settings(_env_file=None, supabase_url=None, supabase_anon_key=None)
        with patch.object(client_module, "get_settings", return_value=unconfigured):
            with pytest.raises(RuntimeError, match="not configured"):
                client_module.get_supabase_client()

    def test_creates_client(self):
        client_module.get_supabase_client.cache_clear()
        configured = Settings(
            _env_file=None, supabase_url="https://example.supabase.co", supabase_anon_key="key"
        )
        with patch.object(client_module, "get_settings", return_value=configured), \
                patch.object(client_module, "create_client") as create:
            client_module.get_supabase_client()
        create.assert_called_once_with("https://example.supabase.co", "key")
        client_module.get_supabase_client.cache_clear()
