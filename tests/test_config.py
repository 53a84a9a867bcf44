"""
Tests for settings parsing (config.py)
"""

from pmos.config import Settings, get_settings


def test_debug_parsing():
    assert Settings(_env_file=None, debug="yes").debug is True
    assert Settings(_env_file=None, debug="off").debug is False
    assert Settings(_env_file=None, debug="WARN").debug is True


def test_cors_origins_from_comma_separated_string():
    settings = Settings(_env_file=None, cors_origins="http://localhost:3000, https://pm.example.com")

    assert settings.cors_origins == ["http://localhost:3000", "https://pm.example.com"]


def test_cors_wildcard():
    assert Settings(_env_file=None, cors_origins="*").cors_origins == ["*"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
