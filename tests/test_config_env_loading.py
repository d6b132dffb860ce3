"""
Test environment file loading precedence and settings parsing.

Tests that .env.local is preferred over .env when both exist,
and that already-set environment variables take precedence.
"""

import os

import pytest
from dotenv import load_dotenv

from ackomer.core import config
from ackomer.core.config import (
    AzureOpenAISettings,
    AzureSpeechSettings,
    CORSSettings,
    Settings,
    _load_env_file_if_available,
)


@pytest.fixture
def fresh_settings():
    config.reset_settings()
    yield
    config.reset_settings()


def test_env_local_precedence(monkeypatch, tmp_path):
    """Test that .env.local is preferred over .env when both exist."""
    monkeypatch.delenv("MONGO_URI", raising=False)
    monkeypatch.delenv("MONGO_DB_NAME", raising=False)
    (tmp_path / ".env").write_text("MONGO_URI=mongodb://from-env-file:27017/test\nMONGO_DB_NAME=from_env\n")
    (tmp_path / ".env.local").write_text(
        "MONGO_URI=mongodb://from-env-local:27017/test\nMONGO_DB_NAME=from_env_local\n"
    )
    monkeypatch.chdir(tmp_path)

    _load_env_file_if_available()

    assert os.getenv("MONGO_URI") == "mongodb://from-env-local:27017/test"
    assert os.getenv("MONGO_DB_NAME") == "from_env_local"


def test_env_file_found_in_parent_directory(monkeypatch, tmp_path):
    monkeypatch.delenv("MONGO_DB_NAME", raising=False)
    (tmp_path / ".env").write_text("MONGO_DB_NAME=from_parent\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    _load_env_file_if_available()

    assert os.getenv("MONGO_DB_NAME") == "from_parent"


def test_already_set_env_vars_take_precedence(monkeypatch, tmp_path):
    """Test that already-set environment variables are not overridden."""
    monkeypatch.setenv("MONGO_URI", "mongodb://already-set:27017/test")
    env_file = tmp_path / ".env"
    env_file.write_text("MONGO_URI=mongodb://from-env-local:27017/test\n")

    load_dotenv(dotenv_path=str(env_file), override=False)

    assert os.getenv("MONGO_URI") == "mongodb://already-set:27017/test"


def test_no_env_files_no_crash(monkeypatch, tmp_path):
    """Missing env files are not an error."""
    monkeypatch.chdir(tmp_path)
    _load_env_file_if_available()


def test_settings_are_cached_until_reset(fresh_settings, monkeypatch):
    monkeypatch.setenv("APP_NAME", "First")
    first = config.get_settings()
    monkeypatch.setenv("APP_NAME", "Second")
    assert config.get_settings() is first
    config.reset_settings()
    assert config.get_settings().app_name == "Second"


def test_invalid_app_env_is_rejected(monkeypatch):
    monkeypatch.setenv("APP_ENV", "moon")
    with pytest.raises(ValueError):
        Settings()


def test_cors_origins_accept_comma_list_and_json(monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.example, http://b.example")
    assert CORSSettings().allowed_origins == ["http://a.example", "http://b.example"]
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", '["http://c.example"]')
    assert CORSSettings().allowed_origins == ["http://c.example"]


def test_external_service_configuration_flags():
    assert AzureOpenAISettings(endpoint="", api_key="").is_configured is False
    assert AzureOpenAISettings(endpoint="https://x.openai.azure.com/", api_key="k").is_configured is True
    assert AzureSpeechSettings(subscription_key="k", region="", endpoint="https://speech.example").is_configured
    with pytest.raises(ValueError):
        AzureOpenAISettings(endpoint="http://insecure")
