"""
Tests for environment-driven configuration.
"""

import pytest

from moodboard_service.config import DEFAULT_MODEL, Settings

ENV_NAMES = [
    "OPENAI_API_KEY",
    "OPENAI_API_KEY_ENV_VAR",
    "OPENAI_VISION_API_KEY",
    "UNSPLASH_ACCESS_KEY",
    "UNSPLASH_API_KEY",
    "MOODBOARD_MODEL",
    "MOODBOARD_HTTP_TIMEOUT",
    "MOODBOARD_HOST",
    "MOODBOARD_PORT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("moodboard_service.config.load_dotenv", lambda: False)
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_keys():
    settings = Settings.from_env()
    assert settings.text_service_key is None
    assert settings.vision_service_key is None
    assert settings.image_service_key is None
    assert settings.openai_model == DEFAULT_MODEL
    assert settings.port == 8000


def test_vision_key_follows_text_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY_ENV_VAR", "sk-alt")
    monkeypatch.setenv("UNSPLASH_API_KEY", "unsplash-alt")

    settings = Settings.from_env()
    assert settings.text_service_key == "sk-alt"
    assert settings.vision_service_key == "sk-alt"
    assert settings.image_service_key == "unsplash-alt"


def test_explicit_values(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-text")
    monkeypatch.setenv("OPENAI_VISION_API_KEY", "sk-vision")
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "unsplash")
    monkeypatch.setenv("MOODBOARD_PORT", "9000")
    monkeypatch.setenv("MOODBOARD_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.text_service_key == "sk-text"
    assert settings.vision_service_key == "sk-vision"
    assert settings.image_service_key == "unsplash"
    assert settings.port == 9000
    assert settings.http_timeout == 5.5
    assert settings.log_level == "debug"


def test_empty_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "")
    assert Settings.from_env().text_service_key is None
