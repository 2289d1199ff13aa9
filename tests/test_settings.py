"""Tests for environment-driven settings."""

import pytest

from utils.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "CHAT_MODEL", "ANALYSIS_MODEL", "IMAGE_MODEL", "LOG_LEVEL", "SEED_SAMPLE_SHOTS"):
        monkeypatch.delenv(name, raising=False)


def test_missing_key_raises():
    with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
        Settings.from_env(load_env_file=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", " sk-abc ")

    settings = Settings.from_env(load_env_file=False)

    assert settings.openai_api_key == "sk-abc"
    assert settings.chat_model == "gpt-5-mini"
    assert settings.analysis_model == "gpt-5"
    assert settings.image_model == "gpt-image-1"
    assert settings.log_level == "INFO"
    assert settings.seed_sample_shots is True


def test_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    monkeypatch.setenv("CHAT_MODEL", "gpt-4.1-mini")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SEED_SAMPLE_SHOTS", "no")

    settings = Settings.from_env(load_env_file=False)

    assert settings.chat_model == "gpt-4.1-mini"
    assert settings.log_level == "DEBUG"
    assert settings.seed_sample_shots is False
