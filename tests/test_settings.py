import pytest
from pydantic import ValidationError

from src.config.settings import Settings, get_settings


def test_settings_defaults(monkeypatch):
    get_settings.cache_clear()
    monkeypatch.setenv("OPENROUTER_API_KEY", "key")
    monkeypatch.delenv("OPENROUTER_MODEL", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    settings = get_settings()
    assert settings.openrouter_api_key == "key"
    assert settings.openrouter_model == "openai/gpt-4o-mini"
    assert settings.openrouter_api_url == "https://openrouter.ai/api/v1/chat/completions"
    assert settings.port == 5000
    get_settings.cache_clear()


def test_settings_overrides(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "key")
    monkeypatch.setenv("OPENROUTER_MODEL", "anthropic/some-model")
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.openrouter_model == "anthropic/some-model"
    assert settings.port == 8080


def test_settings_require_api_key(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("value", ["", "   "])
def test_settings_reject_blank_api_key(monkeypatch, value):
    monkeypatch.setenv("OPENROUTER_API_KEY", value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
