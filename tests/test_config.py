"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

from pictoboard.config import get_settings


def test_defaults():
    settings = get_settings()

    assert settings.llm_base_url is None
    assert settings.llm_provider == "openai"
    assert settings.debounce_ms == 300
    assert settings.cache_size == 20
    assert settings.breaker_threshold == 3
    assert settings.breaker_cooldown_s == 60.0
    assert settings.remote_timeout is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PICTOBOARD_DEBOUNCE_MS", "150")
    monkeypatch.setenv("PICTOBOARD_REMOTE_TIMEOUT", "2.5")
    monkeypatch.setenv("PICTOBOARD_LOG_REQUESTS", "false")
    monkeypatch.setenv("PICTOBOARD_VOCABULARY_PATH", "/tmp/vocab.json")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.debounce_ms == 150
    assert settings.remote_timeout == 2.5
    assert settings.log_requests is False
    assert settings.vocabulary_path == Path("/tmp/vocab.json")


def test_invalid_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PICTOBOARD_CACHE_SIZE", "lots")
    get_settings.cache_clear()

    assert get_settings().cache_size == 20


def test_env_file_and_gemini_key_alias(tmp_path):
    (tmp_path / ".env").write_text(
        "# local overrides\nPICTOBOARD_LLM_MODEL=local-model\nGEMINI_API_KEY=gm-key\n",
        encoding="utf-8",
    )
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.llm_model == "local-model"
    assert settings.llm_api_key == "gm-key"


def test_explicit_api_key_wins_over_alias(monkeypatch):
    monkeypatch.setenv("PICTOBOARD_LLM_API_KEY", "explicit")
    monkeypatch.setenv("GEMINI_API_KEY", "alias")
    get_settings.cache_clear()

    assert get_settings().llm_api_key == "explicit"
