"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    vocabulary_path: Optional[Path] = Field(
        default=None,
        description="JSON vocabulary file (bundled default vocabulary when unset).",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )
    llm_base_url: Optional[str] = Field(
        default=None,
        description="Suggestion LLM base URL (OpenAI-compatible runtime or Ollama). Remote suggestions are disabled when unset.",
    )
    llm_provider: str = Field(
        default="openai",
        description="Suggestion LLM provider (openai or ollama).",
    )
    llm_model: str = Field(
        default="gemini-2.5-flash-lite",
        description="Model identifier passed to the suggestion LLM endpoint.",
    )
    llm_api_key: Optional[str] = Field(
        default=None,
        description="Bearer token sent to the suggestion LLM endpoint.",
    )
    llm_temperature: float = Field(
        default=0.3,
        description="Sampling temperature for suggestion requests.",
    )
    llm_max_tokens: int = Field(
        default=100,
        description="Maximum tokens to request from the suggestion LLM.",
    )
    llm_timeout: float = Field(
        default=10.0,
        description="HTTP timeout in seconds for a single LLM request.",
    )
    debounce_ms: int = Field(
        default=300,
        ge=0,
        description="Quiet period after a sentence change before calling the LLM.",
    )
    remote_timeout: Optional[float] = Field(
        default=None,
        description="Orchestrator-level timeout (seconds) wrapped around each remote call.",
    )
    cache_size: int = Field(
        default=20,
        ge=1,
        description="Maximum number of cached remote suggestion lists.",
    )
    breaker_threshold: int = Field(
        default=3,
        ge=1,
        description="Consecutive remote failures that open the circuit breaker.",
    )
    breaker_cooldown_s: float = Field(
        default=60.0,
        ge=0.0,
        description="Seconds the circuit breaker stays open.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


_CONVERTERS: dict[str, tuple[str, Callable[[str], object]]] = {
    "PICTOBOARD_VOCABULARY_PATH": ("vocabulary_path", Path),
    "PICTOBOARD_LOG_LEVEL": ("log_level", str),
    "PICTOBOARD_LOG_FORMAT": ("log_format", str),
    "PICTOBOARD_LOG_REQUESTS": ("log_requests", _coerce_bool),
    "PICTOBOARD_LLM_BASE_URL": ("llm_base_url", str),
    "PICTOBOARD_LLM_PROVIDER": ("llm_provider", str),
    "PICTOBOARD_LLM_MODEL": ("llm_model", str),
    "PICTOBOARD_LLM_API_KEY": ("llm_api_key", str),
    "PICTOBOARD_LLM_TEMPERATURE": ("llm_temperature", float),
    "PICTOBOARD_LLM_MAX_TOKENS": ("llm_max_tokens", int),
    "PICTOBOARD_LLM_TIMEOUT": ("llm_timeout", float),
    "PICTOBOARD_DEBOUNCE_MS": ("debounce_ms", int),
    "PICTOBOARD_REMOTE_TIMEOUT": ("remote_timeout", float),
    "PICTOBOARD_CACHE_SIZE": ("cache_size", int),
    "PICTOBOARD_BREAKER_THRESHOLD": ("breaker_threshold", int),
    "PICTOBOARD_BREAKER_COOLDOWN_S": ("breaker_cooldown_s", float),
}


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks).

    Values that fail to convert are ignored so a typo falls back to the default.
    """

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    for env_key, (field_name, convert) in _CONVERTERS.items():
        raw = _env(env_key)
        if not raw:
            continue
        try:
            payload[field_name] = convert(raw)
        except ValueError:
            pass
    # Hosted Gemini deployments usually export the key under this name.
    if "llm_api_key" not in payload and (gemini_key := _env("GEMINI_API_KEY")):
        payload["llm_api_key"] = gemini_key
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
