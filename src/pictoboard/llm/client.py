"""LLM-backed remote suggester for next-word predictions."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import httpx

from pictoboard.config import get_settings
from pictoboard.models.sentence import sentence_text
from pictoboard.models.word import Word
from pictoboard.suggest.cancellation import CancellationToken
from pictoboard.suggest.errors import RemoteEmpty, RemoteMalformed, RemoteUnavailable

from .interface import MAX_REMOTE_SUGGESTIONS, MAX_VOCABULARY_ITEMS

LLM_TIMEOUT = 10.0

SUGGESTION_SYSTEM_PROMPT = (
    "Eres un asistente de comunicación aumentativa para hispanohablantes. "
    "El usuario está construyendo una oración con pictogramas y necesita sugerencias "
    "para la siguiente palabra. Responde SOLO con los IDs de las 5 palabras más probables "
    "que seguirían naturalmente en la oración, separados por comas. "
    "Por ejemplo: agua,comida,jugar,dormir,ir\n"
    "Solo responde con los IDs, sin explicaciones."
)

SUGGESTION_USER_PROMPT = (
    'Oración actual: "{sentence}"\n\n'
    "Vocabulario disponible (formato id:palabra): {vocabulary}"
)

logger = logging.getLogger(__name__)


def format_vocabulary(vocabulary: Sequence[Word], limit: int = MAX_VOCABULARY_ITEMS) -> str:
    """Render the compact ``id:spanish`` vocabulary listing sent to the model."""

    return ", ".join(f"{word.id}:{word.spanish}" for word in list(vocabulary)[:limit])


def parse_word_ids(
    text: str,
    vocabulary: Sequence[Word],
    limit: int = MAX_REMOTE_SUGGESTIONS,
) -> List[Word]:
    """Resolve a comma-separated id list against the vocabulary, in response order."""

    by_id: Dict[str, Word] = {}
    for word in vocabulary:
        by_id.setdefault(word.id.lower(), word)

    resolved: List[Word] = []
    for raw in text.split(","):
        word_id = raw.strip().lower()
        if not word_id:
            continue
        word = by_id.get(word_id)
        if word is None:
            continue
        resolved.append(word)
        if len(resolved) >= limit:
            break
    return resolved


class LLMRemoteSuggester:
    """Call an OpenAI/Ollama-compatible endpoint to predict the next word."""

    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        provider: str = "openai",
        api_key: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 100,
        timeout: float = LLM_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._provider = (provider or "openai").strip().lower()
        self._api_key = api_key
        self._temperature = max(0.0, float(temperature))
        self._max_tokens = max(1, int(max_tokens))
        self._timeout = timeout

    @property
    def provider(self) -> str:
        return self._provider

    async def get_suggestions(
        self,
        sentence_words: Sequence[Word],
        vocabulary: Sequence[Word],
        token: CancellationToken,
    ) -> List[Word]:
        if not sentence_words:
            return []

        token.raise_if_cancelled()
        prompt_payload = self._build_payload(sentence_words, vocabulary)
        try:
            content = await self._execute_chat(prompt_payload)
        except httpx.HTTPError as exc:
            raise RemoteUnavailable(f"Suggestion LLM request failed: {exc}") from exc
        except ValueError as exc:
            raise RemoteMalformed(f"Suggestion LLM returned an unreadable body: {exc}") from exc
        token.raise_if_cancelled()

        suggestions = parse_word_ids(content, vocabulary)
        if not suggestions:
            snippet = content.strip().replace("\n", " ")[:200]
            raise RemoteEmpty(f"Suggestion LLM returned no known word ids: payload={snippet}")
        logger.debug(
            "LLM suggested %s for sentence=%r",
            [word.id for word in suggestions],
            prompt_payload["sentence"],
        )
        return suggestions

    def _build_payload(
        self,
        sentence_words: Sequence[Word],
        vocabulary: Sequence[Word],
    ) -> dict[str, str]:
        sentence = sentence_text(sentence_words)
        user_prompt = SUGGESTION_USER_PROMPT.format(
            sentence=sentence,
            vocabulary=format_vocabulary(vocabulary),
        )
        return {
            "sentence": sentence,
            "system": SUGGESTION_SYSTEM_PROMPT,
            "user": user_prompt,
        }

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            return {}
        return {"Authorization": f"Bearer {self._api_key}"}

    async def _execute_chat(self, prompt_payload: dict[str, str]) -> str:
        system = prompt_payload["system"]
        user = prompt_payload["user"]
        if self._provider == "ollama":
            endpoint = self._base_url
            if not endpoint.endswith("/api/chat"):
                endpoint = f"{endpoint}/api/chat"
            payload = {
                "model": self._model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                "stream": False,
                "options": {
                    "temperature": self._temperature,
                    "num_predict": self._max_tokens,
                },
            }
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(endpoint, json=payload, headers=self._headers())
            response.raise_for_status()
            body = response.json()
            if not isinstance(body, dict):
                raise RemoteMalformed("Ollama suggestion response was not a JSON object.")
            message = body.get("message") or {}
            if not isinstance(message, dict):
                raise RemoteMalformed("Ollama suggestion response had an invalid message.")
            content = message.get("content")
            content = content.strip() if isinstance(content, str) else ""
            if not content:
                raise RemoteMalformed("Ollama suggestion response did not include content.")
            return content

        endpoint = self._base_url
        if not endpoint.endswith("/chat/completions"):
            endpoint = f"{endpoint}/chat/completions"
        payload = {
            "model": self._model,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(endpoint, json=payload, headers=self._headers())
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise RemoteMalformed("Suggestion LLM response was not a JSON object.")
        choices = body.get("choices") or []
        if not isinstance(choices, list) or not choices:
            raise RemoteMalformed("Suggestion LLM returned no choices.")
        first = choices[0]
        message = (first.get("message") if isinstance(first, dict) else None) or {}
        if not isinstance(message, dict):
            raise RemoteMalformed("Suggestion LLM returned an invalid message.")
        content = message.get("content")
        content = content.strip() if isinstance(content, str) else ""
        if not content:
            raise RemoteMalformed("Suggestion LLM returned an empty response.")
        return content


def build_remote_suggester() -> LLMRemoteSuggester | None:
    """Create the LLM suggester when a base URL is configured."""

    settings = get_settings()
    if not settings.llm_base_url:
        logger.debug("No suggestion LLM base URL configured; using rule-based suggestions only.")
        return None

    return LLMRemoteSuggester(
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        provider=settings.llm_provider,
        api_key=settings.llm_api_key,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout,
    )


__all__ = [
    "LLMRemoteSuggester",
    "build_remote_suggester",
    "format_vocabulary",
    "parse_word_ids",
]
