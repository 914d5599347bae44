"""Read-only vocabulary access backed by a JSON document."""

from __future__ import annotations

import json
import logging
import unicodedata
from importlib import resources
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from pydantic import ValidationError

from pictoboard.models.word import Word

DEFAULT_VOCABULARY_RESOURCE = "vocabulary.json"

logger = logging.getLogger(__name__)


class VocabularyError(RuntimeError):
    """Raised when a vocabulary document cannot be read or validated."""


class VocabularyRepository(Protocol):
    """Vocabulary provider consumed by the suggestion subsystem."""

    def get_all_words(self) -> List[Word]:
        ...

    def get_words_by_location(self, location_id: str) -> List[Word]:
        ...

    def get_word_by_id(self, word_id: str) -> Optional[Word]:
        ...

    def search_words(self, search_term: str) -> List[Word]:
        ...


def _fold(text: str) -> str:
    """Lower-case and strip accents so ``bano`` matches ``baño``."""

    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def parse_vocabulary(payload: object) -> List[Word]:
    """Validate a decoded vocabulary document (a list or ``{"words": [...]}``)."""

    entries = payload.get("words") if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        raise VocabularyError("Vocabulary document must be a list of words or an object with 'words'.")

    words: List[Word] = []
    seen: set[str] = set()
    for position, entry in enumerate(entries):
        try:
            word = Word.model_validate(entry)
        except ValidationError as exc:
            raise VocabularyError(f"Invalid vocabulary entry at index {position}: {exc}") from exc
        if word.id in seen:
            logger.warning("Duplicate vocabulary id %s ignored", word.id)
            continue
        seen.add(word.id)
        words.append(word)
    return words


def load_vocabulary(path: Optional[Path] = None) -> List[Word]:
    """Load words from ``path`` or from the bundled default vocabulary."""

    try:
        if path is None:
            raw = (
                resources.files("pictoboard.data")
                .joinpath(DEFAULT_VOCABULARY_RESOURCE)
                .read_text(encoding="utf-8")
            )
        else:
            raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise VocabularyError(f"Unable to read vocabulary from {path}: {exc}") from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise VocabularyError(f"Vocabulary file is not valid JSON: {exc}") from exc

    words = parse_vocabulary(payload)
    logger.debug("Loaded %d vocabulary words from %s", len(words), path or "bundled data")
    return words


class JsonVocabularyRepository:
    """In-memory vocabulary snapshot loaded once from JSON."""

    def __init__(self, words: Iterable[Word]) -> None:
        self._words: List[Word] = list(words)
        self._by_id: Dict[str, Word] = {word.id: word for word in self._words}

    @classmethod
    def from_path(cls, path: Optional[Path] = None) -> "JsonVocabularyRepository":
        return cls(load_vocabulary(path))

    def __len__(self) -> int:
        return len(self._words)

    def get_all_words(self) -> List[Word]:
        return list(self._words)

    def get_words_by_location(self, location_id: str) -> List[Word]:
        return [word for word in self._words if word.belongs_to_location(location_id)]

    def get_word_by_id(self, word_id: str) -> Optional[Word]:
        return self._by_id.get(word_id)

    def search_words(self, search_term: str) -> List[Word]:
        needle = _fold(search_term.strip())
        if not needle:
            return []
        return [word for word in self._words if needle in _fold(word.spanish)]


__all__ = [
    "JsonVocabularyRepository",
    "VocabularyError",
    "VocabularyRepository",
    "load_vocabulary",
    "parse_vocabulary",
]
