"""Remote suggester abstraction layer."""

from __future__ import annotations

from typing import List, Protocol, Sequence

from pictoboard.models.word import Word
from pictoboard.suggest.cancellation import CancellationToken

MAX_VOCABULARY_ITEMS = 150
MAX_REMOTE_SUGGESTIONS = 6


class RemoteSuggester(Protocol):
    """Protocol for AI-backed next-word suggestion backends."""

    async def get_suggestions(
        self,
        sentence_words: Sequence[Word],
        vocabulary: Sequence[Word],
        token: CancellationToken,
    ) -> List[Word]:
        """Return candidate next words, or raise a ``SuggestionError``."""


class MockRemoteSuggester:
    """Deterministic stub returning a fixed id list for development."""

    def __init__(self, word_ids: Sequence[str] = ("agua", "comida", "jugar", "dormir", "ir")) -> None:
        self._word_ids = tuple(word_ids)

    async def get_suggestions(
        self,
        sentence_words: Sequence[Word],
        vocabulary: Sequence[Word],
        token: CancellationToken,
    ) -> List[Word]:
        token.raise_if_cancelled()
        used = {word.id for word in sentence_words}
        by_id = {word.id: word for word in vocabulary}
        picked = [by_id[word_id] for word_id in self._word_ids if word_id in by_id and word_id not in used]
        return picked[:MAX_REMOTE_SUGGESTIONS]


__all__ = [
    "MAX_REMOTE_SUGGESTIONS",
    "MAX_VOCABULARY_ITEMS",
    "MockRemoteSuggester",
    "RemoteSuggester",
]
