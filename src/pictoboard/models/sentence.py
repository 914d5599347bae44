"""Sentence data model and helpers."""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from pictoboard.models.word import Word

MAX_SENTENCE_LENGTH = 20


class Sentence(BaseModel):
    """Ordered words the user has tapped so far.

    Instances are immutable; every mutation helper returns a new sentence.
    """

    words: tuple[Word, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    def __len__(self) -> int:
        return len(self.words)

    @property
    def is_empty(self) -> bool:
        return not self.words

    @property
    def is_full(self) -> bool:
        return len(self.words) >= MAX_SENTENCE_LENGTH

    def add_word(self, word: Word) -> "Sentence":
        """Append ``word`` unless the sentence is already full."""

        if self.is_full:
            return self
        return Sentence(words=(*self.words, word))

    def remove_last_word(self) -> "Sentence":
        if not self.words:
            return self
        return Sentence(words=self.words[:-1])

    def clear(self) -> "Sentence":
        return Sentence()

    def to_spanish_text(self) -> str:
        return sentence_text(self.words)

    def fingerprint(self) -> str:
        return sentence_fingerprint(self.words)


def sentence_text(words: Sequence[Word]) -> str:
    """Render the sentence as space-joined Spanish text."""

    return " ".join(word.spanish for word in words)


def sentence_fingerprint(words: Sequence[Word]) -> str:
    """Return the cache key for a sentence: its word ids joined by underscores."""

    return "_".join(word.id for word in words)


__all__ = [
    "MAX_SENTENCE_LENGTH",
    "Sentence",
    "sentence_fingerprint",
    "sentence_text",
]
