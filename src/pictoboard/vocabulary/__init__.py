"""Vocabulary providers."""

from pictoboard.vocabulary.repository import (
    JsonVocabularyRepository,
    VocabularyError,
    VocabularyRepository,
    load_vocabulary,
    parse_vocabulary,
)

__all__ = [
    "JsonVocabularyRepository",
    "VocabularyError",
    "VocabularyRepository",
    "load_vocabulary",
    "parse_vocabulary",
]
