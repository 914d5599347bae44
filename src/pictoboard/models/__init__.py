"""Domain data models for Pictoboard."""

from pictoboard.models.sentence import (
    MAX_SENTENCE_LENGTH,
    Sentence,
    sentence_fingerprint,
    sentence_text,
)
from pictoboard.models.suggestion import (
    PhraseTemplate,
    RuleTrigger,
    SuggestionRule,
    SuggestionState,
)
from pictoboard.models.word import (
    Word,
    WordCategory,
    WordFrequency,
    validate_category,
    validate_frequency,
)

__all__ = [
    "MAX_SENTENCE_LENGTH",
    "PhraseTemplate",
    "RuleTrigger",
    "Sentence",
    "SuggestionRule",
    "SuggestionState",
    "Word",
    "WordCategory",
    "WordFrequency",
    "sentence_fingerprint",
    "sentence_text",
    "validate_category",
    "validate_frequency",
]
