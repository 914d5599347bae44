"""Suggestion rule and result data models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pictoboard.models.word import Word, WordCategory


class RuleTrigger(BaseModel):
    """Condition that activates a suggestion rule.

    A trigger names either a specific word id or a word category, never both.
    """

    word_id: Optional[str] = Field(default=None)
    category: Optional[WordCategory] = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _exactly_one_condition(self) -> "RuleTrigger":
        if (self.word_id is None) == (self.category is None):
            raise ValueError("trigger must set exactly one of word_id or category")
        return self


class SuggestionRule(BaseModel):
    """Static mapping from a trigger to an ordered list of suggested word ids."""

    trigger: RuleTrigger
    suggested_word_ids: tuple[str, ...]

    model_config = ConfigDict(frozen=True)


class PhraseTemplate(BaseModel):
    """Common sentence frame with a slot the user is likely to fill next."""

    id: str
    label: str
    prefix_word_ids: tuple[str, ...]
    slot_hint: str
    suggested_fill_ids: tuple[str, ...]

    model_config = ConfigDict(frozen=True)


class SuggestionState(BaseModel):
    """Consumer-facing view of the suggestion subsystem."""

    suggestions: list[Word] = Field(default_factory=list)
    is_loading: bool = Field(default=False)

    model_config = ConfigDict(frozen=True)


__all__ = [
    "PhraseTemplate",
    "RuleTrigger",
    "SuggestionRule",
    "SuggestionState",
]
