"""Vocabulary word data models."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class WordCategory(str, Enum):
    """Grammatical/semantic category of a pictogram."""

    VERBOS = "verbos"
    SUSTANTIVOS = "sustantivos"
    ADJETIVOS = "adjetivos"
    PRONOMBRES = "pronombres"
    PREGUNTAS = "preguntas"
    SOCIALES = "sociales"
    NUMEROS = "numeros"
    COLORES = "colores"
    TIEMPO = "tiempo"
    EMOCIONES = "emociones"


class WordFrequency(str, Enum):
    """Usage frequency used to prioritise vocabulary display."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def validate_category(value: str | WordCategory) -> WordCategory:
    """Coerce external data into a category, defaulting to nouns."""

    if isinstance(value, WordCategory):
        return value
    normalized = (value or "").strip().lower()
    try:
        return WordCategory(normalized)
    except ValueError:
        logger.warning("Invalid category %r, defaulting to %s", value, WordCategory.SUSTANTIVOS.value)
        return WordCategory.SUSTANTIVOS


def validate_frequency(value: str | WordFrequency) -> WordFrequency:
    """Coerce external data into a frequency, defaulting to medium."""

    if isinstance(value, WordFrequency):
        return value
    try:
        return WordFrequency((value or "").strip().lower())
    except ValueError:
        return WordFrequency.MEDIUM


class Word(BaseModel):
    """Vocabulary word shown as a pictogram on the board."""

    id: str = Field(min_length=1)
    spanish: str
    english: str = Field(default="")
    category: WordCategory = Field(default=WordCategory.SUSTANTIVOS)
    frequency: WordFrequency = Field(default=WordFrequency.MEDIUM)
    symbol_url: Optional[str] = Field(default=None, alias="symbolUrl")
    audio_url: Optional[str] = Field(default=None, alias="audioUrl")
    locations: list[str] = Field(default_factory=lambda: ["all"])

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: object) -> WordCategory:
        return validate_category(value if isinstance(value, (str, WordCategory)) else "")

    @field_validator("frequency", mode="before")
    @classmethod
    def _coerce_frequency(cls, value: object) -> WordFrequency:
        return validate_frequency(value if isinstance(value, (str, WordFrequency)) else "")

    def belongs_to_location(self, location_id: str) -> bool:
        """Return True when the word is available at ``location_id``."""

        return "all" in self.locations or location_id in self.locations


__all__ = [
    "Word",
    "WordCategory",
    "WordFrequency",
    "validate_category",
    "validate_frequency",
]
