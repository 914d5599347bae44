"""Dependency definitions for the Pictoboard API server."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from pictoboard.llm.interface import RemoteSuggester
from pictoboard.suggest.cache import SuggestionCache
from pictoboard.suggest.circuit_breaker import CircuitBreaker
from pictoboard.suggest.rule_engine import RuleEngine
from pictoboard.vocabulary.repository import VocabularyRepository


def get_vocabulary_repository(request: Request) -> VocabularyRepository:
    """Return the vocabulary snapshot loaded at startup."""

    return request.app.state.vocabulary


def get_remote_suggester(request: Request) -> Optional[RemoteSuggester]:
    """Return the configured remote suggester, or None for rule-only mode."""

    return request.app.state.remote


def get_suggestion_cache(request: Request) -> SuggestionCache:
    """Return the cache shared by every suggestion request of this app."""

    return request.app.state.cache


def get_circuit_breaker(request: Request) -> CircuitBreaker:
    """Return the breaker shared by every suggestion request of this app."""

    return request.app.state.breaker


def get_rule_engine(request: Request) -> RuleEngine:
    return request.app.state.rule_engine
