"""Remote (LLM-backed) suggestion backends."""

from pictoboard.llm.client import LLMRemoteSuggester, build_remote_suggester
from pictoboard.llm.interface import (
    MAX_REMOTE_SUGGESTIONS,
    MAX_VOCABULARY_ITEMS,
    MockRemoteSuggester,
    RemoteSuggester,
)

__all__ = [
    "LLMRemoteSuggester",
    "MAX_REMOTE_SUGGESTIONS",
    "MAX_VOCABULARY_ITEMS",
    "MockRemoteSuggester",
    "RemoteSuggester",
    "build_remote_suggester",
]
