"""Bounded suggestion cache keyed by sentence fingerprint."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import List, Optional, Sequence

from pictoboard.models.word import Word

DEFAULT_CACHE_SIZE = 20

logger = logging.getLogger(__name__)


class SuggestionCache:
    """Insertion-ordered cache that evicts the oldest inserted entry.

    Reads never change an entry's position. Re-inserting an existing key
    replaces its words in place.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._entries: "OrderedDict[str, tuple[Word, ...]]" = OrderedDict()

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._entries

    def get(self, fingerprint: str) -> Optional[List[Word]]:
        words = self._entries.get(fingerprint)
        if words is None:
            return None
        return list(words)

    def put(self, fingerprint: str, words: Sequence[Word]) -> None:
        if not words:
            raise ValueError("refusing to cache an empty suggestion list")

        if fingerprint in self._entries:
            self._entries[fingerprint] = tuple(words)
            return

        if len(self._entries) >= self._max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached suggestions fingerprint=%s", evicted)
        self._entries[fingerprint] = tuple(words)

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["DEFAULT_CACHE_SIZE", "SuggestionCache"]
