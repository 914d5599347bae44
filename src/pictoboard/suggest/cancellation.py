"""Explicit cancellation tokens threaded through remote calls."""

from __future__ import annotations

import itertools

from .errors import SuggestionAborted

_GENERATIONS = itertools.count(1)


class CancellationToken:
    """One-shot flag marking a remote attempt as superseded."""

    __slots__ = ("generation", "_cancelled")

    def __init__(self) -> None:
        self.generation = next(_GENERATIONS)
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise SuggestionAborted(f"suggestion request {self.generation} was superseded")

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"CancellationToken(generation={self.generation}, {state})"


__all__ = ["CancellationToken"]
