"""Consecutive-failure circuit breaker guarding remote suggestion calls."""

from __future__ import annotations

import logging
import time
from typing import Callable

from pictoboard import metrics

DEFAULT_FAILURE_THRESHOLD = 3
DEFAULT_COOLDOWN_SECONDS = 60.0

logger = logging.getLogger(__name__)


class CircuitBreaker:
    """Two-state (closed/open) breaker with lazy time-based recovery.

    The breaker opens once ``failure_threshold`` consecutive failures have
    been recorded and stays open for ``cooldown_seconds``. The first
    ``is_open()`` query after the cooldown resets the failure count and
    reports closed; there is no half-open probing state.
    """

    def __init__(
        self,
        *,
        failure_threshold: int = DEFAULT_FAILURE_THRESHOLD,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._threshold = max(1, int(failure_threshold))
        self._cooldown = max(0.0, float(cooldown_seconds))
        self._clock = clock
        self._consecutive_failures = 0
        self._open_until = 0.0

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    @property
    def open_until(self) -> float:
        return self._open_until

    def record_success(self) -> None:
        self._consecutive_failures = 0

    def record_failure(self) -> None:
        self._consecutive_failures += 1
        if self._consecutive_failures >= self._threshold:
            self._open_until = self._clock() + self._cooldown
            if self._consecutive_failures == self._threshold:
                metrics.BREAKER_OPENED.inc()
            logger.warning(
                "Remote suggestions circuit breaker open; using rule fallback for %.0fs",
                self._cooldown,
            )

    def is_open(self) -> bool:
        if self._consecutive_failures < self._threshold:
            return False
        if self._clock() > self._open_until:
            logger.info("Remote suggestions circuit breaker cooldown elapsed; closing")
            self._consecutive_failures = 0
            return False
        return True


__all__ = [
    "CircuitBreaker",
    "DEFAULT_COOLDOWN_SECONDS",
    "DEFAULT_FAILURE_THRESHOLD",
]
