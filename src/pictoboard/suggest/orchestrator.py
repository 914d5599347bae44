"""Suggestion orchestrator reconciling cache, breaker, rules, and the remote suggester."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from time import perf_counter
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from pictoboard import metrics
from pictoboard.models.sentence import sentence_fingerprint
from pictoboard.models.suggestion import SuggestionState
from pictoboard.models.word import Word

from .cache import SuggestionCache
from .cancellation import CancellationToken
from .circuit_breaker import CircuitBreaker
from .errors import RemoteEmpty, RemoteUnavailable, SuggestionAborted, SuggestionError
from .rule_engine import RuleEngine

if TYPE_CHECKING:  # pragma: no cover - type-only imports
    from pictoboard.config import Settings
    from pictoboard.llm.interface import RemoteSuggester

DEFAULT_DEBOUNCE_SECONDS = 0.3

logger = logging.getLogger(__name__)


class OrchestratorState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    AWAITING_REMOTE = "awaiting_remote"
    RESOLVED = "resolved"


class SuggestionSource(str, Enum):
    """Where the last committed result came from."""

    NONE = "none"
    RULES = "rules"
    BREAKER = "breaker"
    CACHE = "cache"
    REMOTE = "remote"
    FALLBACK = "fallback"


class SuggestionOrchestrator:
    """Drive next-word suggestions for one sentence editor.

    Call :meth:`update` on every sentence change from the event loop that owns
    the editor. Each update cancels whatever is pending, then either resolves
    synchronously (empty sentence, no remote, open breaker, cache hit) or
    schedules a debounced remote call guarded by a fresh
    :class:`CancellationToken`. A remote result is committed only while its
    token is still the current one, so a superseded call can never overwrite
    newer state.

    The public value is :attr:`suggestions`: the last committed remote result
    when it is non-empty, otherwise the rule engine's output for the current
    sentence.

    ``cache_scope`` prefixes cache keys, so orchestrators that evaluate
    against different vocabularies (one per location) can share a cache
    without serving each other's words.
    """

    def __init__(
        self,
        *,
        rule_engine: Optional[RuleEngine] = None,
        remote: Optional["RemoteSuggester"] = None,
        cache: Optional[SuggestionCache] = None,
        breaker: Optional[CircuitBreaker] = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        timeout_seconds: Optional[float] = None,
        cache_scope: Optional[str] = None,
        on_change: Optional[Callable[[SuggestionState], None]] = None,
    ) -> None:
        self._rule_engine = rule_engine or RuleEngine()
        self._remote = remote
        self._cache = cache if cache is not None else SuggestionCache()
        self._breaker = breaker if breaker is not None else CircuitBreaker()
        self._debounce = max(0.0, float(debounce_seconds))
        self._timeout = timeout_seconds
        self._cache_scope = cache_scope
        self._on_change = on_change

        self._sentence: Tuple[Word, ...] = ()
        self._vocabulary: Tuple[Word, ...] = ()
        self._remote_result: List[Word] = []
        self._is_loading = False
        self._state = OrchestratorState.IDLE
        self._source = SuggestionSource.NONE
        self._last_length = 0
        self._token: Optional[CancellationToken] = None
        self._task: Optional[asyncio.Task] = None

    # ───────── public view ───────────────────────────────────────────────

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def source(self) -> SuggestionSource:
        return self._source

    @property
    def cache(self) -> SuggestionCache:
        return self._cache

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    @property
    def remote_result(self) -> List[Word]:
        return list(self._remote_result)

    @property
    def suggestions(self) -> List[Word]:
        if self._remote_result:
            return list(self._remote_result)
        return self._rule_engine.suggest(self._sentence, self._vocabulary)

    def snapshot(self) -> SuggestionState:
        return SuggestionState(suggestions=self.suggestions, is_loading=self._is_loading)

    # ───────── sentence changes ──────────────────────────────────────────

    def update(self, sentence_words: Sequence[Word], vocabulary: Sequence[Word]) -> None:
        """Handle a sentence change.

        The debounced remote call is scheduled on the running event loop.
        Outside a loop the update resolves to rule suggestions instead.
        """

        try:
            loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        self._cancel_pending()
        self._sentence = tuple(sentence_words)
        self._vocabulary = tuple(vocabulary)
        self._remote_result = []

        length_changed = len(self._sentence) != self._last_length
        self._last_length = len(self._sentence)

        if not self._sentence or self._remote is None:
            self._commit([], SuggestionSource.RULES)
            return

        if self._breaker.is_open():
            logger.debug("Circuit breaker open; skipping remote suggestions")
            self._commit([], SuggestionSource.BREAKER)
            return

        fingerprint = sentence_fingerprint(self._sentence)
        if self._cache_scope:
            fingerprint = f"{self._cache_scope}:{fingerprint}"
        cached = self._cache.get(fingerprint)
        if cached is not None:
            logger.debug("Suggestion cache hit fingerprint=%s", fingerprint)
            self._commit(cached, SuggestionSource.CACHE)
            return

        if loop is None:
            logger.warning("No running event loop; serving rule suggestions without the remote")
            self._commit([], SuggestionSource.RULES)
            return

        if length_changed:
            self._is_loading = True
        token = CancellationToken()
        self._token = token
        self._state = OrchestratorState.DEBOUNCING
        self._task = loop.create_task(
            self._debounce_and_fetch(token, self._sentence, self._vocabulary, fingerprint)
        )
        self._notify()

    async def resolve(
        self,
        sentence_words: Sequence[Word],
        vocabulary: Sequence[Word],
    ) -> SuggestionState:
        """Apply a sentence change and wait until it settles."""

        self.update(sentence_words, vocabulary)
        await self.wait_idle()
        return self.snapshot()

    async def wait_idle(self) -> None:
        """Wait until no debounce or remote call is pending."""

        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    def close(self) -> None:
        """Cancel pending work; committed state is left untouched."""

        self._cancel_pending()
        if self._state in (OrchestratorState.DEBOUNCING, OrchestratorState.AWAITING_REMOTE):
            self._is_loading = False
            self._state = OrchestratorState.IDLE

    # ───────── internals ─────────────────────────────────────────────────

    def _cancel_pending(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None
        if self._task is not None:
            if not self._task.done():
                self._task.cancel()
            self._task = None

    def _is_current(self, token: CancellationToken) -> bool:
        return token is self._token and not token.cancelled

    async def _debounce_and_fetch(
        self,
        token: CancellationToken,
        sentence: Tuple[Word, ...],
        vocabulary: Tuple[Word, ...],
        fingerprint: str,
    ) -> None:
        if self._debounce > 0:
            await asyncio.sleep(self._debounce)
        if not self._is_current(token):
            return

        self._state = OrchestratorState.AWAITING_REMOTE
        assert self._remote is not None
        started = perf_counter()
        try:
            call = self._remote.get_suggestions(sentence, vocabulary, token)
            if self._timeout is not None:
                result = await asyncio.wait_for(call, self._timeout)
            else:
                result = await call
        except SuggestionAborted:
            logger.debug("Remote suggestion call %s aborted", token.generation)
            return
        except asyncio.TimeoutError:
            self._record_failure(
                token,
                RemoteUnavailable(f"remote suggestions timed out after {self._timeout}s"),
            )
            return
        except SuggestionError as exc:
            self._record_failure(token, exc)
            return
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self._record_failure(token, RemoteUnavailable(f"{type(exc).__name__}: {exc}"))
            return

        if not self._is_current(token):
            logger.debug("Discarding superseded remote result for call %s", token.generation)
            return

        metrics.REMOTE_LATENCY.observe(perf_counter() - started)
        words = list(result or [])
        if not words:
            self._record_failure(token, RemoteEmpty("remote suggester returned no words"))
            return

        self._breaker.record_success()
        self._cache.put(fingerprint, words)
        self._commit(words, SuggestionSource.REMOTE)

    def _record_failure(self, token: CancellationToken, exc: SuggestionError) -> None:
        if not self._is_current(token):
            return
        self._breaker.record_failure()
        metrics.REMOTE_FAILURES.labels(kind=exc.kind).inc()
        logger.warning("Remote suggestions failed (%s); using rule fallback: %s", exc.kind, exc)
        self._commit([], SuggestionSource.FALLBACK)

    def _commit(self, remote_result: Sequence[Word], source: SuggestionSource) -> None:
        self._remote_result = list(remote_result)
        self._is_loading = False
        self._state = OrchestratorState.RESOLVED
        self._source = source
        self._token = None
        self._task = None
        metrics.SUGGESTIONS_RESOLVED.labels(source=source.value).inc()
        self._notify()

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self.snapshot())
        except Exception:  # pragma: no cover - listener errors must not break suggestions
            logger.exception("Suggestion change listener failed")


def build_orchestrator(
    settings: Optional["Settings"] = None,
    *,
    remote: Optional["RemoteSuggester"] = None,
    cache: Optional[SuggestionCache] = None,
    breaker: Optional[CircuitBreaker] = None,
    on_change: Optional[Callable[[SuggestionState], None]] = None,
) -> SuggestionOrchestrator:
    """Create an orchestrator configured from application settings."""

    if settings is None:
        from pictoboard.config import get_settings

        settings = get_settings()

    return SuggestionOrchestrator(
        remote=remote,
        cache=cache if cache is not None else SuggestionCache(settings.cache_size),
        breaker=breaker
        if breaker is not None
        else CircuitBreaker(
            failure_threshold=settings.breaker_threshold,
            cooldown_seconds=settings.breaker_cooldown_s,
        ),
        debounce_seconds=settings.debounce_ms / 1000.0,
        timeout_seconds=settings.remote_timeout,
        on_change=on_change,
    )


__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "OrchestratorState",
    "SuggestionOrchestrator",
    "SuggestionSource",
    "build_orchestrator",
]
