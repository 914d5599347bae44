"""Next-word suggestion subsystem."""

from pictoboard.suggest.cache import SuggestionCache
from pictoboard.suggest.cancellation import CancellationToken
from pictoboard.suggest.circuit_breaker import CircuitBreaker
from pictoboard.suggest.errors import (
    RemoteEmpty,
    RemoteMalformed,
    RemoteUnavailable,
    SuggestionAborted,
    SuggestionError,
)
from pictoboard.suggest.orchestrator import (
    OrchestratorState,
    SuggestionOrchestrator,
    SuggestionSource,
    build_orchestrator,
)
from pictoboard.suggest.rule_engine import RuleEngine

__all__ = [
    "CancellationToken",
    "CircuitBreaker",
    "OrchestratorState",
    "RemoteEmpty",
    "RemoteMalformed",
    "RemoteUnavailable",
    "RuleEngine",
    "SuggestionAborted",
    "SuggestionCache",
    "SuggestionError",
    "SuggestionOrchestrator",
    "SuggestionSource",
    "build_orchestrator",
]
