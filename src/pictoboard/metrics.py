"""Prometheus metrics definitions for Pictoboard."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "pictoboard_http_requests_total",
    "Total number of HTTP requests processed by the Pictoboard API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "pictoboard_http_request_duration_seconds",
    "Latency of HTTP requests processed by the Pictoboard API",
    ["method", "path"],
)

SUGGESTIONS_RESOLVED = Counter(
    "pictoboard_suggestions_resolved_total",
    "Number of committed suggestion results by source",
    ["source"],
)

REMOTE_FAILURES = Counter(
    "pictoboard_remote_failures_total",
    "Number of failed remote suggestion calls by kind",
    ["kind"],
)

REMOTE_LATENCY = Histogram(
    "pictoboard_remote_request_duration_seconds",
    "Latency of remote suggestion calls that were not superseded",
)

BREAKER_OPENED = Counter(
    "pictoboard_circuit_breaker_opened_total",
    "Number of times the remote suggestion circuit breaker opened",
)

__all__ = [
    "BREAKER_OPENED",
    "REMOTE_FAILURES",
    "REMOTE_LATENCY",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "SUGGESTIONS_RESOLVED",
]
