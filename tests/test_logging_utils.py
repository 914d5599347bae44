"""Tests for logging utilities and sensitive data redaction."""

from __future__ import annotations

import json
import logging

import pytest

from pictoboard.logging_utils import configure_logging


def _record(msg, *args):
    return logging.LogRecord(
        name="pictoboard.test.redaction",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


@pytest.mark.parametrize("fmt", ["plain", "json"])
def test_sensitive_data_filter_redacts_tokens(fmt):
    secret = "top-secret-token"
    configure_logging("INFO", fmt, [secret])

    handler = logging.getLogger().handlers[0]
    record = _record("Authorization header Bearer %s", secret)

    for filter_ in handler.filters:
        filter_.filter(record)

    formatted = handler.format(record)
    assert secret not in formatted
    assert "[redacted]" in formatted


def test_query_string_api_keys_are_masked():
    configure_logging("INFO", "plain")

    handler = logging.getLogger().handlers[0]
    record = _record("POST https://llm.test/v1/chat?key=abc123&alt=json")
    for filter_ in handler.filters:
        filter_.filter(record)

    assert "abc123" not in handler.format(record)


def test_json_format_includes_request_id():
    configure_logging("DEBUG", "json")

    handler = logging.getLogger().handlers[0]
    record = _record("HTTP GET /health status=200")
    record.request_id = "req-1"

    payload = json.loads(handler.format(record))
    assert payload["message"] == "HTTP GET /health status=200"
    assert payload["request_id"] == "req-1"
    assert payload["level"] == "INFO"


def test_httpx_logger_kept_at_warning():
    configure_logging("DEBUG", "plain")

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
