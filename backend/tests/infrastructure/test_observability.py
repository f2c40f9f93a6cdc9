"""Structured Logging — tests for the JSON formatter.

Tests cover:
    - base keys always present
    - known extras surfaced, unknown extras dropped
    - exception info rendered
"""

import json
import logging
import sys

from person_registry.infrastructure.observability import JSONFormatter


def _record(msg="hello", exc_info=None, **extra):
    record = logging.LogRecord(
        "person_registry.test", logging.WARNING, __file__, 1, msg, None, exc_info,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields_present():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "person_registry.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload


def test_known_extras_surfaced():
    payload = json.loads(JSONFormatter().format(
        _record(record_id="p1", attempt=2, delay_seconds=4.0, unrelated="x"),
    ))
    assert payload["record_id"] == "p1"
    assert payload["attempt"] == 2
    assert payload["delay_seconds"] == 4.0
    assert "unrelated" not in payload


def test_exception_rendered():
    try:
        raise ValueError("boom")
    except ValueError:
        payload = json.loads(JSONFormatter().format(
            _record(exc_info=sys.exc_info()),
        ))
    assert "ValueError: boom" in payload["exception"]
