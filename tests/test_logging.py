# ruff: noqa: INP001
"""Tests for log formatting and request-id propagation."""

from __future__ import annotations

import json
import logging

from supertodo.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    configure_logging,
    request_id_var,
)


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="supertodo.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_request_id_filter_uses_context_value() -> None:
    record = _record("todo.create")
    token = request_id_var.set("req-42")
    try:
        assert RequestIdFilter().filter(record) is True
    finally:
        request_id_var.reset(token)

    assert record.request_id == "req-42"

    bare = _record("todo.create")
    RequestIdFilter().filter(bare)
    assert bare.request_id == "-"


def test_json_formatter_emits_one_object_per_record() -> None:
    record = _record("todo.delete owner=alice")
    record.request_id = "req-7"

    payload = json.loads(JsonFormatter(use_utc=True).format(record))

    assert payload["message"] == "todo.delete owner=alice"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "supertodo.test"
    assert payload["request_id"] == "req-7"
    assert payload["timestamp"].endswith("+00:00")


def test_configure_logging_is_idempotent() -> None:
    configure_logging(level="DEBUG", log_format="json")
    configure_logging(level="INFO", log_format="text")

    handlers = [h for h in logging.getLogger().handlers if h.get_name() == "supertodo"]
    assert len(handlers) == 1
    assert not isinstance(handlers[0].formatter, JsonFormatter)
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("uvicorn.access").disabled is True
