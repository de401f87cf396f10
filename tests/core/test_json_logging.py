from __future__ import annotations

import json
import logging
import sys

from ai_functions.core.logging import JsonFormatter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="ai_functions.runtime",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Function invocation completed",
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_includes_extra_fields() -> None:
    payload = json.loads(
        JsonFormatter().format(_record(function="ai-handler", status_code=200, duration_ms=1.5))
    )

    assert payload["level"] == "INFO"
    assert payload["logger"] == "ai_functions.runtime"
    assert payload["message"] == "Function invocation completed"
    assert payload["function"] == "ai-handler"
    assert payload["status_code"] == 200
    assert payload["duration_ms"] == 1.5


def test_missing_extra_fields_are_null() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert payload["request_id"] is None
    assert payload["function"] is None
    assert payload["method"] is None
    assert "exception" not in payload


def test_http_method_alias_and_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record(http_method="POST")
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["method"] == "POST"
    assert "RuntimeError: boom" in payload["exception"]
