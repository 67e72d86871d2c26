"""Unit tests for log redaction and JSON formatting."""

import json
import logging

from src.logging_config import (
    REDACTED,
    JsonFormatter,
    RedactionFilter,
    RequestIdFilter,
    request_id_var,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname=__file__, lineno=1,
        msg="User signed up", args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_sensitive_extra_fields_are_redacted():
    record = _record(password="Abcdefg12", token="eyJ...", user_id="42")

    assert RedactionFilter().filter(record) is True
    assert record.password == REDACTED
    assert record.token == REDACTED
    assert record.user_id == "42"


def test_json_formatter_includes_request_id_and_extras():
    token = request_id_var.set("req-1")
    try:
        record = _record(user_id="42")
        RequestIdFilter().filter(record)
        payload = json.loads(JsonFormatter().format(record))
    finally:
        request_id_var.reset(token)

    assert payload["message"] == "User signed up"
    assert payload["request_id"] == "req-1"
    assert payload["user_id"] == "42"
    assert payload["level"] == "INFO"
