# tests/unit/infrastructure/test_logger.py
from __future__ import annotations

import contextvars
import json
import logging
import sys
from typing import Any

import pytest

from ivcap_api.infrastructure.logging.logger import (
    _JsonFormatter,  # internal but importable
    configure_root_logging,
    get_request_id,
    new_request_id,
    set_request_context,
)


def _capture_log(record_msg: str, level: int = logging.INFO, **extra: Any) -> dict:
    """Format a record built by hand and return the parsed JSON payload."""
    logger = logging.getLogger("test.logger")
    record = logger.makeRecord(
        name=logger.name,
        level=level,
        fn="test_logger",
        lno=1,
        msg=record_msg,
        args=(),
        exc_info=None,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return json.loads(_JsonFormatter().format(record))


@pytest.fixture
def _root_restored() -> Any:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_root_logging_prefers_ivcap_log_level(
    monkeypatch: pytest.MonkeyPatch, _root_restored: logging.Logger
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("IVCAP_LOG_LEVEL", "debug")
    _root_restored.handlers.clear()

    configure_root_logging()
    assert _root_restored.level == logging.DEBUG
    assert len(_root_restored.handlers) == 1
    assert isinstance(_root_restored.handlers[0].formatter, _JsonFormatter)

    # Idempotent: no second handler.
    configure_root_logging("warning")
    assert len(_root_restored.handlers) == 1
    assert _root_restored.level == logging.WARNING


def test_configure_root_logging_falls_back_to_log_level(
    monkeypatch: pytest.MonkeyPatch, _root_restored: logging.Logger
) -> None:
    monkeypatch.delenv("IVCAP_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "error")
    _root_restored.handlers.clear()

    configure_root_logging()
    assert _root_restored.level == logging.ERROR


def test_json_formatter_basic_fields() -> None:
    payload = _capture_log("hello-world")
    assert payload["message"] == "hello-world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert "ts" in payload


def test_json_formatter_merges_structured_extra() -> None:
    payload = _capture_log(
        "ivcap.call", extra={"service": "order", "method": "list", "status": 200}
    )
    assert payload["service"] == "order"
    assert payload["method"] == "list"
    assert payload["status"] == 200


def test_json_formatter_request_id_sources(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REQUEST_ID", raising=False)

    assert _capture_log("with-record-id", request_id="abc-123")["request_id"] == "abc-123"

    monkeypatch.setenv("REQUEST_ID", "env-id")
    assert _capture_log("with-env-id")["request_id"] == "env-id"


def test_json_formatter_includes_exception_info() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        logger = logging.getLogger("test.logger.exc")
        record = logger.makeRecord(
            logger.name, logging.ERROR, "f", 1, "failure", (), sys.exc_info()
        )
    payload = json.loads(_JsonFormatter().format(record))
    assert payload["level"] == "ERROR"
    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"


def test_request_context_drives_new_request_id() -> None:
    def _in_fresh_context() -> tuple[str | None, str, str]:
        before = get_request_id()
        set_request_context(request_id="rid-1", trace_id="trace-1")
        return before, new_request_id(), _capture_log("x")["trace_id"]

    before, rid, trace = contextvars.copy_context().run(_in_fresh_context)
    assert before is None
    assert rid == "rid-1"
    assert trace == "trace-1"
    assert len(new_request_id()) == 32
