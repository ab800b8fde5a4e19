"""Tests for the structured logging system (transport_kernel/logging_config.py)."""

import json
import logging
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from transport_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "transport_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("generated", extra={"entry_count": 3, "status": "ok"})

        record = _parse_log(stream)
        assert record["entry_count"] == 3
        assert record["status"] == "ok"

    def test_decimal_and_uuid_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        uid = uuid4()
        get_logger("test").info("amounts", extra={"total": Decimal("2300.50"), "ref": uid})

        record = _parse_log(stream)
        assert record["total"] == "2300.50"
        assert record["ref"] == str(uid)

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        LogContext.set(correlation_id="abc-123", report_id="rpt-1")
        get_logger("test").info("test_msg")

        record = _parse_log(stream)
        assert record["correlation_id"] == "abc-123"
        assert record["report_id"] == "rpt-1"

    def test_ledger_exception_code_extracted(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        from transport_kernel.exceptions import UnknownSkinError

        try:
            raise UnknownSkinError("night", ("classic", "ledger"))
        except UnknownSkinError:
            get_logger("test").error("skin_error", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_code"] == "UNKNOWN_SKIN"
        assert record["exc_type"] == "UnknownSkinError"
        assert record["exc_skin_name"] == "night"
        assert "traceback" in record

    def test_valid_json_every_line(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("first")
        logger.warning("second", extra={"k": "v"})
        logger.debug("third")  # below the default INFO level

        logs = _parse_all_logs(stream)
        assert len(logs) == 2
        for record in logs:
            assert {"ts", "level", "logger", "message"} <= set(record)


class TestConfigureLogging:
    def test_idempotent(self):
        first, _ = _make_handler()
        second, _ = _make_handler()
        configure_logging(handler=first)
        configure_logging(handler=second)
        assert logging.getLogger("transport_kernel").handlers == [first]


# ---------------------------------------------------------------------------
# LogContext tests
# ---------------------------------------------------------------------------


class TestLogContext:
    """Tests for context propagation."""

    def test_set_and_get(self):
        LogContext.set(correlation_id="x", actor_id="clerk")
        assert LogContext.get_all() == {"correlation_id": "x", "actor_id": "clerk"}

    def test_clear(self):
        LogContext.set(correlation_id="x")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_bind_context_manager(self):
        LogContext.set(report_id="outer")
        with LogContext.bind(report_id="inner"):
            assert LogContext.get_all()["report_id"] == "inner"
        assert LogContext.get_all()["report_id"] == "outer"

    def test_bind_restores_none(self):
        assert "correlation_id" not in LogContext.get_all()
        with LogContext.bind(correlation_id="temp"):
            assert LogContext.get_all()["correlation_id"] == "temp"
        assert "correlation_id" not in LogContext.get_all()

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError, match="unknown log context field"):
            LogContext.set(event_id="x")

    def test_none_values_ignored(self):
        LogContext.set(actor_id="clerk")
        LogContext.set(actor_id=None)
        assert LogContext.get_all() == {"actor_id": "clerk"}
