"""
Structured JSON logging for the transport ledger.

Every record is one JSON line: ``ts``, ``level``, ``logger``, ``message``
(an event name such as ``transport_report_generated``), the bound
context fields, any ``extra={...}`` payload, and for failures the
exception type, message, ``code`` and structured fields.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------

# correlation_id: one CLI run / caller request
# report_id:      filename stem of the report being generated or rendered
# actor_id:       who asked for the report
_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"log_{name}", default=None)
    for name in ("correlation_id", "report_id", "actor_id")
}


class LogContext:
    """Context-local fields added to every log line (thread and task safe)."""

    @staticmethod
    def _var(name: str) -> ContextVar[str | None]:
        try:
            return _CONTEXT_VARS[name]
        except KeyError:
            raise TypeError(f"unknown log context field: {name!r}") from None

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Set context fields. ``None`` values are ignored."""
        for name, value in fields.items():
            var = cls._var(name)
            if value is not None:
                var.set(value)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        """Return all non-None context fields as a dict."""
        return {
            name: value
            for name, var in _CONTEXT_VARS.items()
            if (value := var.get()) is not None
        }

    @classmethod
    def clear(cls) -> None:
        for var in _CONTEXT_VARS.values():
            var.set(None)

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[type["LogContext"]]:
        """Set fields for the duration of a ``with`` block, then restore."""
        tokens = [
            (cls._var(name), cls._var(name).set(value))
            for name, value in fields.items()
            if value is not None
        ]
        try:
            yield cls
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# JSON Formatter
# ---------------------------------------------------------------------------

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


class _JSONEncoder(json.JSONEncoder):
    """ISO dates; other non-JSON values (UUID, Decimal, enums) as str."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (date, datetime)):
            return obj.isoformat()
        return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    # Public attributes of TransportLedgerError subclasses (option, section...)
    for key, value in vars(exc).items():
        if not key.startswith("_") and key != "code":
            fields[f"exc_{key}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }

        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, cls=_JSONEncoder)


# ---------------------------------------------------------------------------
# Logger factory
# ---------------------------------------------------------------------------

_LOGGER_PREFIX = "transport_kernel"


def get_logger(name: str) -> logging.Logger:
    """``get_logger("reports.service")`` -> ``transport_kernel.reports.service``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach one JSON handler to the ``transport_kernel`` logger.

    Idempotent: only the first call in a process takes effect.  Records do
    not propagate to the root logger once configured.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False
    root_logger.addHandler(handler)


def reset_logging() -> None:
    """Undo ``configure_logging``. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
