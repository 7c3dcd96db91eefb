"""
Structured JSON logging for workflow export.

Every record becomes one JSON line: a fixed envelope (ts, level, logger,
message), then the run-scoped ``LogContext`` fields, then whatever the call
passed as ``extra``. All loggers hang off the ``workflow_export`` namespace,
so one handler configured there sees the whole pipeline.

Event names are snake_case verbs in the past tense (``unit_skipped``,
``export_written``); values that vary go in ``extra``, never in the message.
"""

from __future__ import annotations

__all__ = [
    "LOGGER_NAMESPACE",
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, Iterator, TextIO

LOGGER_NAMESPACE = "workflow_export"

# Outermost first: a run, the unit being read, the definition, then the task
_CONTEXT_FIELDS = ("correlation_id", "source_name", "workflow_name", "stage_name", "task_id")

_context_vars: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"workflow_export_{name}", default=None) for name in _CONTEXT_FIELDS
}


def _context_var(name: str) -> ContextVar[str | None]:
    try:
        return _context_vars[name]
    except KeyError:
        raise TypeError(
            f"Unknown log context field {name!r}; expected one of {', '.join(_CONTEXT_FIELDS)}"
        ) from None


class LogContext:
    """
    Run-scoped fields merged into every log line.

    Backed by context variables: a ``bind`` block only affects code running
    inside it, and concurrent runs never see each other's fields. Unknown
    field names raise TypeError. None values are ignored.
    """

    FIELDS = _CONTEXT_FIELDS

    @staticmethod
    def set(**fields: Any) -> None:
        """Set fields until cleared or overwritten."""
        for var, value in _resolve(fields):
            var.set(value)

    @staticmethod
    def get_all() -> dict[str, str]:
        values = {name: var.get() for name, var in _context_vars.items()}
        return {name: value for name, value in values.items() if value is not None}

    @staticmethod
    def clear() -> None:
        for var in _context_vars.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: Any) -> Iterator[None]:
        """Set fields for the duration of a ``with`` block, then restore them."""
        tokens = [(var, var.set(value)) for var, value in _resolve(fields)]
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


def _resolve(fields: dict[str, Any]) -> list[tuple[ContextVar[str | None], str]]:
    # Validate every name before touching any variable
    pairs = [(_context_var(name), value) for name, value in fields.items()]
    return [(var, str(value)) for var, value in pairs if value is not None]


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------

# Attributes every LogRecord has; anything else on a record came from ``extra``
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    """Type, message, ``code`` and the public attributes of an exception."""
    fields: dict[str, Any] = {"exc_type": type(exc).__name__, "exc_message": str(exc)}
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    for key, value in getattr(exc, "__dict__", {}).items():
        if not key.startswith("_"):
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
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        # Paths and other non-JSON values are logged as their text
        return json.dumps(payload, default=str)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    """Logger for one component, e.g. ``get_logger("export.service")``."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: TextIO | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Send ``workflow_export`` logs to one JSON handler.

    The first call installs ``handler`` (or a stream handler on ``stream``,
    default stderr). Later calls only change the level.
    """
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)
    if not logger.handlers:
        installed = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
        installed.setFormatter(StructuredFormatter())
        logger.addHandler(installed)
        logger.propagate = False
    return logger


def reset_logging() -> None:
    """Remove the installed handler and restore defaults. Used by tests."""
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for installed in list(logger.handlers):
        logger.removeHandler(installed)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
