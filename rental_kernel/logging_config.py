"""
Structured JSON logging for the rental rules.

Responsibility:
    One JSON object per log line, with request-scoped identifiers (lease,
    transaction, unit, actor) attached automatically from ``LogContext``.
    Engines and services obtain loggers through ``get_logger`` so that
    every record lands under the ``rental_kernel`` namespace.

Invariants enforced:
    - Only the fields named in ``CONTEXT_FIELDS`` can be bound; a typo is a
      ``KeyError``, not a silently missing field.
    - ``Decimal`` values are logged as strings, so amounts keep their
      exact cents in the JSON output.
    - ``configure_logging`` installs at most one handler per process until
      ``reset_logging`` is called.

Usage:
    from rental_kernel.logging_config import LogContext, get_logger

    logger = get_logger("services.billing")
    with LogContext.bind(lease_id=lease.id):
        logger.info("rent_draft_generated", extra={"amount": "1500.00"})
"""

__all__ = [
    "CONTEXT_FIELDS",
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
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator

# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------

CONTEXT_FIELDS = (
    "correlation_id",
    "actor_id",
    "lease_id",
    "transaction_id",
    "unit_id",
    "trace_id",
)

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"rental_log_{name}", default=None) for name in CONTEXT_FIELDS
}


def _context_var(name: str) -> ContextVar[str | None]:
    try:
        return _CONTEXT_VARS[name]
    except KeyError:
        raise KeyError(f"Unknown log context field: {name}") from None


class LogContext:
    """Thread- and task-local identifiers merged into every log record."""

    @staticmethod
    def set(**fields: str | None) -> None:
        """Set context fields.  ``None`` values leave a field untouched."""
        for name, value in fields.items():
            var = _context_var(name)
            if value is not None:
                var.set(value)

    @staticmethod
    def get_all() -> dict[str, str]:
        """Bound fields only, in ``CONTEXT_FIELDS`` order."""
        bound = ((name, var.get()) for name, var in _CONTEXT_VARS.items())
        return {name: value for name, value in bound if value is not None}

    @staticmethod
    def clear() -> None:
        for var in _CONTEXT_VARS.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[type["LogContext"]]:
        """Bind fields for the duration of a ``with`` block, then restore."""
        tokens = [
            (var, var.set(value))
            for var, value in ((_context_var(n), v) for n, v in fields.items())
            if value is not None
        ]
        try:
            yield LogContext
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# JSON Formatter
# ---------------------------------------------------------------------------

_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    """``exc_*`` fields, including ``code`` and public attributes of kernel errors."""
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    for name, value in vars(exc).items():
        if not name.startswith("_"):
            fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """Render a record as one JSON line: core keys, context, then extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Logger factory and setup
# ---------------------------------------------------------------------------

_ROOT_NAME = "rental_kernel"

_setup_lock = threading.Lock()
_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """``get_logger("engines.charges")`` -> ``rental_kernel.engines.charges``."""
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach a JSON handler to the ``rental_kernel`` logger.

    Calling again before ``reset_logging`` is a no-op.
    """
    global _handler
    with _setup_lock:
        if _handler is not None:
            return
        _handler = handler or logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(StructuredFormatter())

        root = logging.getLogger(_ROOT_NAME)
        root.setLevel(level)
        root.propagate = False
        root.addHandler(_handler)


def reset_logging() -> None:
    """Remove the installed handler. FOR TESTING ONLY."""
    global _handler
    with _setup_lock:
        root = logging.getLogger(_ROOT_NAME)
        root.handlers.clear()
        root.setLevel(logging.WARNING)
        root.propagate = True
        _handler = None
