"""
rental_engines.tracer -- Engine invocation tracer emitting RENTAL_ENGINE_TRACE.

Responsibility:
    Provide a lightweight decorator (``@traced_engine``) that wraps pure
    rule invocations with structured trace logging.  The trace captures
    engine_name, engine_version, input_fingerprint (deterministic SHA-256
    hash of selected inputs), and duration_ms.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Does NOT introduce I/O into engines; emits a log record only.

Invariants enforced:
    - Fingerprints are deterministic: ``_canonicalize`` produces stable
      string representations; dict keys are sorted; the hash is SHA-256
      truncated to 16 hex chars.
    - The decorator only reads arguments and emits a log record; it does
      not mutate inputs.

Failure modes:
    - Fingerprint fields that were not supplied (and have no default) are
      recorded as "null".

Usage:
    from rental_engines.tracer import traced_engine

    @traced_engine("charges", "1.0", fingerprint_fields=("original_amount",))
    def calculate_overdue_charges(original_amount, due_date, ...):
        ...
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import time
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from rental_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")


def _canonicalize(value: Any) -> str:
    """Produce a stable string representation of a value for fingerprinting."""
    if isinstance(value, Enum):
        value = value.value
    return _canonical(value)


@functools.singledispatch
def _canonical(value: Any) -> str:
    if value is None:
        return "null"
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _canonicalize(
            {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        )
    return str(value)


@_canonical.register(str)
def _(value: str) -> str:
    return str.__str__(value)


@_canonical.register(int)
@_canonical.register(float)
@_canonical.register(Decimal)
def _(value: Any) -> str:
    return str(value)


@_canonical.register(date)
def _(value: date) -> str:
    return value.isoformat()


@_canonical.register(dict)
def _(value: dict) -> str:
    items = sorted(value.items(), key=lambda kv: str(kv[0]))
    return "{" + ",".join(f"{_canonicalize(k)}:{_canonicalize(v)}" for k, v in items) + "}"


@_canonical.register(list)
@_canonical.register(tuple)
def _(value: Any) -> str:
    return "[" + ",".join(_canonicalize(v) for v in value) + "]"


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: dict[str, Any],
) -> str:
    """
    SHA-256 over ``field=value`` pairs for the selected fields, truncated
    to 16 hex characters.  Fields absent from ``arguments`` hash as "null".
    """
    canonical = "|".join(
        f"{name}={_canonicalize(arguments.get(name))}" for name in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def _bound_arguments(signature: inspect.Signature, args: tuple, kwargs: dict) -> dict[str, Any]:
    """Map a call onto parameter names, defaults included."""
    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        return dict(kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorator that emits RENTAL_ENGINE_TRACE after each engine call.

    Args:
        engine_name: Engine identifier (e.g., "charges").
        engine_version: Engine version (e.g., "1.0").
        fingerprint_fields: Parameter names hashed into
            ``input_fingerprint``.  Positional and keyword arguments are
            both resolved against the function signature.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fingerprint = ""
            if fingerprint_fields:
                fingerprint = compute_input_fingerprint(
                    fingerprint_fields, _bound_arguments(signature, args, kwargs),
                )

            started = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - started) * 1000

            _logger.info("RENTAL_ENGINE_TRACE", extra={
                "trace_type": "RENTAL_ENGINE_TRACE",
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": fingerprint,
                "duration_ms": round(elapsed_ms, 2),
                "function": func.__qualname__,
            })
            return result

        return wrapper

    return decorator
