"""
Pytest fixtures for the rental rules test suite.

Provides:
- Structured logging configured once per session
- Captured JSON log records for trace assertions
- A deterministic clock pinned in the building's timezone
"""

import json
import logging
from datetime import datetime
from io import StringIO

import pytest

from rental_kernel.domain.clock import DeterministicClock
from rental_kernel.domain.dates import BUSINESS_TIMEZONE
from rental_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# Wednesday 2024-03-06 10:00 in Fortaleza
FIXED_NOW = datetime(2024, 3, 6, 10, 0, tzinfo=BUSINESS_TIMEZONE)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture rental_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            calculate_overdue_charges(...)
            logs = captured_logs()
            assert any(r["message"] == "RENTAL_ENGINE_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("rental_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Clock fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for reproducible tests."""
    return DeterministicClock(FIXED_NOW)
