"""
Dates -- instant alignment for rule comparisons.

Rules compare due dates, lease boundaries and "now" as instants, the way a
timestamp subtraction would.  Callers mix ``date`` values (stored due dates)
with ``datetime`` values (clock readings), so everything is aligned onto a
common footing before comparison:

    - A ``date`` becomes midnight of that day.
    - When any aligned value is timezone-aware, dates and naive values are
      taken as wall time in the business timezone (America/Fortaleza).  A
      UTC clock reading at 01:00Z on the 5th is still the 4th locally, so
      a charge due on the 5th is not yet late.
    - When all values are naive they stay naive.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

BUSINESS_TIMEZONE = ZoneInfo("America/Fortaleza")

ONE_DAY = timedelta(days=1)

DateLike = date | datetime


def as_instant(value: DateLike, tz: tzinfo | None = None) -> datetime:
    """Convert a date or datetime to a datetime, attaching ``tz`` to naive values."""
    if isinstance(value, datetime):
        instant = value
    else:
        instant = datetime.combine(value, time.min)
    if instant.tzinfo is None and tz is not None:
        instant = instant.replace(tzinfo=tz)
    return instant


def align_instants(*values: DateLike) -> tuple[datetime, ...]:
    """Align dates and datetimes so they can be compared and subtracted."""
    any_aware = any(
        isinstance(v, datetime) and v.tzinfo is not None for v in values
    )
    tz = BUSINESS_TIMEZONE if any_aware else None
    return tuple(as_instant(v, tz) for v in values)


def whole_days_between(start: DateLike, end: DateLike) -> int:
    """Floor of ``(end - start)`` in days; partial days round down."""
    start_at, end_at = align_instants(start, end)
    return (end_at - start_at) // ONE_DAY


def to_business_time(value: DateLike) -> datetime:
    """
    Express a value in the business timezone.

    Aware datetimes are converted; naive values are assumed to already be
    business-local wall time.
    """
    instant = as_instant(value)
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(BUSINESS_TIMEZONE)
