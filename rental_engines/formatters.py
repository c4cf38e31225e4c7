"""
Module: rental_engines.formatters
Responsibility:
    Display strings for the administrator dashboard: CPF and phone masks,
    BRL currency, dates in the building's timezone, status labels and the
    small helpers used by the activity log.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rental_kernel.

Invariants enforced:
    - Locale is fixed to pt-BR / BRL and the timezone to America/Fortaleza;
      output never depends on the host locale.
    - Output strings are exact (tests compare them byte for byte).
    - Formatters are total: input that does not fit a mask is returned as
      it came in.
"""

from __future__ import annotations

import re
from datetime import timedelta

from rental_kernel.domain.clock import Clock, SystemClock
from rental_kernel.domain.dates import (
    DateLike,
    align_instants,
    to_business_time,
)
from rental_kernel.domain.values import Amount, round2
from rental_engines.validators import clean_digits

CURRENCY_SYMBOL = "R$"

DATE_FORMAT = "%d/%m/%Y"
DATETIME_FORMAT = "%d/%m/%Y %H:%M"
LOG_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"

STATUS_LABELS: dict[str, str] = {
    # Transactions
    "PAID": "Pago",
    "PENDING": "Pendente",
    "OVERDUE": "Atrasado",
    "CANCELLED": "Cancelado",
    # Leases
    "ACTIVE": "Ativo",
    "EXPIRED": "Vencido",
    # Units
    "AVAILABLE": "Disponível",
    "OCCUPIED": "Ocupada",
    "MAINTENANCE": "Manutenção",
    "RESERVED": "Reservada",
}

_SENSITIVE_KEYS = ("password", "token", "key", "secret")


# ============================================================================
# Documents and contacts
# ============================================================================


def format_cpf(cpf: str) -> str:
    """``"12345678909"`` -> ``"123.456.789-09"``."""
    digits = clean_digits(cpf)
    if len(digits) != 11:
        return digits
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def format_phone(phone: str) -> str:
    """Mask a 10-digit landline or 11-digit mobile number; else unchanged."""
    digits = clean_digits(phone)
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    return phone


def mask_cpf(value: str) -> str:
    """Progressive CPF mask applied while the user types."""
    digits = clean_digits(value)
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"{digits[:3]}.{digits[3:]}"
    if len(digits) <= 9:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:]}"
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:11]}"


def mask_phone(value: str) -> str:
    """Progressive phone mask applied while the user types."""
    digits = clean_digits(value)
    if len(digits) <= 2:
        return digits
    if len(digits) <= 7:
        return f"({digits[:2]}) {digits[2:]}"
    return f"({digits[:2]}) {digits[2:7]}-{digits[7:11]}"


# ============================================================================
# Numbers
# ============================================================================


def format_currency(amount: Amount) -> str:
    """
    Format a value as Brazilian reais.

    ``1234.5`` -> ``"R$ 1.234,50"``; ``-1`` -> ``"-R$ 1,00"``.
    Infinities render as ``"R$ ∞"`` and NaN as ``"R$ NaN"``.
    """
    value = round2(amount)
    if value.is_nan():
        return f"{CURRENCY_SYMBOL} NaN"
    sign = "-" if value < 0 else ""
    if value.is_infinite():
        return f"{sign}{CURRENCY_SYMBOL} ∞"
    # en-US grouping first, then swap the separators
    grouped = f"{abs(value):,.2f}"
    brl = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_SYMBOL} {brl}"


def format_compact_number(num: int | float) -> str:
    """``1500`` -> ``"1.5K"``, ``2300000`` -> ``"2.3M"``."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)


def truncate_text(text: str, max_length: int = 10) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


# ============================================================================
# Dates
# ============================================================================


def format_date(value: DateLike) -> str:
    """``dd/mm/yyyy`` in the business timezone."""
    return to_business_time(value).strftime(DATE_FORMAT)


def format_datetime(value: DateLike) -> str:
    """``dd/mm/yyyy HH:MM`` in the business timezone."""
    return to_business_time(value).strftime(DATETIME_FORMAT)


def format_time_ago(
    timestamp: DateLike,
    now: DateLike | None = None,
    clock: Clock | None = None,
) -> str:
    """
    Relative age of a log entry: ``"42s atrás"``, ``"5m atrás"``,
    ``"3h atrás"``, ``"2d atrás"``.  Entries a week or older fall back to
    the full ``dd/mm/yyyy HH:MM:SS`` timestamp.
    """
    if now is None:
        now = (clock or SystemClock()).now()
    then, current = align_instants(timestamp, now)
    seconds = (current - then) // timedelta(seconds=1)

    if seconds < 60:
        return f"{seconds}s atrás"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m atrás"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h atrás"
    days = hours // 24
    if days < 7:
        return f"{days}d atrás"
    return to_business_time(timestamp).strftime(LOG_DATETIME_FORMAT)


# ============================================================================
# Labels and log text
# ============================================================================


def status_label(status: str) -> str:
    """Portuguese badge label for a status value; unknown values pass through."""
    key = getattr(status, "value", status)
    return STATUS_LABELS.get(key, key)


def format_endpoint(method: str | None = None, endpoint: str | None = None) -> str:
    if not endpoint:
        return "—"
    if not method:
        return endpoint
    return f"{method.upper()} {endpoint}"


def mask_sensitive_data(text: str) -> str:
    """Replace password, token, key and secret values with ``"***"``."""
    for key in _SENSITIVE_KEYS:
        pattern = re.compile(rf'{key}["\s]*[:=]["\s]*[^"\s,}}]+', re.IGNORECASE)
        text = pattern.sub(f'{key}: "***"', text)
    return text


__all__ = [
    "CURRENCY_SYMBOL",
    "STATUS_LABELS",
    "format_compact_number",
    "format_cpf",
    "format_currency",
    "format_date",
    "format_datetime",
    "format_endpoint",
    "format_phone",
    "format_time_ago",
    "mask_cpf",
    "mask_phone",
    "mask_sensitive_data",
    "status_label",
    "truncate_text",
]
