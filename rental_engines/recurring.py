"""
Module: rental_engines.recurring
Responsibility:
    Build the next month's rent charge for a lease, and payment reference
    codes for receipts.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rental_kernel.

Invariants enforced:
    - The draft is due on ``due_day`` of the month after the clock's
      current month, in the building's timezone.  December rolls into
      January of the next year; a ``due_day`` past the end of the month
      rolls into the following month (day 31 of a 30-day month is the 1st).
    - ``metadata["recurringId"]`` is ``"rent_" + lease_id``.  It is the
      idempotency key a scheduler uses to avoid double-billing; this
      module performs no duplicate check itself.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from rental_kernel.domain.clock import Clock, SystemClock
from rental_kernel.domain.dates import to_business_time
from rental_kernel.domain.entities import (
    TransactionDraft,
    TransactionStatus,
    TransactionType,
)
from rental_kernel.domain.values import Amount, to_decimal
from rental_kernel.logging_config import get_logger
from rental_engines.tracer import traced_engine

logger = get_logger("engines.recurring")

DEFAULT_DUE_DAY = 5
SYSTEM_ACTOR = "system"
RECURRING_ID_PREFIX = "rent_"

MONTH_NAMES = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def next_due_date(today: date, due_day: int = DEFAULT_DUE_DAY) -> date:
    """``due_day`` of the month after ``today``'s month."""
    year, month = today.year, today.month + 1
    if month > 12:
        year, month = year + 1, 1
    return date(year, month, 1) + timedelta(days=due_day - 1)


def rent_description(due_date: date) -> str:
    """``"Aluguel novembro de 2026"``."""
    return f"Aluguel {MONTH_NAMES[due_date.month - 1]} de {due_date.year}"


@traced_engine("recurring", "1.0", fingerprint_fields=("lease_id", "monthly_rent", "due_day"))
def generate_next_rent_payment(
    lease_id: str,
    monthly_rent: Amount,
    due_day: int = DEFAULT_DUE_DAY,
    clock: Clock | None = None,
) -> TransactionDraft:
    """
    Draft next month's rent charge for a lease.

    Args:
        lease_id: Lease being billed.
        monthly_rent: Rent amount for the period.
        due_day: Day of month the rent falls due.
        clock: Time source; the current month is read from it.

    Returns:
        A PENDING RENT draft with no discount, fine or interest.
    """
    today = to_business_time((clock or SystemClock()).now()).date()
    due = next_due_date(today, due_day)
    amount: Decimal = to_decimal(monthly_rent)

    draft = TransactionDraft(
        lease_id=lease_id,
        type=TransactionType.RENT,
        description=rent_description(due),
        amount=amount,
        due_date=due,
        status=TransactionStatus.PENDING,
        created_by=SYSTEM_ACTOR,
        metadata={"recurringId": f"{RECURRING_ID_PREFIX}{lease_id}"},
    )
    logger.info("rent_draft_generated", extra={
        "lease_id": lease_id,
        "due_date": due.isoformat(),
        "amount": str(amount),
    })
    return draft


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_payment_reference(
    transaction_id: str,
    payment_method: str,
    clock: Clock | None = None,
) -> str:
    """
    Receipt reference ``"PIX-AB12-LXYZ123"``: first three letters of the
    method, first four characters of the transaction id, and the clock's
    epoch milliseconds in base 36.
    """
    method = getattr(payment_method, "value", payment_method)
    millis = int((clock or SystemClock()).now().timestamp() * 1000)
    return f"{method[:3].upper()}-{transaction_id[:4].upper()}-{_to_base36(millis)}"
