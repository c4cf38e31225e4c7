"""
Module: rental_engines.charges
Responsibility:
    Compute transaction totals and the fine and interest owed on late
    transactions.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rental_kernel.

Invariants enforced:
    - total = amount - discount + fine + interest, rounded to cents.
    - Totals are NOT clamped at zero; a discount larger than the charge
      yields a negative total.
    - The fine is a flat one-time percentage; interest is simple daily
      interest on the original amount (never compounded).
    - ``days_past_due`` is the floor of the instant difference in days, so
      a partial day does not count.  Due today (or not yet due) accrues
      nothing.
    - Half-up rounding at the cent for every figure.

Failure modes:
    - ValueError when a monetary input is not numeric.
    - Inputs are not checked for sign; callers sanitize upstream.

Usage:
    from datetime import date
    from rental_engines.charges import calculate_overdue_charges

    charges = calculate_overdue_charges(
        1000, due_date=date(2024, 3, 5), current_date=date(2024, 3, 6),
    )
    # OverdueCharges(fine=Decimal("20.00"), interest=Decimal("1.00"), days_past_due=1)
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal, InvalidOperation, localcontext

from rental_kernel.domain.clock import Clock, SystemClock
from rental_kernel.domain.dates import DateLike, whole_days_between
from rental_kernel.domain.entities import (
    OverdueCharges,
    Transaction,
    TransactionStatus,
)
from rental_kernel.domain.values import ZERO, Amount, round2, to_decimal
from rental_kernel.logging_config import get_logger
from rental_engines.tracer import traced_engine

logger = get_logger("engines.charges")

DEFAULT_FINE_RATE = Decimal("0.02")
DEFAULT_INTEREST_RATE = Decimal("0.001")

_NO_CHARGES = OverdueCharges(fine=ZERO, interest=ZERO, days_past_due=0)


def calculate_transaction_total(
    amount: Amount,
    discount: Amount = 0,
    fine: Amount = 0,
    interest: Amount = 0,
) -> Decimal:
    """
    Amount less discount plus fine and interest, rounded to cents.

    Non-finite components propagate: an infinite amount gives an infinite
    total, and infinities that cancel give NaN.
    """
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        total = (
            to_decimal(amount)
            - to_decimal(discount)
            + to_decimal(fine)
            + to_decimal(interest)
        )
    return round2(total)


def transaction_total(transaction: Transaction) -> Decimal:
    return calculate_transaction_total(
        transaction.amount,
        transaction.discount,
        transaction.fine,
        transaction.interest,
    )


@traced_engine(
    "charges", "1.0",
    fingerprint_fields=("original_amount", "due_date", "current_date", "fine_rate", "interest_rate"),
)
def calculate_overdue_charges(
    original_amount: Amount,
    due_date: DateLike,
    current_date: DateLike | None = None,
    fine_rate: Amount = DEFAULT_FINE_RATE,
    interest_rate: Amount = DEFAULT_INTEREST_RATE,
    clock: Clock | None = None,
) -> OverdueCharges:
    """
    Fine and interest owed on ``original_amount`` as of ``current_date``.

    Args:
        original_amount: The charge before discounts and penalties.
        due_date: When the charge was due.
        current_date: Reference instant; defaults to ``clock.now()``.
        fine_rate: Flat penalty rate (2% by default).
        interest_rate: Simple interest per day late (0.1% by default).
        clock: Time source used when ``current_date`` is omitted.

    Returns:
        OverdueCharges; all zero when the charge is not past due.
    """
    if current_date is None:
        current_date = (clock or SystemClock()).now()

    days_past_due = whole_days_between(due_date, current_date)
    if days_past_due <= 0:
        return _NO_CHARGES

    amount = to_decimal(original_amount)
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        fine = round2(amount * to_decimal(fine_rate))
        interest = round2(amount * to_decimal(interest_rate) * days_past_due)

    logger.debug("overdue_charges_calculated", extra={
        "original_amount": str(amount),
        "days_past_due": days_past_due,
        "fine": str(fine),
        "interest": str(interest),
    })
    return OverdueCharges(fine=fine, interest=interest, days_past_due=days_past_due)


def apply_overdue_charges(
    transaction: Transaction,
    current_date: DateLike | None = None,
    fine_rate: Amount = DEFAULT_FINE_RATE,
    interest_rate: Amount = DEFAULT_INTEREST_RATE,
    clock: Clock | None = None,
) -> Transaction:
    """
    Return a copy of ``transaction`` carrying its current fine and interest.

    Paid and cancelled transactions are returned unchanged; their charges
    were settled or waived when they left the open state.
    """
    if transaction.payment_date is not None:
        return transaction
    if transaction.status == TransactionStatus.CANCELLED:
        return transaction

    charges = calculate_overdue_charges(
        transaction.amount,
        transaction.due_date,
        current_date=current_date,
        fine_rate=fine_rate,
        interest_rate=interest_rate,
        clock=clock,
    )
    return replace(transaction, fine=charges.fine, interest=charges.interest)
