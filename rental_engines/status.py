"""
Module: rental_engines.status
Responsibility:
    Derive transaction and lease status from dates.  Stored status values
    are treated as hints; these functions are the source of truth when a
    status needs recomputing.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rental_kernel.

Invariants enforced:
    - Transaction priority: payment date -> PAID, explicit cancellation ->
      CANCELLED, past due -> OVERDUE, otherwise PENDING.  A paid
      transaction is never reported overdue.
    - Lease boundaries are inclusive: a lease is ACTIVE on its start date
      and on its end date.
    - Nothing is persisted; callers decide whether to store a recomputed
      status.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

from rental_kernel.domain.clock import Clock, SystemClock
from rental_kernel.domain.dates import DateLike, align_instants
from rental_kernel.domain.entities import (
    LeaseStatus,
    TransactionDraft,
    TransactionStatus,
)
from rental_kernel.logging_config import get_logger
from rental_engines.tracer import traced_engine

logger = get_logger("engines.status")

DEFAULT_WARNING_DAYS = 30


def _reference(current_date: DateLike | None, clock: Clock | None) -> DateLike:
    if current_date is not None:
        return current_date
    return (clock or SystemClock()).now()


@traced_engine("status", "1.0", fingerprint_fields=("transaction", "current_date"))
def get_transaction_status(
    transaction: TransactionDraft,
    current_date: DateLike | None = None,
    clock: Clock | None = None,
) -> TransactionStatus:
    """Resolve the status of a transaction as of ``current_date``."""
    if transaction.payment_date is not None:
        return TransactionStatus.PAID

    if transaction.status == TransactionStatus.CANCELLED:
        return TransactionStatus.CANCELLED

    current, due = align_instants(_reference(current_date, clock), transaction.due_date)
    if current > due:
        return TransactionStatus.OVERDUE

    return TransactionStatus.PENDING


def resolve_transaction(
    transaction: TransactionDraft,
    current_date: DateLike | None = None,
    clock: Clock | None = None,
) -> TransactionDraft:
    """Return a copy of ``transaction`` carrying its derived status."""
    status = get_transaction_status(transaction, current_date=current_date, clock=clock)
    if status == transaction.status:
        return transaction
    logger.debug("transaction_status_changed", extra={
        "from_status": transaction.status.value,
        "to_status": status.value,
    })
    return replace(transaction, status=status)


@traced_engine("status", "1.0", fingerprint_fields=("start_date", "end_date", "current_date"))
def get_lease_status(
    start_date: DateLike,
    end_date: DateLike,
    current_date: DateLike | None = None,
    clock: Clock | None = None,
) -> LeaseStatus:
    """PENDING before ``start_date``, EXPIRED after ``end_date``, else ACTIVE."""
    current, start, end = align_instants(
        _reference(current_date, clock), start_date, end_date,
    )
    if current < start:
        return LeaseStatus.PENDING
    if current > end:
        return LeaseStatus.EXPIRED
    return LeaseStatus.ACTIVE


def is_lease_expiring_soon(
    end_date: DateLike,
    warning_days: int = DEFAULT_WARNING_DAYS,
    now: DateLike | None = None,
    clock: Clock | None = None,
) -> bool:
    """True iff ``now`` lies within ``warning_days`` before ``end_date``, inclusive."""
    current, end = align_instants(_reference(now, clock), end_date)
    warning_start = end - timedelta(days=warning_days)
    return warning_start <= current <= end
