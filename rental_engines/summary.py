"""
Module: rental_engines.summary
Responsibility:
    Roll transactions and leases up into the figures shown on the
    administrator dashboard: amounts per derived status, collection rate,
    and lease counts including those about to expire.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Composes ``rental_engines.status`` and ``rental_engines.charges``.

Invariants enforced:
    - Status is always re-derived through ``get_transaction_status``;
      stored status values are not trusted.
    - Amounts are transaction totals (see ``calculate_transaction_total``).
    - Cancelled transactions are excluded from the collection rate.
    - Deterministic for identical inputs; ``as_of`` is required.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

from rental_kernel.domain.dates import DateLike
from rental_kernel.domain.entities import (
    Lease,
    LeaseStatus,
    TransactionDraft,
    TransactionStatus,
)
from rental_kernel.domain.values import ZERO, round2
from rental_kernel.logging_config import get_logger
from rental_engines.charges import calculate_transaction_total
from rental_engines.status import (
    DEFAULT_WARNING_DAYS,
    get_lease_status,
    get_transaction_status,
    is_lease_expiring_soon,
)
from rental_engines.tracer import traced_engine

logger = get_logger("engines.summary")


@dataclass(frozen=True)
class FinancialSummary:
    """
    Transaction totals grouped by derived status.

    Guarantees:
        - ``counts`` and ``totals`` have an entry for every TransactionStatus.
        - ``collection_rate`` is a percentage in [0, 100] when all totals
          are non-negative.
    """

    as_of: DateLike
    counts: dict[TransactionStatus, int] = field(default_factory=dict)
    totals: dict[TransactionStatus, Decimal] = field(default_factory=dict)

    @property
    def paid_amount(self) -> Decimal:
        return self.totals.get(TransactionStatus.PAID, ZERO)

    @property
    def pending_amount(self) -> Decimal:
        return self.totals.get(TransactionStatus.PENDING, ZERO)

    @property
    def overdue_amount(self) -> Decimal:
        return self.totals.get(TransactionStatus.OVERDUE, ZERO)

    @property
    def collection_rate(self) -> Decimal:
        """Paid share of everything billed and not cancelled, in percent."""
        billed = self.paid_amount + self.pending_amount + self.overdue_amount
        if billed == 0:
            return ZERO
        return round2(self.paid_amount * 100 / billed)


@dataclass(frozen=True)
class LeaseSummary:
    as_of: DateLike
    active: int = 0
    pending: int = 0
    expired: int = 0
    expiring: int = 0


@traced_engine("summary", "1.0", fingerprint_fields=("transactions", "as_of"))
def summarize_transactions(
    transactions: Sequence[TransactionDraft],
    as_of: DateLike,
) -> FinancialSummary:
    """Group transaction totals by the status each one has as of ``as_of``."""
    counts = {s: 0 for s in TransactionStatus}
    totals = {s: ZERO for s in TransactionStatus}

    for tx in transactions:
        status = get_transaction_status(tx, current_date=as_of)
        counts[status] += 1
        totals[status] += calculate_transaction_total(
            tx.amount, tx.discount, tx.fine, tx.interest,
        )

    summary = FinancialSummary(as_of=as_of, counts=counts, totals=totals)
    logger.info("financial_summary_computed", extra={
        "transaction_count": len(transactions),
        "overdue_count": counts[TransactionStatus.OVERDUE],
        "collection_rate": str(summary.collection_rate),
    })
    return summary


@traced_engine("summary", "1.0", fingerprint_fields=("leases", "as_of", "warning_days"))
def summarize_leases(
    leases: Sequence[Lease],
    as_of: DateLike,
    warning_days: int = DEFAULT_WARNING_DAYS,
) -> LeaseSummary:
    """
    Count leases per derived status.

    ``expiring`` counts active leases whose end date falls within
    ``warning_days``; they are also counted in ``active``.
    """
    active = pending = expired = expiring = 0
    for lease in leases:
        status = get_lease_status(lease.start_date, lease.end_date, current_date=as_of)
        if status == LeaseStatus.PENDING:
            pending += 1
        elif status == LeaseStatus.EXPIRED:
            expired += 1
        else:
            active += 1
            if is_lease_expiring_soon(lease.end_date, warning_days, now=as_of):
                expiring += 1

    return LeaseSummary(
        as_of=as_of,
        active=active,
        pending=pending,
        expired=expired,
        expiring=expiring,
    )
