"""
BillingService -- clock- and policy-bound facade over the rule engines.

Responsibility:
    Binds one ``Clock`` and one ``BillingPolicy`` and exposes the engines
    without "now" or rate arguments, so UI adapters and schedulers never
    read wall-clock time or YAML themselves.

Architecture position:
    Services -- imperative shell.  Imports rental_config, rental_engines
    and rental_kernel.  Holds no mutable state beyond its constructor
    arguments; safe to share across threads.

Failure modes:
    - Propagates engine exceptions unchanged.
    - FileNotFoundError / ValueError from ``get_active_policy`` when no
      policy is injected and the default file is missing or invalid.
"""

from __future__ import annotations

from typing import Sequence

from rental_config import BillingPolicy, get_active_policy
from rental_engines.charges import apply_overdue_charges, calculate_overdue_charges
from rental_engines.recurring import generate_next_rent_payment
from rental_engines.status import (
    get_lease_status,
    is_lease_expiring_soon,
    resolve_transaction,
)
from rental_engines.summary import FinancialSummary, summarize_transactions
from rental_kernel.domain.clock import Clock, SystemClock
from rental_kernel.domain.entities import (
    Lease,
    LeaseStatus,
    OverdueCharges,
    Transaction,
    TransactionDraft,
)
from rental_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.billing")


class BillingService:
    """
    Billing rules evaluated against an injected clock and policy.

    Contract:
        Every method reads "now" from ``self._clock`` exactly once and
        returns new values; inputs are never mutated.
    """

    def __init__(self, clock: Clock | None = None, policy: BillingPolicy | None = None):
        self._clock = clock or SystemClock()
        self._policy = policy or get_active_policy()

    @property
    def policy(self) -> BillingPolicy:
        return self._policy

    def overdue_charges(self, transaction: TransactionDraft) -> OverdueCharges:
        return calculate_overdue_charges(
            transaction.amount,
            transaction.due_date,
            current_date=self._clock.now(),
            fine_rate=self._policy.fine_rate,
            interest_rate=self._policy.interest_rate,
        )

    def refresh_transaction(self, transaction: Transaction) -> Transaction:
        """Recompute status, fine and interest for a stored transaction."""
        now = self._clock.now()
        with LogContext.bind(transaction_id=transaction.id, lease_id=transaction.lease_id):
            charged = apply_overdue_charges(
                transaction,
                current_date=now,
                fine_rate=self._policy.fine_rate,
                interest_rate=self._policy.interest_rate,
            )
            refreshed = resolve_transaction(charged, current_date=now)
            if refreshed != transaction:
                logger.info("transaction_refreshed", extra={
                    "status": refreshed.status.value,
                    "fine": str(refreshed.fine),
                    "interest": str(refreshed.interest),
                })
        return refreshed

    def lease_status(self, lease: Lease) -> LeaseStatus:
        return get_lease_status(lease.start_date, lease.end_date, current_date=self._clock.now())

    def is_lease_expiring_soon(self, lease: Lease) -> bool:
        return is_lease_expiring_soon(
            lease.end_date,
            self._policy.lease_warning_days,
            now=self._clock.now(),
        )

    def expiring_leases(self, leases: Sequence[Lease]) -> list[Lease]:
        """Active leases inside the policy's warning window, soonest first."""
        now = self._clock.now()
        expiring = [
            lease for lease in leases
            if get_lease_status(lease.start_date, lease.end_date, current_date=now)
            == LeaseStatus.ACTIVE
            and is_lease_expiring_soon(lease.end_date, self._policy.lease_warning_days, now=now)
        ]
        return sorted(expiring, key=lambda lease: lease.end_date)

    def next_rent_payment(self, lease: Lease) -> TransactionDraft:
        with LogContext.bind(lease_id=lease.id):
            return generate_next_rent_payment(
                lease.id,
                lease.monthly_rent,
                due_day=self._policy.due_day,
                clock=self._clock,
            )

    def financial_summary(self, transactions: Sequence[TransactionDraft]) -> FinancialSummary:
        return summarize_transactions(transactions, as_of=self._clock.now())
