"""
Pure domain layer.

Immutable snapshots and helpers with NO dependencies on:
- Persistence
- Wall-clock time (except through an injected Clock)
- I/O
"""

from rental_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from rental_kernel.domain.dates import (
    BUSINESS_TIMEZONE,
    align_instants,
    as_instant,
    to_business_time,
    whole_days_between,
)
from rental_kernel.domain.entities import (
    Lease,
    LeaseStatus,
    OverdueCharges,
    PaymentMethod,
    Transaction,
    TransactionDraft,
    TransactionStatus,
    TransactionType,
    Unit,
    UnitStatus,
)
from rental_kernel.domain.values import CENT, ZERO, round2, to_decimal

__all__ = [
    # Clock
    "Clock",
    "DeterministicClock",
    "SystemClock",
    # Dates
    "BUSINESS_TIMEZONE",
    "align_instants",
    "as_instant",
    "to_business_time",
    "whole_days_between",
    # Entities
    "Lease",
    "LeaseStatus",
    "OverdueCharges",
    "PaymentMethod",
    "Transaction",
    "TransactionDraft",
    "TransactionStatus",
    "TransactionType",
    "Unit",
    "UnitStatus",
    # Values
    "CENT",
    "ZERO",
    "round2",
    "to_decimal",
]
