"""
Entities -- plain data snapshots of units, leases and transactions.

Responsibility:
    Defines the enums and frozen dataclasses that the rule engines read and
    return.  Persistence and identity management belong to the surrounding
    application; these are read-only snapshots.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Monetary fields are always ``Decimal`` (converted in ``__post_init__``).
    - Lease ``monthly_rent`` > 0 and ``end_date`` >= ``start_date``.
    - Transaction amounts are not sign-checked here; forms and the
      persistence layer own that (``amount`` > 0, the rest >= 0).
    - Instances are frozen; derived versions are built with
      ``dataclasses.replace``.

Failure modes:
    - ValueError on non-numeric amounts, an empty transaction id, or an
      invalid lease.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from rental_kernel.domain.values import ZERO, to_decimal


class TransactionType(str, Enum):
    """Kinds of charges billed against a lease."""

    RENT = "RENT"
    DEPOSIT = "DEPOSIT"
    UTILITY = "UTILITY"
    MAINTENANCE = "MAINTENANCE"
    FEE = "FEE"
    FINE = "FINE"
    OTHER = "OTHER"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class LeaseStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"


class UnitStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"
    RESERVED = "RESERVED"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"
    PIX = "PIX"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"


def _coerce_money(instance: Any, *names: str) -> None:
    for name in names:
        object.__setattr__(instance, name, to_decimal(getattr(instance, name)))


@dataclass(frozen=True)
class TransactionDraft:
    """
    A transaction that has not been assigned an id yet.

    Contract:
        Produced by the recurring rent generator and by forms; the caller
        persists it and receives an id back.
    Guarantees:
        - Monetary fields are Decimal.
        - ``metadata`` is a private copy of what the caller passed in.
    """

    lease_id: str
    type: TransactionType
    description: str
    amount: Decimal
    due_date: date | datetime
    discount: Decimal = ZERO
    fine: Decimal = ZERO
    interest: Decimal = ZERO
    status: TransactionStatus = TransactionStatus.PENDING
    payment_date: date | datetime | None = None
    payment_method: PaymentMethod | None = None
    created_by: str = "system"
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _coerce_money(self, "amount", "discount", "fine", "interest")
        object.__setattr__(self, "metadata", dict(self.metadata))


@dataclass(frozen=True)
class Transaction(TransactionDraft):
    """A persisted transaction snapshot."""

    id: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.id:
            raise ValueError("Transaction requires an id")


@dataclass(frozen=True)
class Unit:
    """
    A rentable unit.

    ``code`` is stored in normalized form ("10A"); normalization itself is
    a validator concern and is not repeated here.
    """

    id: str
    code: str
    status: UnitStatus = UnitStatus.AVAILABLE
    floor: int = 1
    monthly_rent: Decimal = ZERO

    def __post_init__(self) -> None:
        _coerce_money(self, "monthly_rent")


@dataclass(frozen=True)
class Lease:
    """A lease over a unit.  Its status is always derived from dates."""

    id: str
    start_date: date | datetime
    end_date: date | datetime
    monthly_rent: Decimal
    unit_id: str | None = None

    def __post_init__(self) -> None:
        _coerce_money(self, "monthly_rent")
        if self.monthly_rent <= 0:
            raise ValueError("monthly_rent must be positive")
        if _date_part(self.end_date) < _date_part(self.start_date):
            raise ValueError("end_date cannot be before start_date")


@dataclass(frozen=True)
class OverdueCharges:
    """Fine, interest and elapsed days for a late transaction."""

    fine: Decimal
    interest: Decimal
    days_past_due: int

    @property
    def total(self) -> Decimal:
        return self.fine + self.interest


def _date_part(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value
