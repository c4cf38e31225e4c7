"""
Tests for domain entities.
"""

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from rental_kernel.domain.entities import (
    Lease,
    OverdueCharges,
    Transaction,
    TransactionDraft,
    TransactionStatus,
    TransactionType,
    Unit,
)


def _draft(**overrides):
    fields = dict(
        lease_id="lease-1",
        type=TransactionType.RENT,
        description="Aluguel março de 2024",
        amount=1000,
        due_date=date(2024, 3, 5),
    )
    fields.update(overrides)
    return TransactionDraft(**fields)


class TestTransactionDraft:
    """Drafts coerce money to Decimal and are immutable."""

    def test_money_coerced(self):
        draft = _draft(amount=1234.5, discount="10")

        assert draft.amount == Decimal("1234.5")
        assert draft.discount == Decimal("10")
        assert draft.fine == Decimal("0")

    def test_defaults(self):
        draft = _draft()

        assert draft.status == TransactionStatus.PENDING
        assert draft.created_by == "system"
        assert draft.payment_date is None

    def test_frozen(self):
        draft = _draft()

        with pytest.raises(FrozenInstanceError):
            draft.amount = Decimal("1")

    def test_metadata_copied(self):
        """The caller's dict is not shared with the draft."""
        metadata = {"recurringId": "rent_1"}
        draft = _draft(metadata=metadata)
        metadata["other"] = "x"

        assert draft.metadata == {"recurringId": "rent_1"}


class TestTransaction:

    def test_requires_id(self):
        with pytest.raises(ValueError):
            Transaction(
                lease_id="lease-1",
                type=TransactionType.RENT,
                description="x",
                amount=1,
                due_date=date(2024, 3, 5),
            )

    def test_with_id(self):
        tx = Transaction(
            id="tx-1",
            lease_id="lease-1",
            type=TransactionType.FEE,
            description="Taxa",
            amount=50,
            due_date=date(2024, 3, 5),
        )

        assert tx.id == "tx-1"
        assert isinstance(tx, TransactionDraft)


class TestLease:
    """Leases validate rent and date order."""

    def test_rent_must_be_positive(self):
        with pytest.raises(ValueError):
            Lease(id="l", start_date=date(2024, 1, 1), end_date=date(2024, 12, 31), monthly_rent=0)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            Lease(id="l", start_date=date(2024, 2, 1), end_date=date(2024, 1, 31), monthly_rent=900)

    def test_single_day_lease_allowed(self):
        lease = Lease(id="l", start_date=date(2024, 2, 1), end_date=date(2024, 2, 1), monthly_rent=900)

        assert lease.monthly_rent == Decimal("900")


class TestUnitAndCharges:

    def test_unit_rent_coerced(self):
        unit = Unit(id="u1", code="10A", monthly_rent="850.00")

        assert unit.monthly_rent == Decimal("850.00")

    def test_overdue_total(self):
        charges = OverdueCharges(fine=Decimal("20.00"), interest=Decimal("10.00"), days_past_due=10)

        assert charges.total == Decimal("30.00")
