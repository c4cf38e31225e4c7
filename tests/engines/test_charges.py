"""
Tests for transaction totals and overdue charges.

Covers:
- Total = amount - discount + fine + interest
- Fine and simple daily interest on late charges
- Due-date boundary
- Applying charges to stored transactions
- Rounding stability (property-based)
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from hypothesis import given, settings, strategies as st

from rental_engines.charges import (
    apply_overdue_charges,
    calculate_overdue_charges,
    calculate_transaction_total,
    transaction_total,
)
from rental_kernel.domain.entities import (
    PaymentMethod,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from rental_kernel.domain.values import round2

DUE = date(2024, 3, 5)


def _transaction(**overrides):
    fields = dict(
        id="tx-1",
        lease_id="lease-1",
        type=TransactionType.RENT,
        description="Aluguel março de 2024",
        amount=Decimal("1000"),
        due_date=DUE,
    )
    fields.update(overrides)
    return Transaction(**fields)


class TestTransactionTotal:
    """Totals are rounded to cents and never clamped."""

    def test_all_components(self):
        assert calculate_transaction_total(1000, 100, 20, 10) == Decimal("930.00")

    def test_amount_only(self):
        assert calculate_transaction_total("1234.5") == Decimal("1234.50")

    def test_negative_total_preserved(self):
        """A discount larger than the charge yields a negative total."""
        assert calculate_transaction_total(100, 150) == Decimal("-50.00")

    def test_float_components(self):
        assert calculate_transaction_total(0.1, 0, 0.2) == Decimal("0.30")

    def test_transaction_total(self):
        tx = _transaction(discount=Decimal("50"), fine=Decimal("20"), interest=Decimal("1.5"))

        assert transaction_total(tx) == Decimal("971.50")

    def test_infinite_amount_propagates(self):
        assert calculate_transaction_total(float("inf")) == Decimal("Infinity")
        assert calculate_transaction_total(100, float("inf")) == Decimal("-Infinity")

    def test_cancelling_infinities_give_nan(self):
        assert calculate_transaction_total(float("inf"), float("inf")).is_nan()

    def test_amount_beyond_default_precision(self):
        assert calculate_transaction_total(1e27) == Decimal("1000000000000000000000000000.00")

    @given(
        st.decimals(min_value=0, max_value=10**7, places=2),
        st.decimals(min_value=0, max_value=10**7, places=2),
        st.decimals(min_value=0, max_value=10**7, places=2),
        st.decimals(min_value=0, max_value=10**7, places=2),
    )
    @settings(max_examples=200)
    def test_total_matches_formula(self, amount, discount, fine, interest):
        """Total is the rounded signed sum of its components."""
        total = calculate_transaction_total(amount, discount, fine, interest)

        assert total == round2(amount - discount + fine + interest)
        assert round2(total) == total


class TestOverdueCharges:
    """Flat fine plus simple daily interest."""

    def test_due_today_accrues_nothing(self):
        charges = calculate_overdue_charges(1000, DUE, current_date=DUE)

        assert charges.fine == Decimal("0")
        assert charges.interest == Decimal("0")
        assert charges.days_past_due == 0

    def test_one_day_late(self):
        charges = calculate_overdue_charges(1000, DUE, current_date=DUE + timedelta(days=1))

        assert charges.days_past_due == 1
        assert charges.fine == Decimal("20.00")
        assert charges.interest == Decimal("1.00")

    def test_ten_days_late(self):
        charges = calculate_overdue_charges(1000, DUE, current_date=date(2024, 3, 15))

        assert charges.days_past_due == 10
        assert charges.fine == Decimal("20.00")
        assert charges.interest == Decimal("10.00")
        assert charges.total == Decimal("30.00")

    def test_not_yet_due(self):
        charges = calculate_overdue_charges(1000, DUE, current_date=date(2024, 3, 1))

        assert charges.total == Decimal("0")
        assert charges.days_past_due == 0

    def test_partial_day_rounds_down(self):
        """23 hours after the due date is not a full day."""
        charges = calculate_overdue_charges(1000, DUE, current_date=datetime(2024, 3, 5, 23, 0))

        assert charges.days_past_due == 0

    def test_utc_reading_counts_local_days(self):
        """01:00Z on the 6th is 22:00 on the 5th locally, so not a full day late."""
        utc_now = datetime(2024, 3, 6, 1, 0, tzinfo=timezone.utc)

        charges = calculate_overdue_charges(1000, DUE, current_date=utc_now)

        assert charges.days_past_due == 0
        assert charges.total == Decimal("0")

    def test_custom_rates(self):
        charges = calculate_overdue_charges(
            500, DUE, current_date=date(2024, 3, 7), fine_rate="0.10", interest_rate="0.01",
        )

        assert charges.fine == Decimal("50.00")
        assert charges.interest == Decimal("10.00")

    def test_rounding_half_up(self):
        """6.6666 -> 6.67; 0.33333 -> 0.33."""
        charges = calculate_overdue_charges("333.33", DUE, current_date=date(2024, 3, 6))

        assert charges.fine == Decimal("6.67")
        assert charges.interest == Decimal("0.33")

    def test_uses_clock_when_no_date(self, deterministic_clock):
        """Clock reads 2024-03-06 10:00 local; 1 whole day since the due date."""
        charges = calculate_overdue_charges(1000, DUE, clock=deterministic_clock)

        assert charges.days_past_due == 1

    def test_emits_engine_trace(self, captured_logs):
        calculate_overdue_charges(1000, DUE, current_date=date(2024, 3, 15))

        traces = [r for r in captured_logs() if r["message"] == "RENTAL_ENGINE_TRACE"]

        assert traces
        assert traces[-1]["engine_name"] == "charges"
        assert len(traces[-1]["input_fingerprint"]) == 16

    @given(
        st.decimals(min_value=0, max_value=10**6, places=2),
        st.integers(min_value=1, max_value=3650),
    )
    @settings(max_examples=200)
    def test_charges_are_cents_and_monotonic(self, amount, days):
        """Charges are whole cents and never shrink as more days pass."""
        today = calculate_overdue_charges(amount, DUE, current_date=DUE + timedelta(days=days))
        tomorrow = calculate_overdue_charges(amount, DUE, current_date=DUE + timedelta(days=days + 1))

        assert today.days_past_due == days
        assert round2(today.fine) == today.fine
        assert round2(today.interest) == today.interest
        assert tomorrow.total >= today.total


class TestApplyOverdueCharges:
    """Stored transactions get their charges refreshed."""

    def test_open_transaction_charged(self):
        tx = _transaction()

        charged = apply_overdue_charges(tx, current_date=date(2024, 3, 15))

        assert charged.fine == Decimal("20.00")
        assert charged.interest == Decimal("10.00")
        assert tx.fine == Decimal("0")

    def test_paid_transaction_unchanged(self):
        tx = _transaction(payment_date=date(2024, 3, 10), payment_method=PaymentMethod.PIX)

        assert apply_overdue_charges(tx, current_date=date(2024, 3, 15)) is tx

    def test_cancelled_transaction_unchanged(self):
        tx = _transaction(status=TransactionStatus.CANCELLED)

        assert apply_overdue_charges(tx, current_date=date(2024, 3, 15)) is tx

    @pytest.mark.parametrize("current", [DUE, date(2024, 3, 1)])
    def test_not_overdue_has_zero_charges(self, current):
        charged = apply_overdue_charges(_transaction(), current_date=current)

        assert charged.fine == Decimal("0")
        assert charged.interest == Decimal("0")
