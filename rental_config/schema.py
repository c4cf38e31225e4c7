"""
BillingPolicy schema.

The human-authored billing policy for a building: penalty rates, the rent
due day, how early lease expirations are flagged, and the billing
currency.  YAML files under ``rental_config/sets/`` are parsed into this
type by the loader.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BillingPolicy:
    """
    Rates and calendar rules applied to every lease in a building.

    Guarantees (enforced by ``validate_policy``):
        - ``fine_rate`` and ``interest_rate`` are in [0, 1].
        - ``due_day`` is in 1..31.
        - ``lease_warning_days`` >= 0.
    """

    name: str
    fine_rate: Decimal = Decimal("0.02")
    interest_rate: Decimal = Decimal("0.001")  # per day
    due_day: int = 5
    lease_warning_days: int = 30
    currency: str = "BRL"
    version: int = 1
    checksum: str = ""
