"""
Module: rental_engines.units
Responsibility:
    Unit availability rules, unit form checks and occupancy statistics.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rental_kernel and sibling engine modules.

Invariants enforced:
    - Only AVAILABLE units can enter a lease.
    - OCCUPIED units cannot be deleted or moved to another status; the
      lease has to end first.
    - Unit codes are unique after normalization.
    - Rates and averages are rounded half-up to two places.

Failure modes:
    - UnitNotAvailableError from ``ensure_rentable``.
    - UnitStatusChangeError from ``check_status_change``.
    - ``validate_unit_data`` never raises; problems come back as messages.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Sequence

from rental_kernel.domain.entities import Unit, UnitStatus
from rental_kernel.domain.values import ZERO, round2, to_decimal
from rental_kernel.exceptions import (
    InvalidUnitCodeError,
    UnitNotAvailableError,
    UnitStatusChangeError,
)
from rental_kernel.logging_config import get_logger
from rental_engines.tracer import traced_engine
from rental_engines.validators import FormValidationResult, normalize_unit_code

logger = get_logger("engines.units")

# Unit form messages, keyed by field
UNIT_CODE_TAKEN_ERROR = "Código da unidade já existe"
FLOOR_ERROR = "Andar deve ser maior que 0"
AREA_ERROR = "Área deve ser maior que 0"
BEDROOMS_ERROR = "Número de quartos não pode ser negativo"
BATHROOMS_ERROR = "Deve haver pelo menos 1 banheiro"
RENT_ERROR = "Valor do aluguel deve ser maior que 0"
DEPOSIT_ERROR = "Valor do depósito não pode ser negativo"

_UNIT_FIELD_RULES: tuple[tuple[str, Callable[[Decimal], bool], str], ...] = (
    ("floor", lambda v: v >= 1, FLOOR_ERROR),
    ("area", lambda v: v > 0, AREA_ERROR),
    ("bedrooms", lambda v: v >= 0, BEDROOMS_ERROR),
    ("bathrooms", lambda v: v >= 1, BATHROOMS_ERROR),
    ("monthly_rent", lambda v: v > 0, RENT_ERROR),
    ("deposit", lambda v: v >= 0, DEPOSIT_ERROR),
)


def can_rent_unit(unit: Unit) -> bool:
    return unit.status == UnitStatus.AVAILABLE


def ensure_rentable(unit: Unit) -> Unit:
    """Return ``unit`` unchanged if it can be leased, else raise."""
    if not can_rent_unit(unit):
        raise UnitNotAvailableError(unit.code, unit.status.value)
    return unit


def can_delete_unit(unit: Unit) -> bool:
    return unit.status != UnitStatus.OCCUPIED


def check_status_change(unit: Unit, new_status: UnitStatus) -> None:
    """
    Raise if ``unit`` may not move to ``new_status``.

    Raises:
        UnitStatusChangeError: The unit is occupied and the new status is
            anything other than OCCUPIED.
    """
    if unit.status == UnitStatus.OCCUPIED and new_status != UnitStatus.OCCUPIED:
        logger.warning("unit_status_change_rejected", extra={
            "unit_code": unit.code,
            "requested_status": new_status.value,
        })
        raise UnitStatusChangeError(unit.code, unit.status.value, new_status.value)


def validate_unit_data(
    data: Mapping[str, Any],
    existing_units: Sequence[Unit] = (),
    unit_id: str | None = None,
) -> FormValidationResult:
    """
    Check a unit create/edit form.

    Args:
        data: Mapping with ``code``, ``floor``, ``area``, ``bedrooms``,
            ``bathrooms``, ``monthly_rent`` and ``deposit``.  Missing or
            ``None`` fields are not checked, so a partial update only
            validates what it changes.
        existing_units: Units already registered; their codes are stored
            normalized.
        unit_id: Id of the unit being edited; ``None`` when creating, in
            which case ``code`` is required.

    Returns:
        FormValidationResult with one message per failing field.
    """
    errors: dict[str, str] = {}

    code = data.get("code")
    if code or unit_id is None:
        try:
            normalized = normalize_unit_code(code or "")
        except InvalidUnitCodeError as exc:
            errors["code"] = str(exc)
        else:
            if any(u.code == normalized and u.id != unit_id for u in existing_units):
                errors["code"] = UNIT_CODE_TAKEN_ERROR

    for name, rule, message in _UNIT_FIELD_RULES:
        value = data.get(name)
        if value is None:
            continue
        try:
            accepted = rule(to_decimal(value))
        except (ValueError, InvalidOperation):
            accepted = False
        if not accepted:
            errors[name] = message

    if errors:
        logger.debug("unit_form_rejected", extra={"fields": sorted(errors)})
    return FormValidationResult(errors=errors)


@dataclass(frozen=True)
class UnitStats:
    """Occupancy snapshot over a set of units."""

    total: int
    by_status: dict[UnitStatus, int] = field(default_factory=dict)
    by_floor: dict[int, int] = field(default_factory=dict)
    occupancy_rate: Decimal = ZERO  # percent
    average_rent: Decimal = ZERO
    total_monthly_revenue: Decimal = ZERO


@traced_engine("units", "1.0", fingerprint_fields=("units",))
def calculate_unit_stats(units: Sequence[Unit]) -> UnitStats:
    """Counts by status and floor, occupancy rate and rent figures."""
    total = len(units)
    if total == 0:
        return UnitStats(total=0, by_status={s: 0 for s in UnitStatus})

    status_counts = Counter(u.status for u in units)
    by_status = {s: status_counts.get(s, 0) for s in UnitStatus}
    by_floor = dict(sorted(Counter(u.floor for u in units).items()))

    occupied = [u for u in units if u.status == UnitStatus.OCCUPIED]
    occupancy_rate = round2(Decimal(len(occupied)) * 100 / total)
    average_rent = round2(sum((u.monthly_rent for u in units), ZERO) / total)
    revenue = sum((u.monthly_rent for u in occupied), ZERO)

    return UnitStats(
        total=total,
        by_status=by_status,
        by_floor=by_floor,
        occupancy_rate=occupancy_rate,
        average_rent=average_rent,
        total_monthly_revenue=revenue,
    )
