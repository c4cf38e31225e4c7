"""
Values -- Decimal helpers for monetary computations.

Responsibility:
    Converts caller-supplied numbers into ``Decimal`` and rounds them to
    currency minor units.  Every monetary figure produced by the engines
    passes through ``to_decimal`` on the way in and ``round2`` on the way
    out.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Decimal-only arithmetic: floats are converted through ``str`` so the
      decimal literal the caller wrote is preserved (1234.5 -> "1234.5").
    - Half-up rounding at the cent boundary; banker's rounding is never used.

Failure modes:
    - ValueError when a value cannot be interpreted as a number.
    - Non-finite input is not an error; infinities and NaN pass through
      ``round2`` unchanged.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

CENT = Decimal("0.01")
ZERO = Decimal("0")

Amount = Decimal | int | float | str


def to_decimal(value: Amount) -> Decimal:
    """
    Convert a number to ``Decimal``.

    Floats go through ``str`` first so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        ValueError: If the value is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e


def round2(value: Amount) -> Decimal:
    """
    Round to two decimal places, half away from zero.

    Infinities and NaN come back unchanged.  Precision grows with the
    magnitude so that very large amounts still quantize.
    """
    d = to_decimal(value)
    if not d.is_finite():
        return d
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() + 3)
        return d.quantize(CENT, rounding=ROUND_HALF_UP)
