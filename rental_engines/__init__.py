"""
Module: rental_engines
Responsibility:
    Package entrypoint that re-exports all public symbols from the pure
    rule engine sub-modules.  This is the canonical import surface for
    higher layers (rental_services, UI adapters).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rental_kernel (and sibling engine modules).
    MUST NOT import rental_config or rental_services.

Invariants enforced:
    - Time is read only through an injected ``Clock`` (or the explicit
      ``current_date``/``now`` arguments); tests always pass one.
    - Decimal-only arithmetic: monetary inputs are converted to ``Decimal``
      and results are rounded half-up to cents.
    - Determinism: identical inputs always produce identical outputs.
    - No function mutates its arguments.

Failure modes:
    - InvalidUnitCodeError from ``normalize_unit_code``.
    - UnitNotAvailableError / UnitStatusChangeError from the unit guards.
    - Every other function is total.

Usage:
    from rental_engines import (
        calculate_overdue_charges,
        get_transaction_status,
        generate_next_rent_payment,
        format_currency,
    )
"""

from rental_kernel.logging_config import get_logger

logger = get_logger("engines")

from rental_engines.charges import (
    DEFAULT_FINE_RATE,
    DEFAULT_INTEREST_RATE,
    apply_overdue_charges,
    calculate_overdue_charges,
    calculate_transaction_total,
    transaction_total,
)
from rental_engines.formatters import (
    format_compact_number,
    format_cpf,
    format_currency,
    format_date,
    format_datetime,
    format_endpoint,
    format_phone,
    format_time_ago,
    mask_cpf,
    mask_phone,
    mask_sensitive_data,
    status_label,
    truncate_text,
)
from rental_engines.recurring import (
    DEFAULT_DUE_DAY,
    generate_next_rent_payment,
    generate_payment_reference,
    next_due_date,
    rent_description,
)
from rental_engines.status import (
    DEFAULT_WARNING_DAYS,
    get_lease_status,
    get_transaction_status,
    is_lease_expiring_soon,
    resolve_transaction,
)
from rental_engines.summary import (
    FinancialSummary,
    LeaseSummary,
    summarize_leases,
    summarize_transactions,
)
from rental_engines.units import (
    UnitStats,
    calculate_unit_stats,
    can_delete_unit,
    can_rent_unit,
    check_status_change,
    ensure_rentable,
    validate_unit_data,
)
from rental_engines.validators import (
    FormValidationResult,
    clean_digits,
    is_valid_cpf,
    is_valid_email,
    is_valid_name,
    is_valid_phone,
    is_valid_unit_code,
    normalize_unit_code,
    validate_password,
    validate_resident_form,
)

__all__ = [
    # Validators
    "FormValidationResult",
    "clean_digits",
    "is_valid_cpf",
    "is_valid_email",
    "is_valid_name",
    "is_valid_phone",
    "is_valid_unit_code",
    "normalize_unit_code",
    "validate_password",
    "validate_resident_form",
    # Formatters
    "format_compact_number",
    "format_cpf",
    "format_currency",
    "format_date",
    "format_datetime",
    "format_endpoint",
    "format_phone",
    "format_time_ago",
    "mask_cpf",
    "mask_phone",
    "mask_sensitive_data",
    "status_label",
    "truncate_text",
    # Charges
    "DEFAULT_FINE_RATE",
    "DEFAULT_INTEREST_RATE",
    "apply_overdue_charges",
    "calculate_overdue_charges",
    "calculate_transaction_total",
    "transaction_total",
    # Status
    "DEFAULT_WARNING_DAYS",
    "get_lease_status",
    "get_transaction_status",
    "is_lease_expiring_soon",
    "resolve_transaction",
    # Recurring
    "DEFAULT_DUE_DAY",
    "generate_next_rent_payment",
    "generate_payment_reference",
    "next_due_date",
    "rent_description",
    # Units
    "UnitStats",
    "calculate_unit_stats",
    "can_delete_unit",
    "can_rent_unit",
    "check_status_change",
    "ensure_rentable",
    "validate_unit_data",
    # Summary
    "FinancialSummary",
    "LeaseSummary",
    "summarize_leases",
    "summarize_transactions",
]

logger.debug("engines_package_loaded", extra={
    "module_count": 7,
    "modules": [
        "validators", "formatters", "charges", "status",
        "recurring", "units", "summary",
    ],
})
